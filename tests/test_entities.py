import pygame
import pytest

from munchies.entities import Body, Obstacle, Player, obstacle_bounds
from munchies.geometry import Bounds, Screen

SCREEN = Screen.from_size(1000, 800)


def make_player(width=20, height=20, images=None, x=0, y=0):
    images = images if images is not None else [pygame.Surface((4, 4)) for _ in range(5)]
    return Player(
        image=images[0] if images else None,
        images=images,
        x=x,
        y=y,
        width=width,
        height=height,
        speed=width,
        bounds=SCREEN,
    )


def make_obstacle(x=0, y=0, width=10, height=10, kind="food"):
    return Obstacle(
        type=kind,
        image=pygame.Surface((4, 4)),
        x=x,
        y=y,
        width=width,
        height=height,
        speed=5,
        bounds=obstacle_bounds(SCREEN),
    )


def test_radius_follows_size():
    body = Body(0, 0, 20, 40)
    assert body.radius == 15
    body.width = 40
    assert body.radius == 20
    assert body.center == (20, 20)


def test_move_scales_by_speed_and_clamps():
    body = Body(100, 100, 10, 10, speed=5, bounds=Bounds(top=0, right=200, left=0, bottom=200))
    body.move(1, 0, 2)
    assert (body.x, body.y) == (110, 100)
    body.move(0, 100, 1)
    assert body.y == 190  # clamped to bottom - height
    body.move(-100, 0, 1)
    assert body.x == 0


def test_move_with_zero_scale_keeps_position():
    body = Body(5, 5, 10, 10, speed=3, bounds=SCREEN)
    body.move(1, 1, 0)
    assert (body.x, body.y) == (5, 5)


def test_move_to_is_clamped():
    body = Body(0, 0, 10, 10, bounds=SCREEN)
    body.move_to(y=SCREEN.bottom)
    assert body.y == SCREEN.bottom - 10


def test_obstacles_may_start_above_screen():
    ob = make_obstacle(y=-200)
    ob.body.move(0, 0, 1)
    assert ob.body.y == -200


def test_collides_with_inside():
    player = make_player(width=20, height=20)  # radius 10
    ob = make_obstacle(x=5, y=5)  # radius 5, same center
    assert ob.collides_with(player)


def test_collides_with_boundary_is_not_a_collision():
    player = make_player(width=20, height=20, x=0, y=0)  # center (10, 10)
    ob = make_obstacle(x=20, y=5)  # center (25, 10), distance 15 == 10 + 5
    assert not ob.collides_with(player)
    ob.body.x = 19.9
    assert ob.collides_with(player)


def test_collisions_with_mapping():
    ob = make_obstacle(x=0, y=0)
    far = make_obstacle(x=500, y=500)
    near = make_obstacle(x=2, y=2)
    assert ob.collisions_with({"far": far, "near": near})
    assert not ob.collisions_with({"far": far})
    assert not ob.collisions_with({})


def test_munch_counts():
    ob = make_obstacle()
    ob.munch()
    ob.munch()
    assert ob.munches == 2


def test_eat_then_blaze_restores_original_size():
    p = make_player(width=30, height=24)
    for _ in range(7):
        p.eat()
    assert (p.body.width, p.body.height) == (37, 31)
    assert p.body.radius == (37 + 31) / 4
    p.blaze()
    assert (p.body.width, p.body.height) == (30, 24)
    assert p.body.radius == (30 + 24) / 4


@pytest.mark.parametrize(
    "width,expected",
    [
        (1, 0),  # tiny -> first sprite, never negative index
        (100, 0),  # 100/500*5 = 1 -> index 0
        (250, 2),  # 2.5 rounds half-up to 3 -> index 2
        (400, 3),
        (500, 4),
        (5000, 4),  # clamped to the last sprite
    ],
)
def test_sprite_index_tracks_width(width, expected):
    images = [pygame.Surface((i + 1, i + 1)) for i in range(5)]
    p = make_player(width=width, height=width, images=images)
    p.update()
    assert p.image is images[expected]


def test_sprite_advances_monotonically_while_eating():
    images = [pygame.Surface((i + 1, i + 1)) for i in range(5)]
    p = make_player(width=50, height=50, images=images)
    seen = []
    for _ in range(500):
        p.eat()
        seen.append(images.index(p.image))
    assert seen == sorted(seen)
    assert seen[-1] == 4


def test_draw_blits():
    surface = pygame.Surface((100, 100))
    p = make_player(width=20, height=20, x=10, y=10)
    p.draw(surface)
    ob = make_obstacle(x=40, y=40)
    ob.draw(surface)
