import math

import pygame
import pytest

from munchies.geometry import (
    Screen,
    bounded,
    fit_size,
    get_distance,
    hash_code,
    pick_from_list,
    random_between,
    value_or_range,
)


def test_value_or_range_scalar_passthrough():
    assert value_or_range(7) == 7
    assert value_or_range("x") == "x"
    assert value_or_range(None) is None


def test_value_or_range_samples_inside_range():
    for _ in range(200):
        v = value_or_range([-5, 5])
        assert -5 <= v <= 5


def test_random_between_integer_inclusive():
    seen = {random_between(0, 3, integer=True) for _ in range(300)}
    assert seen == {0, 1, 2, 3}
    assert all(isinstance(v, int) for v in seen)


def test_pick_from_list_only_returns_members():
    items = ["a", "b", "c"]
    assert {pick_from_list(items) for _ in range(100)} <= set(items)


def test_bounded_clamps():
    assert bounded(5, 0, 3) == 3
    assert bounded(-1, 0, 3) == 0
    assert bounded(2, 0, 3) == 2


def test_get_distance():
    assert get_distance((0, 0), (3, 4)) == 5
    assert get_distance((1, 1), (1, 1)) == 0


def test_hash_code_matches_java_style_hash():
    assert hash_code("") == 0
    assert hash_code("a") == 97
    assert hash_code("ab") == 97 * 31 + 98
    # Wraps into signed 32-bit range
    big = hash_code("Munchies are the best game ever made")
    assert -(2**31) <= big < 2**31


def test_fit_size_keeps_aspect_ratio():
    img = pygame.Surface((20, 10))
    size = fit_size(img, width=40)
    assert (size.width, size.height) == (40, 20)
    size = fit_size(img, height=5)
    assert (size.width, size.height) == (10, 5)


def test_screen_metrics():
    s = Screen.from_size(1000, 600)
    assert s.right == 1000 and s.bottom == 600
    assert s.center_x == 500 and s.center_y == 300
    assert math.isclose(s.scale, 0.8)
    assert math.isclose(s.scale_height, 0.3)
    assert math.isclose(s.min_size, 40)
    assert math.isclose(s.max_size, 80)
    assert s.width == 1000


@pytest.mark.parametrize("lo,hi", [(0, 1), (-10, 10), (5, 20)])
def test_random_between_float_range(lo, hi):
    for _ in range(50):
        assert lo <= random_between(lo, hi) <= hi
