from __future__ import annotations

import math
from typing import Mapping, Protocol, Sequence

import pygame

from munchies.constants import (
    OBSTACLE_FAR_BOUND,
    OBSTACLE_MARGIN,
    PLAYER_GROWTH,
)
from munchies.geometry import Bounds, bounded, get_distance


class Body:
    """Position, size and speed of anything that moves on the field.

    ``radius`` and the center are derived on every access so they can never
    drift from the current width/height.
    """

    def __init__(self, x, y, width, height, speed=1, bounds=None):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.speed = speed
        self.bounds = bounds

    @property
    def radius(self) -> float:
        return (self.width + self.height) / 4

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

    @property
    def cy(self) -> float:
        return self.y + self.height / 2

    @property
    def center(self):
        return (self.cx, self.cy)

    def move(self, dx, dy, scale):
        if dx != 0:
            self.x += dx * self.speed * scale
        if dy != 0:
            self.y += dy * self.speed * scale
        self._clamp()

    def move_to(self, x=None, y=None):
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y
        self._clamp()

    def _clamp(self):
        if self.bounds is None:
            return
        b = self.bounds
        self.x = bounded(self.x, b.left, b.right - self.width)
        self.y = bounded(self.y, b.top, b.bottom - self.height)


class Drawable(Protocol):
    body: Body

    def draw(self, surface: pygame.Surface) -> None: ...


def draw_sprite(surface: pygame.Surface, image, body: Body) -> None:
    if image is None:
        return
    size = (max(1, int(body.width)), max(1, int(body.height)))
    surface.blit(pygame.transform.scale(image, size), (int(body.x), int(body.y)))


def obstacle_bounds(screen) -> Bounds:
    """Clamp box letting obstacles enter from above and fall out below."""
    return Bounds(
        top=screen.top - OBSTACLE_MARGIN,
        right=max(OBSTACLE_FAR_BOUND, screen.right + OBSTACLE_MARGIN),
        left=screen.left - OBSTACLE_MARGIN,
        bottom=max(OBSTACLE_FAR_BOUND, screen.bottom + OBSTACLE_MARGIN),
    )


class Player:
    def __init__(self, image, images: Sequence, x, y, width, height, speed, bounds):
        self.body = Body(x, y, width, height, speed=speed, bounds=bounds)
        self.image = image
        self.images = list(images)
        self.original_width = width
        self.original_height = height

    def update(self):
        """Pick the sprite matching the current size (bigger -> sicker face)."""
        if not self.images:
            return
        half_field = (self.body.bounds.right - self.body.bounds.left) / 2
        i = (self.body.width / half_field) * len(self.images)
        # Half-up rounding; round() would bank to even.
        idx = int(bounded(math.floor(i + 0.5) - 1, 0, len(self.images) - 1))
        self.image = self.images[idx]

    def eat(self):
        self.body.width += PLAYER_GROWTH
        self.body.height += PLAYER_GROWTH
        self.update()

    def blaze(self):
        self.body.width = self.original_width
        self.body.height = self.original_height
        self.update()

    def draw(self, surface):
        draw_sprite(surface, self.image, self.body)


class Obstacle:
    def __init__(self, type, image, x, y, width, height, speed, bounds):
        self.type = type
        self.image = image
        self.munches = 0
        self.body = Body(x, y, width, height, speed=speed, bounds=bounds)

    def munch(self):
        self.munches += 1

    def collides_with(self, other: Drawable) -> bool:
        """Circle test on the two centers; touching circles do not collide."""
        distance = get_distance(self.body.center, other.body.center)
        return distance < (other.body.radius + self.body.radius)

    def collisions_with(self, entities: Mapping[str, Drawable]) -> bool:
        # Full scan on purpose: every entry is tested even after a hit.
        hits = [key for key, ent in entities.items() if self.collides_with(ent)]
        return len(hits) > 0

    def draw(self, surface):
        draw_sprite(surface, self.image, self.body)


__all__ = ["Body", "Drawable", "Player", "Obstacle", "draw_sprite", "obstacle_bounds"]
