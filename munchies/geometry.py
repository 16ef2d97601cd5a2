"""Small math helpers shared by emitters, entities and the session.

Sampling helpers draw from ``RNGService`` so a seeded service makes a whole
frame reproducible in tests.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from munchies.rng_service import RNGService

Point = Tuple[float, float]


def random_between(lo: float, hi: float, integer: bool = False) -> float:
    rng = RNGService.get()
    if integer:
        return rng.randint(math.ceil(lo), math.floor(hi))
    return rng.uniform(lo, hi)


def value_or_range(value: Any) -> Any:
    """Resolve ``[min, max]`` to a uniform sample; pass anything else through."""
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return random_between(value[0], value[1])
    return value


def pick_from_list(items: Sequence[Any]) -> Any:
    return RNGService.get().choice(items)


def bounded(n: float, lo: float, hi: float) -> float:
    return max(lo, min(n, hi))


def get_distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def hash_code(text: str) -> int:
    """32-bit signed string hash (``h = h * 31 + ord(c)``)."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


@dataclass(frozen=True)
class Size:
    width: float
    height: float


def fit_size(image, width: float | None = None, height: float | None = None) -> Size:
    """Size of ``image`` scaled to ``width`` (or ``height``) keeping its aspect ratio."""
    img_w, img_h = image.get_size()
    if width is not None:
        return Size(width, width * img_h / img_w)
    if height is not None:
        return Size(height * img_w / img_h, height)
    return Size(img_w, img_h)


@dataclass(frozen=True)
class Bounds:
    top: float
    right: float
    left: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left


@dataclass(frozen=True)
class Screen:
    """Canvas metrics everything else is sized against."""

    top: float
    bottom: float
    left: float
    right: float
    center_x: float
    center_y: float
    scale: float
    scale_width: float
    scale_height: float
    min_size: float
    max_size: float

    @classmethod
    def from_size(cls, width: int, height: int) -> "Screen":
        avg = (width + height) / 2
        return cls(
            top=0,
            bottom=height,
            left=0,
            right=width,
            center_x=width / 2,
            center_y=height / 2,
            scale=avg / 1000,
            scale_width=(width / 2) / 1000,
            scale_height=(height / 2) / 1000,
            min_size=avg / 20,
            max_size=avg / 10,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


__all__ = [
    "Bounds",
    "Point",
    "Screen",
    "Size",
    "bounded",
    "fit_size",
    "get_distance",
    "hash_code",
    "pick_from_list",
    "random_between",
    "value_or_range",
]
