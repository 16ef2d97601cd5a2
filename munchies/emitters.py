"""Particle emitters.

Each emitter turns a spawn specification into exactly ``n`` fresh particle
records. Any numeric field may be given as a scalar or a ``[min, max]``
range; ranges are sampled independently for every particle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from munchies.geometry import pick_from_list, value_or_range

ROTATION_SIGNS = (1, -1)


@dataclass
class Shard:
    """Image-textured particle used by ``Burst``."""

    image: Any
    x: float
    y: float
    r: float  # rotation, radians
    rd: float  # radius
    vx: float
    vy: float
    dr: int  # rotation direction


@dataclass
class Wave:
    """Colored ring used by ``BlastWave``."""

    x: float
    y: float
    width: float
    rd: float
    hue: float
    alpha: float


def image_particle_emitter(n=1, x=0, y=0, vx=1, vy=1, r=0, rd=50, image=None) -> List[Shard]:
    return [
        Shard(
            image=image,
            x=value_or_range(x),
            y=value_or_range(y),
            r=value_or_range(r),
            rd=value_or_range(rd),
            vx=value_or_range(vx),
            vy=value_or_range(vy),
            dr=pick_from_list(ROTATION_SIGNS),
        )
        for _ in range(n)
    ]


def radial_wave_emitter(n=1, x=0, y=0, rd=2, width=50, hue=0, alpha=1) -> List[Wave]:
    return [
        Wave(
            x=value_or_range(x),
            y=value_or_range(y),
            width=value_or_range(width),
            rd=value_or_range(rd),
            hue=value_or_range(hue),
            alpha=value_or_range(alpha),
        )
        for _ in range(n)
    ]


__all__ = ["Shard", "Wave", "image_particle_emitter", "radial_wave_emitter", "ROTATION_SIGNS"]
