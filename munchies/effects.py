"""Particle effects: ``Burst`` (image shards) and ``BlastWave`` (fading rings).

Both effects own their particles and share one lifecycle: every ``tick``
advances all live particles, drops the burned-out ones in a separate pass,
then draws the survivors. The tick that finds the particle list already
empty flips ``active`` to False; inactive effects ignore further ticks and
draw nothing.
"""

from __future__ import annotations

import math
import uuid
from typing import List

import pygame

from munchies.constants import (
    BLAST_WAVE_DEFAULT_BURN_RATE,
    BLAST_WAVE_DEFAULT_WIDTH,
    BLAST_WAVE_FADE,
    BLAST_WAVE_GROWTH,
    BLAST_WAVE_MIN_WIDTH,
    BLAST_WAVE_START_RADIUS,
    BURST_DEFAULT_SHARDS,
    BURST_DEFAULT_VELOCITY,
    SHARD_MIN_RADIUS,
    SHARD_RADIUS_RANGE,
    SHARD_SPIN,
)
from munchies.emitters import Shard, Wave, image_particle_emitter, radial_wave_emitter
from munchies.geometry import bounded, value_or_range


def _effect_id() -> str:
    return uuid.uuid4().hex[:13]


def draw_image_particle(surface: pygame.Surface, shard: Shard) -> None:
    size = max(1, int(shard.rd * 2))
    img = pygame.transform.scale(shard.image, (size, size))
    img = pygame.transform.rotate(img, -math.degrees(shard.r))
    rect = img.get_rect(center=(int(shard.x + shard.rd), int(shard.y + shard.rd)))
    surface.blit(img, rect)


def draw_wave(surface: pygame.Surface, wave: Wave) -> None:
    color = pygame.Color(0, 0, 0)
    color.hsla = (wave.hue % 360, 100, 50, bounded(wave.alpha, 0, 1) * 100)
    pygame.draw.circle(
        surface,
        color,
        (int(wave.x), int(wave.y)),
        max(0, int(wave.rd)),
        max(1, int(wave.width)),
    )


class Burst:
    type = "burst"

    def __init__(self, surface, image, x, y, n=BURST_DEFAULT_SHARDS, vx=None, vy=None, burn_rate=0.01):
        self.id = _effect_id()
        self.active = True
        self.surface = surface
        self.center = (x, y)
        self.burn_rate = burn_rate
        self.shards: List[Shard] = image_particle_emitter(
            n=n,
            image=image,
            x=x,
            y=y,
            r=0,
            vx=vx if vx is not None else list(BURST_DEFAULT_VELOCITY),
            vy=vy if vy is not None else list(BURST_DEFAULT_VELOCITY),
            rd=list(SHARD_RADIUS_RANGE),
        )

    def tick(self) -> None:
        if not self.active:
            return
        if not self.shards:
            self.active = False
            return

        for shard in self.shards:
            shard.x += shard.vx
            shard.y += shard.vy
            shard.r += SHARD_SPIN * shard.dr
            shard.rd = abs(shard.rd - self.burn_rate)

        self.shards = [s for s in self.shards if s.rd >= SHARD_MIN_RADIUS]
        for shard in self.shards:
            draw_image_particle(self.surface, shard)


class BlastWave:
    type = "blast-wave"

    def __init__(
        self,
        surface,
        x,
        y,
        color: str,
        width=BLAST_WAVE_DEFAULT_WIDTH,
        burn_rate=BLAST_WAVE_DEFAULT_BURN_RATE,
    ):
        self.id = _effect_id()
        self.active = True
        self.surface = surface
        self.center = (x, y)
        # Percent in, fraction out; a range is sampled once for the whole effect.
        self.burn_rate = value_or_range(burn_rate) / 100
        parsed = pygame.Color(color)
        h, s, l, _ = parsed.hsla
        self.color = {"hex": color, "rgb": (parsed.r, parsed.g, parsed.b), "hsl": (h, s, l)}
        self.waves: List[Wave] = radial_wave_emitter(
            x=x,
            y=y,
            rd=BLAST_WAVE_START_RADIUS,
            width=width,
            hue=h,
            alpha=1,
        )

    def tick(self) -> None:
        if not self.active:
            return
        if not self.waves:
            self.active = False
            return

        for wave in self.waves:
            wave.rd += self.burn_rate * BLAST_WAVE_GROWTH
            wave.width -= self.burn_rate / 2
            wave.hue -= self.burn_rate / 2
            wave.alpha -= self.burn_rate * BLAST_WAVE_FADE

        self.waves = [w for w in self.waves if w.width >= BLAST_WAVE_MIN_WIDTH]
        for wave in self.waves:
            draw_wave(self.surface, wave)


__all__ = ["Burst", "BlastWave", "draw_image_particle", "draw_wave"]
