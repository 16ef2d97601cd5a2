"""Rate limiting for effects and sound playback.

``Throttle`` is the gate: ``try_fire(now)`` answers whether enough time has
passed since the last *successful* fire. ``throttled`` wraps a callable with
a gate and a clock; suppressed calls are dropped, never queued.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional

from munchies.scheduler import Clock, monotonic_ms


class Throttle:
    def __init__(self, interval_ms: float) -> None:
        self.interval_ms = interval_ms
        self.last_fired: Optional[float] = None

    def try_fire(self, now: float) -> bool:
        if self.last_fired is not None and now - self.last_fired < self.interval_ms:
            return False
        self.last_fired = now
        return True


def throttled(interval_ms: float, fn: Callable[..., Any], clock: Clock = monotonic_ms) -> Callable[..., Any]:
    gate = Throttle(interval_ms)

    @functools.wraps(fn)
    def _wrapper(*args, **kwargs):
        if not gate.try_fire(clock()):
            return None
        return fn(*args, **kwargs)

    return _wrapper


__all__ = ["Throttle", "throttled"]
