"""Session state values.

``GameState`` is immutable; the only way to change it is ``transition``,
which records the outgoing state tag in ``prev`` before applying changes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

STATES = ("loading", "ready", "play", "over", "stop")


@dataclass(frozen=True)
class GameState:
    current: str = "loading"
    prev: str = ""
    score: int = 0
    game_speed: float = 1
    paused: bool = False
    muted: bool = False

    def transition(self, **changes) -> "GameState":
        nxt = changes.get("current", self.current)
        if nxt not in STATES:
            raise ValueError(f"unknown game state {nxt!r}")
        return replace(self, prev=self.current, **changes)


@dataclass(frozen=True)
class FrameClock:
    count: int = 0  # handle of the frame being run
    time: float = 0.0  # ms timestamp of the request
    rate: float = 0.0  # ms since the previous request
    scale: float = 0.0  # movement multiplier derived from rate


@dataclass
class InputState:
    left: bool = False
    right: bool = False

    @property
    def dx(self) -> int:
        return (-1 if self.left else 0) + (1 if self.right else 0)


__all__ = ["STATES", "GameState", "FrameClock", "InputState"]
