"""Collaborator interfaces the session talks to.

``GameSession`` depends only on these narrow protocols, bundled in a
``ServiceContainer``. ``app.py`` fills the container with the pygame
implementations; tests fill it with recording fakes.

- AssetPort       -> AssetManager.load_list
- OverlayPort     -> PygameOverlay (menu, score, banners)
- AudioPort       -> PygameAudio (sound playback by handle)
- FrameScheduler  -> TickScheduler
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Protocol, Sequence

from munchies.scheduler import FrameScheduler


class AssetPort(Protocol):
    def load_list(self, requests: Sequence[Any], on_progress: Optional[Callable[[int], None]] = None) -> Any: ...


class OverlayPort(Protocol):
    def show(self, names: str | Iterable[str]) -> None: ...
    def hide(self, names: str | Iterable[str]) -> None: ...
    def set_score(self, score: int) -> None: ...
    def set_banner(self, text: str) -> None: ...
    def set_button(self, text: str) -> None: ...
    def set_instructions(self, desktop: str, mobile: str) -> None: ...
    def set_mute(self, muted: bool) -> None: ...
    def set_pause(self, paused: bool) -> None: ...
    def set_progress(self, percent: int) -> None: ...
    def set_styles(self, text_color: str, primary_color: str, font: Any = None) -> None: ...
    def report_score(self, score: int) -> None: ...


class AudioPort(Protocol):
    def play(
        self,
        buffer: Any,
        start: float = 0.0,
        end: Optional[float] = None,
        loop: bool = False,
        on_end: Optional[Callable[[], None]] = None,
    ) -> Any: ...

    def pause(self, handle: Any) -> None: ...
    def suspend(self) -> None: ...
    def resume(self) -> None: ...


@dataclass
class ServiceContainer:
    assets: AssetPort
    overlay: OverlayPort
    audio: AudioPort
    scheduler: FrameScheduler


__all__ = ["AssetPort", "OverlayPort", "AudioPort", "FrameScheduler", "ServiceContainer"]
