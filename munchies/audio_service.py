"""PygameAudio

Audio playback over pygame.mixer. Every ``play`` returns the channel as an
opaque handle; the session keeps handles in its playlist and pauses them by
handle. Completion is detected by polling: ``update()`` runs once per loop
iteration and fires the ``on_end`` callback of every channel that went
quiet.

pygame cannot seek into a ``Sound``, so ``start`` is ignored and ``end`` is
honored as a maximum play time.
"""

from __future__ import annotations

import os
from typing import Callable, Dict, Optional

import pygame

from munchies.logger import get_logger

log = get_logger("audio")


class PygameAudio:
    def __init__(self) -> None:
        self.available = True
        if not pygame.mixer.get_init():
            try:
                pygame.mixer.init()
            except pygame.error:
                # No audio device (CI, remote shells); retry with the dummy driver.
                os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
                try:
                    pygame.mixer.init()
                except pygame.error as e:
                    log.warn("audio unavailable, sounds disabled", e)
                    self.available = False
        self._active: Dict[pygame.mixer.Channel, Optional[Callable[[], None]]] = {}
        self.suspended = False

    def play(
        self,
        buffer: pygame.mixer.Sound,
        start: float = 0.0,
        end: Optional[float] = None,
        loop: bool = False,
        on_end: Optional[Callable[[], None]] = None,
    ) -> Optional[pygame.mixer.Channel]:
        if not self.available or buffer is None:
            return None
        maxtime = 0
        if end is not None and not loop:
            maxtime = max(0, int((end - start) * 1000))
        channel = buffer.play(loops=-1 if loop else 0, maxtime=maxtime)
        if channel is None:
            log.debug("no free channel; sound dropped")
            return None
        self._active[channel] = on_end
        return channel

    def pause(self, handle: Optional[pygame.mixer.Channel]) -> None:
        if handle is None:
            return
        self._active.pop(handle, None)
        handle.stop()

    def suspend(self) -> None:
        if self.available:
            pygame.mixer.pause()
        self.suspended = True

    def resume(self) -> None:
        if self.available:
            pygame.mixer.unpause()
        self.suspended = False

    def update(self) -> None:
        if self.suspended:
            return
        finished = [ch for ch in self._active if not ch.get_busy()]
        for ch in finished:
            on_end = self._active.pop(ch)
            if on_end is not None:
                on_end()


__all__ = ["PygameAudio"]
