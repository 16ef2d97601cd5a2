"""Frame scheduling.

The session never loops on its own: each frame asks a ``FrameScheduler``
for the next callback and keeps the returned handle so it can cancel it.
``TickScheduler`` is the implementation used both by ``app.py`` (pumped
once per pygame loop iteration) and by the tests (pumped by hand).
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Protocol

FrameCallback = Callable[[], None]
Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class FrameScheduler(Protocol):
    def request(self, callback: FrameCallback) -> int: ...

    def cancel(self, handle: int) -> None: ...


class TickScheduler:
    """Handle-keyed queue of frame callbacks.

    Handles increase monotonically, so the latest handle doubles as a frame
    counter. Callbacks requested while a pump is running wait for the next
    pump, mirroring a browser's animation-frame queue.
    """

    def __init__(self) -> None:
        self._last_handle = 0
        self._pending: Dict[int, FrameCallback] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, callback: FrameCallback) -> int:
        self._last_handle += 1
        self._pending[self._last_handle] = callback
        return self._last_handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    def pump(self) -> int:
        due, self._pending = self._pending, {}
        for handle in sorted(due):
            due[handle]()
        return len(due)


__all__ = ["Clock", "FrameCallback", "FrameScheduler", "TickScheduler", "monotonic_ms"]
