"""AssetManager

Resolves a list of named image/sound/font requests into one keyed
``AssetBundle``. Loading is all-or-nothing: the first required asset that
fails raises ``AssetLoadError`` and nothing is returned. Requests marked
``optional`` resolve to ``None`` instead of failing.

Surfaces and sounds are cached by path, so reloading a session after game
over does not touch the disk again.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

import pygame

from munchies.logger import get_logger

log = get_logger("assets")


class AssetLoadError(Exception):
    """A required asset could not be loaded."""

    def __init__(self, key: str, path: str, cause: Exception | None = None):
        super().__init__(f"failed to load {key!r} from {path!r}: {cause}")
        self.key = key
        self.path = path
        self.cause = cause


@dataclass(frozen=True)
class AssetRequest:
    kind: str  # "image" | "sound" | "font"
    key: str
    path: str
    optional: bool = False


def load_image(key: str, path: str, optional: bool = False) -> AssetRequest:
    return AssetRequest("image", key, path, optional)


def load_sound(key: str, path: str, optional: bool = False) -> AssetRequest:
    return AssetRequest("sound", key, path, optional)


def load_font(key: str, path: str, optional: bool = False) -> AssetRequest:
    return AssetRequest("font", key, path, optional)


@dataclass
class AssetBundle:
    images: Dict[str, Any] = field(default_factory=dict)
    sounds: Dict[str, Any] = field(default_factory=dict)
    fonts: Dict[str, Any] = field(default_factory=dict)


class AssetManager:
    def __init__(self, root: str = "") -> None:
        self.root = root
        self._images: Dict[str, pygame.Surface] = {}
        self._sounds: Dict[str, pygame.mixer.Sound] = {}

    def _full(self, path: str) -> str:
        return os.path.join(self.root, path) if self.root else path

    def get_image(self, path: str) -> pygame.Surface:
        surf = self._images.get(path)
        if surf is None:
            raw = pygame.image.load(self._full(path))
            # convert_alpha() needs a display mode; headless runs keep the raw format.
            if pygame.display.get_init() and pygame.display.get_surface():
                raw = raw.convert_alpha()
            surf = raw
            self._images[path] = surf
        return surf

    def get_sound(self, path: str) -> pygame.mixer.Sound:
        snd = self._sounds.get(path)
        if snd is None:
            snd = pygame.mixer.Sound(self._full(path))
            self._sounds[path] = snd
        return snd

    def get_font(self, path: str) -> Optional[str]:
        """Fonts are sized at render time, so only the resolved path is kept."""
        if not path:
            return None
        full = self._full(path)
        if not os.path.exists(full):
            raise FileNotFoundError(full)
        return full

    def _load_one(self, req: AssetRequest):
        if req.kind == "image":
            return self.get_image(req.path)
        if req.kind == "sound":
            return self.get_sound(req.path)
        if req.kind == "font":
            return self.get_font(req.path)
        raise ValueError(f"unknown asset kind {req.kind!r}")

    def load_list(
        self,
        requests: Sequence[AssetRequest],
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> AssetBundle:
        bundle = AssetBundle()
        slots = {"image": bundle.images, "sound": bundle.sounds, "font": bundle.fonts}
        total = len(requests)
        for done, req in enumerate(requests, start=1):
            try:
                value = self._load_one(req)
            except (pygame.error, OSError) as e:
                if not req.optional:
                    raise AssetLoadError(req.key, req.path, e) from e
                log.debug("optional asset missing", req.key, req.path)
                value = None
            slots[req.kind][req.key] = value
            if on_progress is not None:
                on_progress(int(done / total * 100))
        log.info(f"loaded {total} assets")
        return bundle


__all__ = [
    "AssetBundle",
    "AssetLoadError",
    "AssetManager",
    "AssetRequest",
    "load_font",
    "load_image",
    "load_sound",
]
