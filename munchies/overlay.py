"""PygameOverlay

Menu, score and banner layer drawn over the play field. The session only
toggles named regions and sets texts; layout and drawing live here.

Regions: ``loading``, ``stats`` (score + mute/pause buttons), ``banner``,
``button``, ``instructions`` and ``final`` (reported score).
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

import pygame

from munchies.logger import get_logger

log = get_logger("overlay")

REGIONS = ("loading", "stats", "banner", "button", "instructions", "final")


def _names(names: str | Iterable[str]) -> Tuple[str, ...]:
    return (names,) if isinstance(names, str) else tuple(names)


class PygameOverlay:
    def __init__(self, size: Tuple[int, int], touch: bool = False) -> None:
        self.width, self.height = size
        self.touch = touch
        self.visible: Dict[str, bool] = {name: False for name in REGIONS}
        self.visible["loading"] = True
        self.texts: Dict[str, str] = {
            "banner": "",
            "button": "",
            "instructions": "",
            "loading": "0%",
            "final": "",
        }
        self.score = 0
        self.muted = False
        self.paused = False
        self.text_color = pygame.Color("#ffffff")
        self.primary_color = pygame.Color("#4caf50")
        self.font_path: Optional[str] = None
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._hit_boxes: Dict[str, pygame.Rect] = {}

    # Session-facing API --------------------------------------------------
    def show(self, names):
        for name in _names(names):
            self.visible[name] = True

    def hide(self, names):
        for name in _names(names):
            self.visible[name] = False

    def set_score(self, score: int):
        self.score = score

    def set_banner(self, text: str):
        self.texts["banner"] = text
        self.visible["banner"] = True

    def set_button(self, text: str):
        self.texts["button"] = text
        self.visible["button"] = True

    def set_instructions(self, desktop: str, mobile: str):
        self.texts["instructions"] = mobile if self.touch else desktop
        self.visible["instructions"] = True

    def set_mute(self, muted: bool):
        self.muted = muted

    def set_pause(self, paused: bool):
        self.paused = paused

    def set_progress(self, percent: int):
        self.texts["loading"] = f"{percent}%"

    def set_styles(self, text_color: str, primary_color: str, font=None):
        self.text_color = pygame.Color(text_color)
        self.primary_color = pygame.Color(primary_color)
        self.font_path = font
        self._fonts.clear()

    def report_score(self, score: int):
        log.info("final score", score)
        self.texts["final"] = f"Score: {score}"
        self.show("final")

    # Input --------------------------------------------------------------
    def region_at(self, pos) -> Optional[str]:
        """Name of the clickable region under ``pos`` (mute, pause, button)."""
        for name, rect in self._hit_boxes.items():
            if rect.collidepoint(pos):
                return name
        return None

    # Drawing ------------------------------------------------------------
    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(self.font_path, size)
            self._fonts[size] = font
        return font

    def _text(self, surface, text, size, center, color=None) -> pygame.Rect:
        img = self._font(size).render(text, True, color or self.text_color)
        rect = img.get_rect(center=center)
        surface.blit(img, rect)
        return rect

    def render(self, surface: pygame.Surface) -> None:
        self._hit_boxes = {}
        cx, cy = self.width // 2, self.height // 2
        if self.visible["loading"]:
            self._text(surface, self.texts["loading"], 48, (cx, cy))
            return
        if self.visible["stats"]:
            self._text(surface, str(self.score), 36, (cx, 30))
            self._hit_boxes["mute"] = self._text(surface, "unmute" if self.muted else "mute", 22, (self.width - 60, 30))
            self._hit_boxes["pause"] = self._text(surface, "play" if self.paused else "pause", 22, (60, 30))
        if self.visible["banner"]:
            self._text(surface, self.texts["banner"], 64, (cx, cy - 90))
        if self.visible["button"]:
            rect = self._text(surface, self.texts["button"], 40, (cx, cy), self.primary_color)
            pygame.draw.rect(surface, self.primary_color, rect.inflate(30, 16), 2)
            self._hit_boxes["button"] = rect.inflate(30, 16)
        if self.visible["instructions"]:
            self._text(surface, self.texts["instructions"], 24, (cx, cy + 70))
        if self.visible["final"]:
            self._text(surface, self.texts["final"], 48, (cx, cy + 130))


__all__ = ["PygameOverlay", "REGIONS"]
