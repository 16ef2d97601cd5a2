"""Game configuration.

Everything a game designer may tweak without touching code: names and
texts, sizes and speed, colors, and asset paths. Loaded from JSON
(``data/config.json`` or ``$MUNCHIES_CONFIG``); every field has a default
so a partial file is enough.

Art and sound files are not shipped: put them at the ``DEFAULT_IMAGES`` /
``DEFAULT_SOUNDS`` paths below or map the keys to your own files. A missing
required file keeps the game on its loading screen.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from typing import Dict

from munchies.logger import get_logger

log = get_logger("config")

CONFIG_FILE = "data/config.json"

DEFAULT_IMAGES = {
    "dizzy_face": "data/images/dizzy-face.png",
    "happy_face": "data/images/happy-face.png",
    "hungry_face": "data/images/hungry-face.png",
    "full_face": "data/images/full-face.png",
    "sick_face": "data/images/sick-face.png",
    "food_1": "data/images/food-1.png",
    "food_2": "data/images/food-2.png",
    "food_3": "data/images/food-3.png",
    "food_4": "data/images/food-4.png",
    "weed": "data/images/weed.png",
    "background": "data/images/background.png",
}

DEFAULT_SOUNDS = {
    "background_music": "data/sfx/background.ogg",
    "munch": "data/sfx/munch.wav",
    "clear": "data/sfx/clear.wav",
    "game_over": "data/sfx/game-over.wav",
}

# Order matters: the player's sprite advances through these as it grows.
FACE_KEYS = ("dizzy_face", "happy_face", "hungry_face", "full_face", "sick_face")
FOOD_KEYS = ("food_1", "food_2", "food_3", "food_4")
OPTIONAL_IMAGES = ("background",)


class ConfigError(Exception):
    pass


@dataclass
class GameSettings:
    name: str = "Munchies"
    player_size: int = 150
    obstacle_size: int = 100
    game_speed: int = 5
    start_text: str = "Start"
    instructions_desktop: str = "Use the arrow keys to catch the food"
    instructions_mobile: str = "Tap left or right to catch the food"
    font_family: str = ""


@dataclass
class Colors:
    background: str = "#1a1a2e"
    text: str = "#ffffff"
    primary: str = "#4caf50"


@dataclass
class GameConfig:
    settings: GameSettings = field(default_factory=GameSettings)
    colors: Colors = field(default_factory=Colors)
    images: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_IMAGES))
    sounds: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SOUNDS))

    @classmethod
    def from_dict(cls, data: dict) -> "GameConfig":
        return cls(
            settings=_section(GameSettings, data.get("settings", {})),
            colors=_section(Colors, data.get("colors", {})),
            images={**DEFAULT_IMAGES, **data.get("images", {})},
            sounds={**DEFAULT_SOUNDS, **data.get("sounds", {})},
        )


def _section(kind, raw: dict):
    known = {f.name for f in fields(kind)}
    unknown = set(raw) - known
    if unknown:
        log.warn(f"ignoring unknown {kind.__name__} keys", sorted(unknown))
    return kind(**{k: v for k, v in raw.items() if k in known})


def load_config(path: str | None = None) -> GameConfig:
    path = path or os.environ.get("MUNCHIES_CONFIG", CONFIG_FILE)
    if not os.path.exists(path):
        log.info("no config file, using defaults", path)
        return GameConfig()
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        raise ConfigError(f"cannot read config {path!r}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config {path!r} must be a JSON object")
    return GameConfig.from_dict(data)


__all__ = ["GameConfig", "GameSettings", "Colors", "ConfigError", "load_config", "FACE_KEYS", "FOOD_KEYS"]
