import json
import os

from munchies.geometry import hash_code
from munchies.logger import get_logger

log = get_logger("settings")


class Settings:
    """Per-player preferences persisted as JSON.

    Keys are namespaced by a hash of the game name so several configured
    games can share one settings file. Writes only happen when a value
    actually changed.
    """

    SETTINGS_FILE = "data/settings.json"

    def __init__(self, game_name: str = "munchies", path: str | None = None):
        if path is not None:
            self.SETTINGS_FILE = path
        self.prefix = str(hash_code(game_name))
        self._muted = False
        self._extra = {}
        self._dirty = False
        self.load_settings()

    def _key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        new_val = bool(value)
        if new_val != self._muted:
            self._muted = new_val
            self._dirty = True
            self.flush()

    def toggle_muted(self) -> bool:
        self.muted = not self._muted
        return self._muted

    def load_settings(self):
        """Load settings from the JSON file, creating it if missing."""
        if os.path.exists(self.SETTINGS_FILE):
            try:
                with open(self.SETTINGS_FILE, "r") as f:
                    data = json.load(f)
                self._muted = bool(data.get(self._key("muted"), self._muted))
                # Keep other games' keys intact on the next flush.
                self._extra = {k: v for k, v in data.items() if not k.startswith(self.prefix)}
            except (json.JSONDecodeError, IOError, AttributeError) as e:
                log.warn("Error loading settings; regenerating", e)
                self._dirty = True
                self.flush()
        else:
            self._dirty = True
            self.flush()

    def flush(self):
        """Write settings to disk if dirty and clear dirty flag."""
        if not self._dirty:
            return
        data = dict(self._extra)
        data[self._key("muted")] = self._muted
        try:
            directory = os.path.dirname(self.SETTINGS_FILE)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.SETTINGS_FILE, "w") as f:
                json.dump(data, f, indent=4)
            self._dirty = False
            log.debug("Settings flushed")
        except IOError as e:
            log.error("Error saving settings", e)
