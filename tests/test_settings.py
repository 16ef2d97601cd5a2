import json
import os
import time

from munchies.geometry import hash_code
from munchies.settings import Settings


def test_settings_created_when_missing(tmp_path):
    settings_path = tmp_path / "nested" / "settings.json"
    s = Settings("Munchies", path=str(settings_path))
    assert settings_path.exists()
    assert s.muted is False
    data = json.loads(settings_path.read_text())
    assert data == {f"{hash_code('Munchies')}muted": False}


def test_settings_no_write_on_same_value(tmp_path):
    settings_path = tmp_path / "settings.json"
    s = Settings("Munchies", path=str(settings_path))
    first_mtime = os.path.getmtime(settings_path)
    time.sleep(0.01)  # ensure mtime granularity
    # Assign same value; should not mark dirty -> no flush
    s.muted = s.muted
    s.flush()
    second_mtime = os.path.getmtime(settings_path)
    assert first_mtime == second_mtime


def test_settings_write_after_change(tmp_path):
    settings_path = tmp_path / "settings.json"
    s = Settings("Munchies", path=str(settings_path))
    first_mtime = os.path.getmtime(settings_path)
    time.sleep(0.01)
    assert s.toggle_muted() is True
    second_mtime = os.path.getmtime(settings_path)
    assert second_mtime > first_mtime
    assert Settings("Munchies", path=str(settings_path)).muted is True


def test_settings_namespaced_per_game(tmp_path):
    settings_path = str(tmp_path / "settings.json")
    a = Settings("Munchies", path=settings_path)
    a.muted = True
    b = Settings("Other Game", path=settings_path)
    assert b.muted is False
    b.muted = True
    b.muted = False
    # The first game's key survives the second game's writes.
    assert Settings("Munchies", path=settings_path).muted is True


def test_settings_regenerated_when_corrupt(tmp_path):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json")
    s = Settings("Munchies", path=str(settings_path))
    assert s.muted is False
    assert json.loads(settings_path.read_text())
