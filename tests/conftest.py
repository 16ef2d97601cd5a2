import os
import sys
from pathlib import Path

# Ensure repository root is on sys.path for module imports (app, munchies)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless test mode
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from munchies.asset_manager import AssetBundle, AssetLoadError  # noqa: E402
from munchies.config import GameConfig  # noqa: E402
from munchies.rng_service import RNGService  # noqa: E402
from munchies.scheduler import TickScheduler  # noqa: E402
from munchies.services import ServiceContainer  # noqa: E402
from munchies.session import GameSession  # noqa: E402
from munchies.settings import Settings  # noqa: E402


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakeOverlay:
    """Records every call as (method, args)."""

    def __init__(self):
        self.calls = []
        self.score = None
        self.reported = []

    def _rec(self, name, *args):
        self.calls.append((name, args))

    def names(self):
        return [c[0] for c in self.calls]

    def show(self, names):
        self._rec("show", names)

    def hide(self, names):
        self._rec("hide", names)

    def set_score(self, score):
        self.score = score

    def set_banner(self, text):
        self._rec("set_banner", text)

    def set_button(self, text):
        self._rec("set_button", text)

    def set_instructions(self, desktop, mobile):
        self._rec("set_instructions", desktop, mobile)

    def set_mute(self, muted):
        self._rec("set_mute", muted)

    def set_pause(self, paused):
        self._rec("set_pause", paused)

    def set_progress(self, percent):
        self._rec("set_progress", percent)

    def set_styles(self, text_color, primary_color, font=None):
        self._rec("set_styles", text_color, primary_color, font)

    def report_score(self, score):
        self.reported.append(score)


class FakeAudio:
    def __init__(self):
        self.played = []  # (handle, buffer, options)
        self.paused = []
        self.suspended = False
        self.full = False  # no free channel: play() starts nothing
        self._next = 0
        self._on_end = {}

    def play(self, buffer, start=0.0, end=None, loop=False, on_end=None):
        if self.full:
            return None
        self._next += 1
        self.played.append((self._next, buffer, {"start": start, "end": end, "loop": loop}))
        self._on_end[self._next] = on_end
        return self._next

    def finish(self, handle):
        cb = self._on_end.pop(handle, None)
        if cb:
            cb()

    def pause(self, handle):
        self.paused.append(handle)

    def suspend(self):
        self.suspended = True

    def resume(self):
        self.suspended = False

    def buffers(self):
        return [p[1] for p in self.played]


class FakeAssets:
    def __init__(self, fail=False):
        self.fail = fail
        self.requests = None

    def load_list(self, requests, on_progress=None):
        self.requests = list(requests)
        if self.fail:
            raise AssetLoadError("munch", "missing.wav")
        bundle = AssetBundle()
        for req in requests:
            if req.kind == "image":
                bundle.images[req.key] = pygame.Surface((10, 10))
            elif req.kind == "sound":
                bundle.sounds[req.key] = f"sound:{req.key}"
            else:
                bundle.fonts[req.key] = None
        if on_progress:
            on_progress(100)
        return bundle


@pytest.fixture(autouse=True)
def seeded_rng():
    RNGService.initialize(1234)
    yield RNGService.get()
    RNGService._instance = None


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def settings(tmp_path):
    return Settings("Munchies", path=str(tmp_path / "settings.json"))


@pytest.fixture
def make_session(clock, settings):
    """Build a session over a 1000x800 canvas with recording fakes."""

    def _make(size=(1000, 800), assets=None, audio=None):
        services = ServiceContainer(
            assets=assets or FakeAssets(),
            overlay=FakeOverlay(),
            audio=audio or FakeAudio(),
            scheduler=TickScheduler(),
        )
        return GameSession(pygame.Surface(size), GameConfig(), services, settings=settings, clock=clock)

    return _make
