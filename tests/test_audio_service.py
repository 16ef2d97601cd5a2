import pygame
import pytest

from munchies.audio_service import PygameAudio


class DummyChannel:
    def __init__(self):
        self.busy = True
        self.stopped = False

    def get_busy(self):
        return self.busy

    def stop(self):
        self.stopped = True
        self.busy = False


class DummySound:
    def __init__(self):
        self.play_calls = []
        self.channel = DummyChannel()

    def play(self, loops=0, maxtime=0):
        self.play_calls.append((loops, maxtime))
        return self.channel


@pytest.fixture
def svc(monkeypatch):
    audio = PygameAudio()
    audio.available = True
    monkeypatch.setattr(pygame.mixer, "pause", lambda: None)
    monkeypatch.setattr(pygame.mixer, "unpause", lambda: None)
    return audio


def test_play_calls(svc):
    snd = DummySound()
    assert svc.play(snd) is snd.channel
    svc.play(snd, loop=True)
    svc.play(snd, start=0.5, end=2.0)
    assert snd.play_calls == [(0, 0), (-1, 0), (0, 1500)]


def test_play_without_buffer_or_device(svc):
    assert svc.play(None) is None
    svc.available = False
    assert svc.play(DummySound()) is None


def test_update_fires_on_end_once(svc):
    snd = DummySound()
    ended = []
    svc.play(snd, on_end=lambda: ended.append(1))
    svc.update()
    assert ended == []
    snd.channel.busy = False
    svc.update()
    svc.update()
    assert ended == [1]


def test_pause_stops_without_on_end(svc):
    snd = DummySound()
    ended = []
    handle = svc.play(snd, on_end=lambda: ended.append(1))
    svc.pause(handle)
    svc.pause(None)
    svc.update()
    assert handle.stopped
    assert ended == []


def test_suspended_audio_does_not_report_completion(svc):
    snd = DummySound()
    ended = []
    svc.play(snd, on_end=lambda: ended.append(1))
    svc.suspend()
    assert svc.suspended
    snd.channel.busy = False
    svc.update()
    assert ended == []
    svc.resume()
    svc.update()
    assert ended == [1]
