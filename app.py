"""Application entry harness.

Opens the window, wires pygame input/audio/assets into a ``GameSession``
and pumps its frame scheduler once per loop iteration. All game logic
lives in the session; this loop only moves events in and pixels out.
"""

from __future__ import annotations

import pygame

from munchies.asset_manager import AssetManager
from munchies.audio_service import PygameAudio
from munchies.config import load_config
from munchies.input_router import InputRouter
from munchies.logger import get_logger
from munchies.overlay import PygameOverlay
from munchies.scheduler import TickScheduler
from munchies.services import ServiceContainer
from munchies.session import GameSession
from munchies.settings import Settings

log = get_logger("app")


def main():
    pygame.init()
    config = load_config()
    pygame.display.set_caption(config.settings.name)
    screen = pygame.display.set_mode((1280, 720))
    clock = pygame.time.Clock()

    overlay = PygameOverlay(screen.get_size())
    audio = PygameAudio()
    scheduler = TickScheduler()
    services = ServiceContainer(
        assets=AssetManager(),
        overlay=overlay,
        audio=audio,
        scheduler=scheduler,
    )
    session = GameSession(screen, config, services, settings=Settings(config.settings.name))
    router = InputRouter(hit_test=overlay.region_at)

    session.load()

    running = True
    while running:
        events = pygame.event.get()
        for e in events:
            if e.type == pygame.QUIT:
                running = False

        session.handle_actions(router.process(events, session.state.current))
        audio.update()
        if scheduler.pump() == 0 and session.state.current == "loading":
            # Nothing to simulate: keep the loading screen visible.
            screen.fill(pygame.Color(config.colors.background))
        overlay.render(screen)
        pygame.display.flip()
        clock.tick(60)

    session.destroy()
    pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
