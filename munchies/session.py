"""GameSession: the per-frame state machine.

One session owns the simulation: entities, effects, playlist, frame clock
and ``GameState``. It reaches the outside world only through the
``ServiceContainer`` handed to it (assets, overlay, audio, scheduler).

Lifecycle:

    session = GameSession(surface, config, services, settings)
    session.load()          # loading -> (assets) -> ready, first frame
    ...                     # scheduler pumps session.play() once per frame
    session.destroy()       # -> stop, no more frames

State tags: ``loading -> ready -> play -> over``; ``over`` goes back to
``loading`` on reload and any state ends in ``stop``. Within a ``play``
frame the order is fixed: spawn, effects, entities (move, draw, collide),
cull, game-over check, player.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

import pygame

from munchies.asset_manager import AssetLoadError, AssetRequest, load_font, load_image, load_sound
from munchies.config import FACE_KEYS, FOOD_KEYS, OPTIONAL_IMAGES, GameConfig
from munchies.constants import (
    BLAST_WAVE_THROTTLE_MS,
    BLAST_WAVE_WEED_BURN_RATE,
    BURST_THROTTLE_MS,
    BURST_VX_RANGE,
    BURST_VY_RANGE,
    FOOD_BURST_BURN_RATE,
    FOOD_BURST_SHARDS,
    FRAME_SCALE_FACTOR,
    GAME_OVER_BURST_BURN_RATE,
    GAME_OVER_BURST_SHARDS,
    GAME_OVER_REPORT_DELAY_MS,
    MAX_OBSTACLES,
    MUNCH_LIMIT,
    OBSTACLE_SWAY_DIVISOR,
    OBSTACLE_SWAY_PERIOD,
    PLAYBACK_THROTTLE_MS,
    PLAYER_BOUNCE_DIVISOR,
    PLAYER_BOUNCE_PERIOD,
    SPAWN_SPACING_FACTOR,
    SPAWN_Y,
    TAP_GRACE_FRAMES,
    WEED_BURST_BURN_RATE,
    WEED_BURST_SHARDS,
    WEED_FRAME_INTERVAL,
)
from munchies.effects import BlastWave, Burst
from munchies.entities import Obstacle, Player, obstacle_bounds
from munchies.game_state import FrameClock, GameState, InputState
from munchies.geometry import Screen, bounded, fit_size, get_distance, pick_from_list, random_between
from munchies.logger import get_logger
from munchies.scheduler import Clock, FrameCallback, monotonic_ms
from munchies.services import ServiceContainer
from munchies.settings import Settings
from munchies.throttle import throttled

log = get_logger("session")

SOUND_KEYS = ("background_music", "munch", "clear", "game_over")


@dataclass
class PlaylistEntry:
    id: str
    key: str
    handle: Any


class GameSession:
    def __init__(
        self,
        surface: pygame.Surface,
        config: GameConfig,
        services: ServiceContainer,
        settings: Optional[Settings] = None,
        clock: Clock = monotonic_ms,
    ) -> None:
        self.surface = surface
        self.config = config
        self.services = services
        self.settings = settings if settings is not None else Settings(config.settings.name)
        self.clock = clock
        self.playlist: List[PlaylistEntry] = []

        self.throttled_blast_wave = throttled(BLAST_WAVE_THROTTLE_MS, BlastWave, clock)
        self.throttled_burst = throttled(BURST_THROTTLE_MS, Burst, clock)
        self.throttled_playback = throttled(PLAYBACK_THROTTLE_MS, self.playback, clock)

        self.images: dict = {}
        self.sounds: dict = {}
        self.fonts: dict = {}
        self.init()

    @property
    def overlay(self):
        return self.services.overlay

    @property
    def audio(self):
        return self.services.audio

    @property
    def scheduler(self):
        return self.services.scheduler

    # Lifecycle ------------------------------------------------------
    def init(self) -> None:
        """Reset everything a fresh round needs; assets are kept."""
        self.screen = Screen.from_size(*self.surface.get_size())
        self.frame = FrameClock(count=0, time=self.clock())
        self.state = GameState(
            current="loading",
            game_speed=self.config.settings.game_speed,
            muted=self.settings.muted,
        )
        self.input = InputState()
        self.effects: List[Any] = []
        self.entities: List[Obstacle] = []
        self.player: Optional[Player] = None
        self.player_size = None
        self.obstacle_size = None
        self._background = None
        self._over_at: Optional[float] = None
        self._score_reported = False
        # State tag the previous frame ended in; pause and mute leave it alone.
        self._entered_from = "loading"

    def asset_requests(self) -> List[AssetRequest]:
        images = self.config.images
        keys = (*FACE_KEYS, *FOOD_KEYS, "weed", *OPTIONAL_IMAGES)
        requests = [load_image(k, images[k], optional=k in OPTIONAL_IMAGES) for k in keys]
        requests += [load_sound(k, self.config.sounds[k]) for k in SOUND_KEYS]
        requests.append(load_font("game_font", self.config.settings.font_family, optional=True))
        return requests

    def load(self) -> bool:
        """Fetch assets and start a new round. Returns False if loading failed."""
        self.cancel_frame()
        self.stop_playlist()
        self.init()
        try:
            bundle = self.services.assets.load_list(self.asset_requests(), on_progress=self.overlay.set_progress)
        except AssetLoadError as e:
            log.error("asset loading failed", e)
            return False
        self.images = bundle.images
        self.sounds = bundle.sounds
        self.fonts = bundle.fonts
        self.create()
        return True

    def create(self) -> None:
        screen = self.screen
        settings = self.config.settings
        faces = [self.images[k] for k in FACE_KEYS]

        player_width = bounded(settings.player_size * screen.scale_height, screen.min_size, screen.max_size)
        self.player_size = fit_size(faces[0], width=player_width)
        self.player = Player(
            image=faces[0],
            images=faces,
            x=screen.center_x,
            y=screen.top,
            width=self.player_size.width,
            height=self.player_size.height,
            speed=self.player_size.width,
            bounds=screen,
        )

        obstacle_width = bounded(settings.obstacle_size * screen.scale_height, screen.min_size, screen.max_size)
        self.obstacle_size = fit_size(self.images[FOOD_KEYS[0]], width=obstacle_width)

        background = self.images.get("background")
        if background is not None:
            self._background = pygame.transform.scale(background, self.surface.get_size())

        colors = self.config.colors
        self.overlay.set_styles(colors.text, colors.primary, self.fonts.get("game_font"))

        self.set_state(current="ready")
        self.play()

    def destroy(self) -> None:
        self.set_state(current="stop")
        self.stop_playlist()
        self.cancel_frame()

    # Frame ----------------------------------------------------------
    def play(self) -> None:
        """Run one frame and schedule the next."""
        # A frame that fires after destroy() or pause() must not simulate.
        if self.state.current == "stop" or self.state.paused:
            return

        self.surface.fill(pygame.Color(self.config.colors.background))
        if self._background is not None:
            self.surface.blit(self._background, (0, 0))
        self.overlay.set_score(self.state.score)

        if self.state.current == "ready":
            self._ready_frame()
        if self.state.current == "play":
            self._play_frame()
        if self.state.current == "over":
            self._over_frame()
        self._entered_from = self.state.current

        if self.state.current == "stop":
            self.cancel_frame()
        else:
            self.request_frame(self.play)

    def _ready_frame(self) -> None:
        if self._entered_from not in ("loading", "over"):
            return
        settings = self.config.settings
        self.overlay.hide(["loading", "final"])
        self.overlay.set_banner(settings.name)
        self.overlay.set_button(settings.start_text)
        self.overlay.set_instructions(desktop=settings.instructions_desktop, mobile=settings.instructions_mobile)
        self.overlay.show("stats")
        self.overlay.set_mute(self.state.muted)
        self.overlay.set_pause(self.state.paused)

    def _play_frame(self) -> None:
        if self._entered_from == "ready":
            self.overlay.hide(["banner", "button", "instructions"])

        if not self.state.muted and not self.playlist:
            self.playback("background_music", self.sounds.get("background_music"), loop=True)

        self.add_obstacle()
        self.tick_effects()
        self._update_entities()
        self._check_game_over()
        self._move_player()

    def _over_frame(self) -> None:
        self.tick_effects()
        if self._score_reported or self._over_at is None:
            return
        if self.clock() - self._over_at >= GAME_OVER_REPORT_DELAY_MS:
            self._score_reported = True
            self.overlay.report_score(self.state.score)

    # Simulation steps -----------------------------------------------
    def add_obstacle(self) -> Optional[Obstacle]:
        """Spawn policy: food while below the cap, a weed every 600th frame."""
        weed_time = self.frame.count % WEED_FRAME_INTERVAL == 0
        if not weed_time and len(self.entities) >= MAX_OBSTACLES:
            return None

        max_x = max(0, self.screen.right - self.obstacle_size.width)
        location = (random_between(0, max_x, integer=True), SPAWN_Y)
        spacing = self.player_size.width * SPAWN_SPACING_FACTOR
        if any(get_distance((e.body.x, e.body.y), location) < spacing for e in self.entities):
            return None

        if weed_time:
            kind, image = "weed", self.images["weed"]
        else:
            kind, image = "food", pick_from_list([self.images[k] for k in FOOD_KEYS])
        size = fit_size(image, width=self.obstacle_size.width)
        obstacle = Obstacle(
            type=kind,
            image=image,
            x=location[0],
            y=location[1],
            width=size.width,
            height=size.height,
            speed=self.state.game_speed,
            bounds=obstacle_bounds(self.screen),
        )
        self.entities.append(obstacle)
        return obstacle

    def tick_effects(self) -> None:
        for effect in self.effects:
            effect.tick()
        self.effects = [e for e in self.effects if e.active]

    def _add_effect(self, effect) -> None:
        # Throttled constructors return None when suppressed.
        if effect is not None:
            self.effects.append(effect)

    def _burst_area(self) -> dict:
        body = self.player.body
        return {
            "x": [body.x, body.x + body.width],
            "y": [body.y, body.y + body.height],
            "vx": list(BURST_VX_RANGE),
            "vy": list(BURST_VY_RANGE),
        }

    def _update_entities(self) -> None:
        dx = math.cos(self.frame.count / OBSTACLE_SWAY_PERIOD) / OBSTACLE_SWAY_DIVISOR
        for entity in self.entities:
            entity.body.move(dx, 1, self.frame.scale)
            entity.draw(self.surface)
            if entity.collides_with(self.player):
                self._munch(entity)
        self.entities = [
            e for e in self.entities if e.body.y <= self.screen.bottom and e.munches <= MUNCH_LIMIT
        ]

    def _munch(self, entity: Obstacle) -> None:
        entity.munch()
        self.set_state(score=self.state.score + 1)

        if entity.type == "food":
            self.player.eat()
            self.throttled_playback("munch", self.sounds.get("munch"))
            self._add_effect(
                self.throttled_burst(
                    surface=self.surface,
                    image=entity.image,
                    n=FOOD_BURST_SHARDS,
                    burn_rate=FOOD_BURST_BURN_RATE,
                    **self._burst_area(),
                )
            )
        elif entity.type == "weed":
            self.player.blaze()
            self.throttled_playback("clear", self.sounds.get("clear"))
            self._add_effect(
                Burst(
                    surface=self.surface,
                    image=entity.image,
                    n=WEED_BURST_SHARDS,
                    burn_rate=WEED_BURST_BURN_RATE,
                    **self._burst_area(),
                )
            )
            body = self.player.body
            self._add_effect(
                self.throttled_blast_wave(
                    surface=self.surface,
                    x=body.cx,
                    y=body.cy,
                    color=self.config.colors.primary,
                    width=body.width,
                    burn_rate=list(BLAST_WAVE_WEED_BURN_RATE),
                )
            )

    def _check_game_over(self) -> None:
        if self.player.body.width <= self.screen.width / 2:
            return
        self._add_effect(
            Burst(
                surface=self.surface,
                image=self.images["weed"],
                n=GAME_OVER_BURST_SHARDS,
                burn_rate=GAME_OVER_BURST_BURN_RATE,
                **self._burst_area(),
            )
        )
        self.playback("game_over", self.sounds.get("game_over"))
        self.stop_playback("background_music")
        self._over_at = self.clock()
        self.set_state(current="over")
        log.info("game over, score", self.state.score)

    def _move_player(self) -> None:
        dy = math.cos(self.frame.count / PLAYER_BOUNCE_PERIOD) / PLAYER_BOUNCE_DIVISOR
        body = self.player.body
        body.move(self.input.dx, dy, self.frame.scale)
        body.move_to(y=self.screen.bottom - body.height)
        self.player.draw(self.surface)

    # Input ----------------------------------------------------------
    def handle_actions(self, actions) -> None:
        for act in actions:
            self.handle_action(act)

    def handle_action(self, act: str) -> None:
        current = self.state.current
        if current in ("loading", "stop"):
            return
        if act == "click_mute":
            self.mute()
        elif act in ("pause", "click_pause"):
            self.pause()
        elif act in ("start", "click_button"):
            if current == "ready":
                self.set_state(current="play")
        elif act in ("left", "right", "stop_left", "stop_right"):
            if current == "play":
                self._steer(act)
        elif act in ("tap_left", "tap_right", "tap_end"):
            self._tap(act)
        elif act == "reload":
            # Allowed once at most the terminal burst is still running.
            if current == "over" and len(self.effects) <= 1:
                self.load()
        else:
            log.debug("unhandled action", act)

    def _steer(self, act: str) -> None:
        if act == "left":
            self.input.left = True
        elif act == "right":
            self.input.right = True
        elif act == "stop_left":
            self.input.left = False
        elif act == "stop_right":
            self.input.right = False

    def _tap(self, act: str) -> None:
        if self.state.current != "play" or self.frame.count < TAP_GRACE_FRAMES:
            return
        self.input.left = act == "tap_left"
        self.input.right = act == "tap_right"

    def pause(self) -> None:
        if self.state.current != "play":
            return
        paused = not self.state.paused
        self.set_state(paused=paused)
        self.overlay.set_pause(paused)
        if paused:
            self.cancel_frame()
            self.audio.suspend()
            self.overlay.set_banner("Paused")
        else:
            self.request_frame(self.play, resumed=True)
            if not self.state.muted:
                self.audio.resume()
            self.overlay.hide("banner")

    def mute(self) -> None:
        muted = self.settings.toggle_muted()
        self.set_state(muted=muted)
        self.overlay.set_mute(muted)
        if muted:
            self.audio.suspend()
        elif not self.state.paused:
            self.audio.resume()

    # Audio ----------------------------------------------------------
    def playback(self, key: str, buffer, **options) -> Optional[PlaylistEntry]:
        if self.state.muted:
            return None
        entry_id = uuid.uuid4().hex[:13]

        def _finished():
            self.playlist = [s for s in self.playlist if s.id != entry_id]

        handle = self.audio.play(buffer, on_end=_finished, **options)
        if handle is None:
            # Nothing is playing, so no on_end will ever arrive.
            return None
        entry = PlaylistEntry(entry_id, key, handle)
        self.playlist.append(entry)
        return entry

    def stop_playback(self, key: str) -> None:
        keep = []
        for entry in self.playlist:
            if entry.key == key:
                self.audio.pause(entry.handle)
            else:
                keep.append(entry)
        self.playlist = keep

    def stop_playlist(self) -> None:
        for key in {entry.key for entry in self.playlist}:
            self.stop_playback(key)

    # State & scheduling ---------------------------------------------
    def set_state(self, **changes) -> None:
        before = self.state.current
        self.state = self.state.transition(**changes)
        if self.state.current != before:
            log.debug("state", before, "->", self.state.current)

    def request_frame(self, callback: FrameCallback, resumed: bool = False) -> None:
        now = self.clock()
        rate = 0 if resumed else now - self.frame.time
        self.frame = FrameClock(
            count=self.scheduler.request(callback),
            time=now,
            rate=rate,
            scale=self.screen.scale * rate * FRAME_SCALE_FACTOR,
        )

    def cancel_frame(self) -> None:
        self.scheduler.cancel(self.frame.count)


__all__ = ["GameSession", "PlaylistEntry"]
