"""Input routing.

Transforms raw pygame events into session *actions* depending on the
session's current state tag. Rules are plain functions ``event -> action |
None`` evaluated in declaration order; the first match wins for an event,
and an action repeated back to back within one batch is collapsed.

Actions:
- play:  left, right, stop_left, stop_right, pause, tap_left, tap_right, tap_end
- ready: start
- over:  reload
- any state but loading: click_<region> for overlay clicks (mute, pause, button)
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

import pygame

Action = str
Rule = Callable[[pygame.event.Event], Optional[Action]]
HitTest = Callable[[tuple], Optional[str]]


def _key_rule(key: int, action: Action, event_type=pygame.KEYDOWN) -> Rule:
    def _r(e: pygame.event.Event):
        if e.type == event_type and getattr(e, "key", None) == key:
            return action
        return None

    return _r


def _any_key_rule(action: Action) -> Rule:
    def _r(e: pygame.event.Event):
        return action if e.type == pygame.KEYDOWN else None

    return _r


def _tap_rule(e: pygame.event.Event) -> Optional[Action]:
    # Finger x is normalized to [0, 1]; the middle of the screen splits left/right.
    if e.type == pygame.FINGERDOWN:
        if e.x > 0.5:
            return "tap_right"
        if e.x < 0.5:
            return "tap_left"
        return None
    if e.type == pygame.FINGERUP:
        return "tap_end"
    return None


class InputRouter:
    """Maps pygame events to semantic actions for the current session state."""

    def __init__(self, hit_test: Optional[HitTest] = None) -> None:
        self.hit_test = hit_test
        self._rules: Dict[str, List[Rule]] = {}
        self._register_default_rules()

    def _click_rule(self, e: pygame.event.Event) -> Optional[Action]:
        if e.type != pygame.MOUSEBUTTONDOWN or getattr(e, "button", None) != 1:
            return None
        if self.hit_test is None:
            return None
        region = self.hit_test(e.pos)
        return f"click_{region}" if region else None

    def _register_default_rules(self) -> None:
        play_rules: List[Rule] = [
            _key_rule(pygame.K_LEFT, "left"),
            _key_rule(pygame.K_RIGHT, "right"),
            _key_rule(pygame.K_LEFT, "stop_left", pygame.KEYUP),
            _key_rule(pygame.K_RIGHT, "stop_right", pygame.KEYUP),
            _key_rule(pygame.K_SPACE, "pause", pygame.KEYUP),
            _tap_rule,
            self._click_rule,
        ]
        self._rules.update(
            {
                "loading": [],
                "ready": [_any_key_rule("start"), self._click_rule],
                "play": play_rules,
                "over": [_any_key_rule("reload"), self._click_rule],
                "stop": [],
            }
        )

    def process(self, events: Iterable[pygame.event.Event], state_name: str) -> List[Action]:
        rules = self._rules.get(state_name, [])
        actions: List[Action] = []
        for e in events:
            for rule in rules:
                a = rule(e)
                if a:
                    if not actions or actions[-1] != a:
                        actions.append(a)
                    break
        return actions


__all__ = ["InputRouter", "Action"]
