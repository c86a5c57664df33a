"""
Turns recognizer output into desktop actions.

CLICK taps, LONG_PRESS_START/END hold and release the button, SWIPE_START
records the drag origin and SWIPE_END performs an amplified drag. BACK, HOME,
RECENT_APPS and NOTIFICATIONS send the configured hotkeys.
"""
import logging
from typing import Dict, List, Optional, Tuple

from webcam.config import ActionConfig
from webcam.events import Gesture, GestureState

from .backend import ActionBackend, Point

logger = logging.getLogger(__name__)


def amplify_swipe(
    start: Point,
    end: Point,
    factor: float,
    screen_size: Tuple[int, int],
) -> Tuple[Point, Point]:
    """
    Scale a drag vector around its midpoint and clamp both ends to the screen.
    """
    width, height = screen_size
    cx = (start[0] + end[0]) / 2.0
    cy = (start[1] + end[1]) / 2.0

    def scale(point: Point) -> Point:
        x = cx + (point[0] - cx) * factor
        y = cy + (point[1] - cy) * factor
        return min(max(x, 0.0), float(width)), min(max(y, 0.0), float(height))

    return scale(start), scale(end)


class ActionDispatcher:
    """
    Consumer of GestureState.

    Backend failures are logged and swallowed so a single failed action does
    not stop the gesture stream.
    """

    def __init__(self, backend: ActionBackend, config: ActionConfig, screen_size: Tuple[int, int]):
        self._backend = backend
        self._config = config
        self._screen_size = screen_size

        self._swipe_origin: Optional[Point] = None
        self._pressed_at: Optional[Point] = None

        self._hotkeys: Dict[Gesture, List[str]] = {
            Gesture.BACK: config.back_keys,
            Gesture.HOME: config.home_keys,
            Gesture.RECENT_APPS: config.recents_keys,
            Gesture.NOTIFICATIONS: config.notifications_keys,
        }

    @property
    def is_swiping(self) -> bool:
        return self._swipe_origin is not None

    @property
    def is_pressed(self) -> bool:
        return self._pressed_at is not None

    def handle(self, state: GestureState) -> None:
        if not self._config.enabled:
            return
        try:
            self._dispatch(state)
        except Exception:
            logger.exception("Action for %s failed", state.gesture.name)

    def _dispatch(self, state: GestureState) -> None:
        gesture = state.gesture
        pos = state.position

        if gesture in self._hotkeys:
            keys = self._hotkeys[gesture]
            if keys:
                logger.info("%s -> %s", gesture.name, "+".join(keys))
                self._backend.hotkey(keys)
            return

        if gesture == Gesture.HAND_LOST:
            self._release_held_button(pos)
            self._swipe_origin = None
            return

        if pos is None:
            return

        if gesture == Gesture.CLICK:
            logger.info("Tap at (%.0f, %.0f)", *pos)
            self._backend.tap(*pos)

        elif gesture == Gesture.LONG_PRESS_START:
            logger.info("Long press at (%.0f, %.0f)", *pos)
            self._backend.press(*pos)
            self._pressed_at = pos

        elif gesture == Gesture.LONG_PRESS_END:
            self._release_held_button(pos)

        elif gesture == Gesture.SWIPE_START:
            # A swipe can take priority over a held press; never leave it down
            self._release_held_button(pos)
            self._swipe_origin = pos

        elif gesture == Gesture.SWIPE_END:
            if self._swipe_origin is None:
                logger.debug("SWIPE_END without an origin, ignored")
                return
            start, end = amplify_swipe(
                self._swipe_origin, pos, self._config.swipe_amplify, self._screen_size
            )
            self._swipe_origin = None
            logger.info("Swipe (%.0f, %.0f) -> (%.0f, %.0f)", *start, *end)
            self._backend.drag(start, end, self._config.swipe_duration)

        elif self._config.move_cursor and state.hand_present and not self.is_swiping:
            self._backend.move_to(*pos)

    def _release_held_button(self, pos: Optional[Point]) -> None:
        if self._pressed_at is None:
            return
        x, y = pos if pos is not None else self._pressed_at
        self._pressed_at = None
        self._backend.release(x, y)
