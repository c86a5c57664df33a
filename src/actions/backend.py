"""
Action backends: the OS-facing side of the dispatcher.
"""
import logging
from typing import Sequence, Tuple

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class ActionBackend:
    """
    Interface the dispatcher drives. Coordinates are screen pixels.
    """

    def move_to(self, x: float, y: float) -> None:
        raise NotImplementedError

    def tap(self, x: float, y: float) -> None:
        raise NotImplementedError

    def press(self, x: float, y: float) -> None:
        """Hold the primary button down at (x, y)."""
        raise NotImplementedError

    def release(self, x: float, y: float) -> None:
        raise NotImplementedError

    def drag(self, start: Point, end: Point, duration: float) -> None:
        raise NotImplementedError

    def hotkey(self, keys: Sequence[str]) -> None:
        raise NotImplementedError


class DryRunBackend(ActionBackend):
    """Logs every action instead of performing it."""

    def move_to(self, x, y):
        logger.debug("move_to(%.0f, %.0f)", x, y)

    def tap(self, x, y):
        logger.info("tap(%.0f, %.0f)", x, y)

    def press(self, x, y):
        logger.info("press(%.0f, %.0f)", x, y)

    def release(self, x, y):
        logger.info("release(%.0f, %.0f)", x, y)

    def drag(self, start, end, duration):
        logger.info("drag(%.0f, %.0f -> %.0f, %.0f, %.2fs)",
                    start[0], start[1], end[0], end[1], duration)

    def hotkey(self, keys):
        logger.info("hotkey(%s)", "+".join(keys))
