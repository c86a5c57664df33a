from typing import Optional, Tuple


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class CursorMapper:
    """Map a normalized fingertip position to a screen pixel target."""

    def __init__(
        self,
        screen_size: Tuple[int, int],
        sensitivity_x: float = 2.0,
        sensitivity_y: float = 2.5,
    ) -> None:
        self.screen_w, self.screen_h = screen_size
        self.sensitivity_x = sensitivity_x
        self.sensitivity_y = sensitivity_y

    def map(self, norm_point: Tuple[float, float]) -> Tuple[float, float]:
        """Map normalized camera coords (0-1) to screen pixels."""
        x, y = norm_point

        # Front camera: mirror so moving the hand right moves the cursor right
        mx = 1.0 - x

        # Gain around the frame center, so a small hand movement covers the screen
        sx = _clamp((mx - 0.5) * self.sensitivity_x + 0.5)
        sy = _clamp((y - 0.5) * self.sensitivity_y + 0.5)

        return sx * self.screen_w, sy * self.screen_h


class CursorStabilizer:
    """
    Hold the reported cursor still while a precision pinch is active.

    The snapshot is taken on the first frozen frame and reported until the
    freeze ends, so closing the fingers does not drag the target.
    """

    def __init__(self) -> None:
        self.is_frozen = False
        self.frozen_pos: Optional[Tuple[float, float]] = None
        self.last_pos: Optional[Tuple[float, float]] = None

    def apply(self, position: Tuple[float, float], should_freeze: bool) -> Tuple[float, float]:
        if should_freeze and not self.is_frozen:
            self.is_frozen = True
            self.frozen_pos = position
        elif not should_freeze:
            self.is_frozen = False

        reported = self.frozen_pos if self.is_frozen else position
        self.last_pos = reported
        return reported

    def unfreeze(self) -> None:
        """Drop the snapshot; the last reported position is kept."""
        self.is_frozen = False
        self.frozen_pos = None

    def reset(self) -> None:
        self.unfreeze()
        self.last_pos = None
