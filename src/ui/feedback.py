"""
Visual feedback for each gesture: label text, colours and cursor opacity.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from webcam.events import Gesture

RGB = Tuple[int, int, int]

IDLE_COLOR: RGB = (0, 255, 255)       # cyan
RED: RGB = (255, 0, 0)
ORANGE: RGB = (255, 102, 0)
MAGENTA: RGB = (255, 0, 255)
GREEN: RGB = (0, 255, 0)
SKY_BLUE: RGB = (0, 191, 255)
GOLD: RGB = (255, 215, 0)
YELLOW: RGB = (255, 255, 0)

FULL_ALPHA = 255
DIMMED_ALPHA = 80


@dataclass(frozen=True)
class Feedback:
    label: Optional[str] = None
    label_color: Optional[RGB] = None
    cursor_color: Optional[RGB] = None   # None leaves the colour alone
    reset_ms: Optional[int] = None       # back to IDLE_COLOR after this delay
    alpha: Optional[int] = None


_NO_FEEDBACK = Feedback()

FEEDBACK: Dict[Gesture, Feedback] = {
    Gesture.CLICK: Feedback("TAP", RED, RED, reset_ms=200),
    Gesture.LONG_PRESS_START: Feedback("LONG PRESS", ORANGE, ORANGE),
    Gesture.LONG_PRESS_END: Feedback(cursor_color=IDLE_COLOR),
    Gesture.BACK: Feedback("← BACK", MAGENTA, MAGENTA, reset_ms=300),
    Gesture.HOME: Feedback("⌂ HOME", GREEN, GREEN, reset_ms=300),
    Gesture.RECENT_APPS: Feedback("☐ RECENTS", SKY_BLUE, SKY_BLUE, reset_ms=400),
    Gesture.NOTIFICATIONS: Feedback("NOTIFICATIONS", GOLD, GOLD, reset_ms=400),
    Gesture.SWIPE_START: Feedback("SWIPE...", YELLOW, YELLOW),
    Gesture.SWIPE_END: Feedback("SWIPE ✓", GREEN, IDLE_COLOR),
    Gesture.HAND_LOST: Feedback(alpha=DIMMED_ALPHA),
    Gesture.NONE: Feedback(alpha=FULL_ALPHA),
}


def feedback_for(gesture: Gesture) -> Feedback:
    return FEEDBACK.get(gesture, _NO_FEEDBACK)
