"""
Pinch detection: thumb-to-fingertip distances and the timed channel state machine.

Four channels share one state machine type:
- swipe (index):  SWIPE_START, SWIPING every frame, SWIPE_END
- click (middle): CLICK on a short pinch, LONG_PRESS_START / LONG_PRESS_END on a hold
- back (ring):    BACK once per pinch
- pinky (pinky):  HOME on a short pinch, RECENT_APPS on a hold
"""
from dataclasses import dataclass
from typing import Dict, Optional
import math

from .config import GestureConfig
from .events import Gesture
from .landmarks import HandLandmarks

SWIPE = "swipe"
CLICK = "click"
BACK = "back"
PINKY = "pinky"

# Highest priority first
CHANNEL_ORDER = (SWIPE, CLICK, BACK, PINKY)

_FINGERTIPS = {
    SWIPE: HandLandmarks.INDEX_TIP,
    CLICK: HandLandmarks.MIDDLE_TIP,
    BACK: HandLandmarks.RING_TIP,
    PINKY: HandLandmarks.PINKY_TIP,
}


def _distance_2d(a, b) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


@dataclass
class PinchReading:
    """Distances for every channel and the single channel that won priority."""
    distances: Dict[str, float]
    active: Optional[str] = None

    def is_active(self, name: str) -> bool:
        return self.active == name


class PinchClassifier:
    """Resolves the four thumb pinches into at most one active channel."""

    def __init__(self, thresholds: Dict[str, float]):
        missing = [name for name in CHANNEL_ORDER if name not in thresholds]
        if missing:
            raise ValueError(f"No pinch threshold for: {', '.join(missing)}")
        self.thresholds = dict(thresholds)

    def classify(self, landmarks: HandLandmarks) -> PinchReading:
        thumb = landmarks.thumb_tip
        distances = {
            name: _distance_2d(thumb, landmarks.get(tip))
            for name, tip in _FINGERTIPS.items()
        }

        # A lower channel never wins while a higher one is under threshold
        active = None
        for name in CHANNEL_ORDER:
            if distances[name] < self.thresholds[name]:
                active = name
                break

        return PinchReading(distances=distances, active=active)


class PinchChannel:
    """
    Edge-triggered pinch state machine with optional hold disambiguation.

    Without a hold threshold the channel emits `press` on activation, `repeat`
    on every further active frame and `release` on deactivation.

    With a hold threshold nothing is emitted on activation; once the pinch has
    lasted `hold_threshold` seconds `hold` is emitted a single time. On
    deactivation the channel emits `hold_release` if the hold fired, otherwise
    `release` (the tap outcome).
    """

    def __init__(
        self,
        name: str,
        threshold: float,
        press: Gesture = Gesture.NONE,
        repeat: Gesture = Gesture.NONE,
        release: Gesture = Gesture.NONE,
        hold_threshold: Optional[float] = None,
        hold: Gesture = Gesture.NONE,
        hold_release: Gesture = Gesture.NONE,
    ):
        self.name = name
        self.threshold = threshold
        self.press = press
        self.repeat = repeat
        self.release = release
        self.hold_threshold = hold_threshold
        self.hold = hold
        self.hold_release = hold_release

        self.is_active = False
        self.hold_start = 0.0
        self.hold_triggered = False

    def step(self, active: bool, timestamp: float) -> Gesture:
        """Advance one frame and return the event this channel produced."""
        was_active = self.is_active
        self.is_active = active

        if active and not was_active:
            self.hold_start = timestamp
            self.hold_triggered = False
            return self.press

        if active:
            if self.hold_threshold is None:
                return self.repeat
            if not self.hold_triggered and timestamp - self.hold_start >= self.hold_threshold:
                self.hold_triggered = True
                return self.hold
            return Gesture.NONE

        if was_active:
            return self._terminal_event()

        return Gesture.NONE

    def finalize(self) -> Gesture:
        """End the pinch because tracking was lost; returns the event still owed."""
        event = self._terminal_event() if self.is_active else Gesture.NONE
        self.reset()
        return event

    def reset(self) -> None:
        self.is_active = False
        self.hold_start = 0.0
        self.hold_triggered = False

    def _terminal_event(self) -> Gesture:
        triggered = self.hold_triggered
        self.hold_triggered = False
        return self.hold_release if triggered else self.release

    def __repr__(self):
        return (f"PinchChannel({self.name!r}, active={self.is_active}, "
                f"hold_triggered={self.hold_triggered})")


def build_channels(config: GestureConfig) -> Dict[str, PinchChannel]:
    """Create the four channels in priority order."""
    return {
        SWIPE: PinchChannel(
            SWIPE, config.swipe_threshold,
            press=Gesture.SWIPE_START,
            repeat=Gesture.SWIPING,
            release=Gesture.SWIPE_END,
        ),
        CLICK: PinchChannel(
            CLICK, config.click_threshold,
            release=Gesture.CLICK,
            hold_threshold=config.long_press_threshold,
            hold=Gesture.LONG_PRESS_START,
            hold_release=Gesture.LONG_PRESS_END,
        ),
        BACK: PinchChannel(
            BACK, config.back_threshold,
            press=Gesture.BACK,
        ),
        PINKY: PinchChannel(
            PINKY, config.pinky_threshold,
            release=Gesture.HOME,
            hold_threshold=config.recent_apps_threshold,
            hold=Gesture.RECENT_APPS,
        ),
    }
