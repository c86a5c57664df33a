"""
Gesture recognition from hand landmarks.
Turns one landmark frame into a stabilized cursor position and one gesture event.
"""
from typing import Dict, Optional, Tuple
import logging

from .config import GestureConfig
from .cursor import CursorMapper, CursorStabilizer
from .events import Gesture, GestureState
from .landmarks import HandLandmarks
from .one_euro_filter import OneEuroFilter
from .pinch import (
    CHANNEL_ORDER,
    CLICK,
    PINKY,
    PinchChannel,
    PinchClassifier,
    build_channels,
)

logger = logging.getLogger(__name__)

# Channels that pin the cursor while pinched
_FREEZING_CHANNELS = (CLICK, PINKY)

# Too frequent to log
_QUIET_GESTURES = (Gesture.NONE, Gesture.SWIPING)


class GestureRecognizer:
    """
    Recognizes pinch gestures and smooths the cursor.

    Each call to update() consumes one frame and returns exactly one
    GestureState. Calls must be serialized; the recognizer keeps all of its
    filter and channel state in place.

    Gestures detected:
    - Swipe: Thumb + index, tracked live while held
    - Click / long press: Thumb + middle, split by hold duration
    - Back: Thumb + ring
    - Home / recent apps: Thumb + pinky, split by hold duration
    """

    def __init__(self, config: GestureConfig, screen_size: Tuple[int, int]):
        """
        Initialize gesture recognizer.

        Args:
            config: Gesture detection thresholds and filter tuning
            screen_size: (width, height) of the target screen in pixels
        """
        self._config = config

        self._mapper = CursorMapper(
            screen_size,
            sensitivity_x=config.sensitivity_x,
            sensitivity_y=config.sensitivity_y,
        )
        self._filter_x = OneEuroFilter(config.min_cutoff, config.beta, config.d_cutoff)
        self._filter_y = OneEuroFilter(config.min_cutoff, config.beta, config.d_cutoff)
        self._stabilizer = CursorStabilizer()

        self._channels: Dict[str, PinchChannel] = build_channels(config)
        self._classifier = PinchClassifier(
            {name: channel.threshold for name, channel in self._channels.items()}
        )

        self._hand_lost_counter = 0

    @property
    def channels(self) -> Dict[str, PinchChannel]:
        return self._channels

    @property
    def last_position(self) -> Optional[Tuple[float, float]]:
        return self._stabilizer.last_pos

    @property
    def hand_lost_counter(self) -> int:
        return self._hand_lost_counter

    def update(self, landmarks: Optional[HandLandmarks], timestamp: float) -> GestureState:
        """
        Process one frame.

        Args:
            landmarks: Detected hand, or None when no hand is in view
            timestamp: Frame time in seconds (monotonic)
        """
        if landmarks is None:
            state = self._handle_hand_lost()
        else:
            state = self._handle_hand(landmarks, timestamp)

        if state.gesture not in _QUIET_GESTURES:
            logger.debug("%s at %s", state.gesture.name, state.position)
        return state

    def reset(self) -> None:
        """Forget all history, as if freshly constructed."""
        self._filter_x.reset()
        self._filter_y.reset()
        self._stabilizer.reset()
        for channel in self._channels.values():
            channel.reset()
        self._hand_lost_counter = 0

    def _handle_hand(self, landmarks: HandLandmarks, timestamp: float) -> GestureState:
        self._hand_lost_counter = 0

        # Cursor: map, then smooth each axis
        target_x, target_y = self._mapper.map(landmarks.index_tip)
        smoothed = (
            self._filter_x.filter(target_x, timestamp),
            self._filter_y.filter(target_y, timestamp),
        )

        # Pinches: every channel advances, the highest priority event wins
        reading = self._classifier.classify(landmarks)
        gesture = Gesture.NONE
        for name in CHANNEL_ORDER:
            event = self._channels[name].step(reading.is_active(name), timestamp)
            if gesture == Gesture.NONE:
                gesture = event

        should_freeze = reading.active in _FREEZING_CHANNELS
        position = self._stabilizer.apply(smoothed, should_freeze)

        return GestureState(
            gesture=gesture,
            position=position,
            active_channel=reading.active,
            pinch_distances=reading.distances,
            handedness=landmarks.handedness,
            hand_present=True,
        )

    def _handle_hand_lost(self) -> GestureState:
        """
        Finalize whatever pinch was in flight when the hand disappeared.

        The owed terminal event (SWIPE_END, CLICK, LONG_PRESS_END or HOME) is
        reported at the last cursor position. Every channel is cleared. With
        nothing owed, HAND_LOST is reported once the hand has been missing for
        `hand_lost_frames` consecutive frames.
        """
        self._hand_lost_counter += 1

        gesture = Gesture.NONE
        for name in CHANNEL_ORDER:
            event = self._channels[name].finalize()
            if gesture == Gesture.NONE:
                gesture = event

        self._stabilizer.unfreeze()

        if gesture == Gesture.NONE and self._hand_lost_counter >= self._config.hand_lost_frames:
            gesture = Gesture.HAND_LOST

        return GestureState(
            gesture=gesture,
            position=self._stabilizer.last_pos,
        )
