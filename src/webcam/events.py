"""
Gesture vocabulary and the per-frame recognizer output.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Tuple


class Gesture(Enum):
    """Detected gesture types."""
    NONE = auto()

    # Middle + thumb
    CLICK = auto()              # Released before the hold threshold
    LONG_PRESS_START = auto()   # Held past the threshold
    LONG_PRESS_END = auto()     # Released after a long press

    # Ring + thumb
    BACK = auto()

    # Pinky + thumb
    HOME = auto()               # Released before the hold threshold
    RECENT_APPS = auto()        # Held past the threshold
    NOTIFICATIONS = auto()      # No trigger yet, see DESIGN.md

    # Index + thumb
    SWIPE_START = auto()
    SWIPING = auto()
    SWIPE_END = auto()

    HAND_LOST = auto()

    @property
    def is_positional(self) -> bool:
        """True if the reported position is the action target."""
        return self in _POSITIONAL


_POSITIONAL = frozenset({
    Gesture.CLICK,
    Gesture.LONG_PRESS_START,
    Gesture.LONG_PRESS_END,
    Gesture.SWIPE_START,
    Gesture.SWIPING,
    Gesture.SWIPE_END,
})


@dataclass
class GestureState:
    """Current gesture state with additional info."""
    gesture: Gesture
    position: Optional[Tuple[float, float]] = None  # Screen pixels
    active_channel: Optional[str] = None
    pinch_distances: Dict[str, float] = field(default_factory=dict)
    handedness: str = "Unknown"
    hand_present: bool = False
