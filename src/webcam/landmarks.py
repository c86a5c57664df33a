"""
Hand landmark containers shared by the tracker and the recognizer.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

NUM_LANDMARKS = 21


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from MediaPipe.

    Attributes:
        landmarks: List of 21 (x, y) tuples, normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Tuple[float, float]]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    def get(self, index: int) -> Tuple[float, float]:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def thumb_tip(self) -> Tuple[float, float]:
        return self.landmarks[self.THUMB_TIP]

    @property
    def index_tip(self) -> Tuple[float, float]:
        return self.landmarks[self.INDEX_TIP]

    @property
    def middle_tip(self) -> Tuple[float, float]:
        return self.landmarks[self.MIDDLE_TIP]

    @property
    def ring_tip(self) -> Tuple[float, float]:
        return self.landmarks[self.RING_TIP]

    @property
    def pinky_tip(self) -> Tuple[float, float]:
        return self.landmarks[self.PINKY_TIP]


@dataclass
class TrackedFrame:
    """One detection result: landmarks is None when no hand was found."""
    landmarks: Optional[HandLandmarks]
    timestamp: float   # seconds, monotonic


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
