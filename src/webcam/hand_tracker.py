"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and hand landmark detection.
"""
from pathlib import Path
from typing import Optional
import logging
import time
import cv2
import numpy as np
import mediapipe as mp

from .config import Config, CameraConfig, MediaPipeConfig
from .landmarks import HAND_CONNECTIONS, NUM_LANDMARKS, HandLandmarks, TrackedFrame

logger = logging.getLogger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"

# BGR colours for the debug preview
_POINT_COLOR = (0, 255, 255)
_THUMB_COLOR = (0, 0, 255)
_FINGER_COLOR = (255, 255, 0)
_LINE_COLOR = (0, 255, 0)


class HandTracker:
    """
    MediaPipe hand tracking wrapper with camera management.
    Uses the MediaPipe Tasks API (0.10+) in VIDEO mode, one hand.

    Detection problems never raise out of capture(): they are logged and
    reported as a frame without a hand.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: PinchPoint configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        if model_path is None and self._mp_config.model_path:
            model_path = Path(self._mp_config.model_path)
        self._model_path = Path(model_path or self.DEFAULT_MODEL_PATH)

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        # State
        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error("Model file not found: %s", self._model_path)
            logger.error("Download from: %s", MODEL_URL)
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error("Could not open camera %d", self._camera_config.device_id)
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_hand_presence_confidence=self._mp_config.min_presence_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info("Hand tracker started (camera %d, %dx%d)",
                    self._camera_config.device_id,
                    self._camera_config.width, self._camera_config.height)
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None

    def capture(self) -> Optional[TrackedFrame]:
        """
        Capture one camera frame and detect the hand in it.

        Returns:
            TrackedFrame (landmarks None when no hand), or None when no camera
            frame could be read.
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return None

        ret, frame = self._cap.read()
        if not ret:
            return None

        now = time.perf_counter()
        self._frame_count += 1

        # Detection runs on the raw (unmirrored) image; the cursor mapper mirrors
        self._last_frame = frame

        return TrackedFrame(landmarks=self._detect(frame, now), timestamp=now)

    def _detect(self, frame: np.ndarray, now: float) -> Optional[HandLandmarks]:
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # MediaPipe VIDEO mode rejects non-increasing timestamps
        timestamp_ms = int((now - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        try:
            result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        except Exception:
            logger.exception("Hand detection failed on frame %d", self._frame_count)
            return None

        if not result.hand_landmarks:
            return None

        hand_landmarks = result.hand_landmarks[0]
        if len(hand_landmarks) != NUM_LANDMARKS:
            logger.warning("Expected %d landmarks, got %d", NUM_LANDMARKS, len(hand_landmarks))
            return None

        handedness = result.handedness[0][0] if result.handedness else None

        return HandLandmarks(
            landmarks=[(lm.x, lm.y) for lm in hand_landmarks],
            handedness=handedness.category_name if handedness else "Unknown",
            confidence=handedness.score if handedness else 1.0,
        )

    def get_frame_with_landmarks(
        self,
        landmarks: Optional[HandLandmarks] = None,
        black_background: bool = False
    ) -> Optional[np.ndarray]:
        """
        Get last frame (mirrored) with optional landmark overlay for debugging.

        Args:
            landmarks: If provided, draw landmarks on frame.
            black_background: If True, draw on black instead of camera image.

        Returns:
            Frame with landmarks drawn, or None if no frame available.
        """
        if self._last_frame is None:
            return None

        if black_background:
            frame = np.zeros_like(self._last_frame)
        else:
            frame = cv2.flip(self._last_frame, 1)

        if landmarks is not None:
            h, w = frame.shape[:2]

            def to_px(point):
                return int((1.0 - point[0]) * w), int(point[1] * h)

            for start_idx, end_idx in HAND_CONNECTIONS:
                cv2.line(frame, to_px(landmarks.get(start_idx)), to_px(landmarks.get(end_idx)),
                         _LINE_COLOR, 2)

            for i, point in enumerate(landmarks.landmarks):
                if i == HandLandmarks.THUMB_TIP:
                    color, radius = _THUMB_COLOR, 8
                elif i in (HandLandmarks.INDEX_TIP, HandLandmarks.MIDDLE_TIP):
                    color, radius = _FINGER_COLOR, 10
                else:
                    color, radius = _POINT_COLOR, 5
                cv2.circle(frame, to_px(point), radius, color, -1)

        return frame

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
