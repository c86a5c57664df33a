"""
Background worker for MediaPipe hand tracking and gesture recognition.
Runs in a separate QThread to avoid blocking the UI.
"""
import logging
import threading
import time
from typing import Optional, Tuple
from PyQt5.QtCore import QObject, pyqtSignal

from .events import Gesture
from .frame_slot import FrameSlot
from .gesture_recognizer import GestureRecognizer
from .hand_tracker import HandTracker
from .landmarks import TrackedFrame

logger = logging.getLogger(__name__)


class WebcamWorker(QObject):
    """
    Worker class that handles the MediaPipe processing loop.
    Emits signals for UI updates.

    A capture thread pushes detections into a single-slot FrameSlot; the
    processing loop drains it in arrival order, so the recognizer sees one
    frame at a time and a slow consumer only ever skips stale frames.
    """
    # Signals
    gesture_detected = pyqtSignal(object)  # Emits GestureState
    hand_lost = pyqtSignal()
    frame_ready = pyqtSignal(object)  # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)

    PREVIEW_FPS = 5

    def __init__(self, config, screen_size: Tuple[int, int], parent=None):
        super().__init__(parent)
        self._config = config
        self._screen_size = screen_size
        self._tracker: Optional[HandTracker] = None
        self._recognizer: Optional[GestureRecognizer] = None
        self._slot: FrameSlot[TrackedFrame] = FrameSlot()
        self._is_running = False
        self._capture_thread: Optional[threading.Thread] = None

    def _capture_loop(self):
        """Background thread to pull camera frames as fast as possible."""
        while self._is_running:
            try:
                tracked = self._tracker.capture()
            except Exception:
                logger.exception("Capture thread error")
                time.sleep(0.1)  # Cool down on error
                continue
            if tracked is None:
                time.sleep(0.005)
                continue
            self._slot.put(tracked)

    def start_process(self):
        """Main processing loop. Runs in worker thread."""
        self._tracker = HandTracker(self._config)
        self._recognizer = GestureRecognizer(self._config.gestures, self._screen_size)

        if not self._tracker.start():
            self.error.emit("Could not start hand tracker (camera or model missing)")
            return

        self._is_running = True
        self._slot = FrameSlot()

        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()

        last_preview_time = 0.0
        preview_interval = 1.0 / self.PREVIEW_FPS
        was_lost = False

        try:
            while self._is_running:
                tracked = self._slot.take(timeout=0.5)
                if tracked is None:
                    continue

                state = self._recognizer.update(tracked.landmarks, tracked.timestamp)
                self.gesture_detected.emit(state)

                is_lost = state.gesture == Gesture.HAND_LOST
                if is_lost and not was_lost:
                    self.hand_lost.emit()
                was_lost = is_lost

                if self._config.ui.show_preview:
                    now = time.perf_counter()
                    if now - last_preview_time >= preview_interval:
                        frame = self._tracker.get_frame_with_landmarks(tracked.landmarks)
                        if frame is not None:
                            self.frame_ready.emit(frame)
                        last_preview_time = now

        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {e}")
        finally:
            self._is_running = False
            self._slot.close()
            if self._capture_thread:
                self._capture_thread.join(timeout=1.0)
            if self._slot.dropped:
                logger.info("Dropped %d stale frames", self._slot.dropped)
            self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False
        self._slot.close()
