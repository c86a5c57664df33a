"""
Overlay window - frameless, transparent, always-on-top, click-through.
Draws the hand cursor, the gesture label and an optional landmark preview.
"""
from typing import Optional, Tuple
from PyQt5.QtWidgets import QApplication, QLabel, QWidget
from PyQt5.QtCore import Qt, QPointF, QRectF, QTimer
from PyQt5.QtGui import QColor, QFont, QImage, QPainter, QPen, QPixmap
import numpy as np

from webcam.events import GestureState

from .feedback import FULL_ALPHA, IDLE_COLOR, feedback_for


class CursorOverlay(QWidget):
    """
    Full-screen transparent layer showing where the hand cursor is.

    The overlay never takes input, so clicks dispatched at the cursor
    position reach the window underneath.
    """

    PREVIEW_SIZE = (240, 320)

    def __init__(
        self,
        cursor_size: int = 48,
        label_timeout_ms: int = 1000,
        show_preview: bool = False,
        parent=None,
    ):
        super().__init__(parent)

        self._cursor_size = cursor_size
        self._label_timeout_ms = label_timeout_ms

        self._cursor_pos: Optional[Tuple[float, float]] = None
        self._cursor_color = QColor(*IDLE_COLOR)
        self._cursor_alpha = FULL_ALPHA
        self._label_text: Optional[str] = None
        self._label_color = QColor(255, 255, 255)

        self._color_timer = QTimer(self)
        self._color_timer.setSingleShot(True)
        self._color_timer.timeout.connect(self._reset_color)

        self._label_timer = QTimer(self)
        self._label_timer.setSingleShot(True)
        self._label_timer.timeout.connect(self._hide_label)

        self._setup_window()

        self.webcam_preview = QLabel(self)
        self.webcam_preview.resize(*self.PREVIEW_SIZE)
        self.webcam_preview.setScaledContents(True)
        self.webcam_preview.setVisible(show_preview)
        self._position_preview()

    def _setup_window(self):
        """Configure window flags and cover the primary screen."""
        self.setWindowFlags(
            Qt.FramelessWindowHint |
            Qt.WindowStaysOnTopHint |
            Qt.WindowTransparentForInput |
            Qt.Tool  # Don't show in taskbar
        )
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_ShowWithoutActivating)
        self.setObjectName("CursorOverlay")

        screen = QApplication.primaryScreen()
        if screen is not None:
            self.setGeometry(screen.geometry())

    def _position_preview(self):
        w, h = self.PREVIEW_SIZE
        margin = 20
        self.webcam_preview.move(self.width() - w - margin, self.height() - h - margin)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._position_preview()

    def update_state(self, state: GestureState):
        """Slot for WebcamWorker.gesture_detected."""
        if state.position is not None:
            self._cursor_pos = state.position

        fb = feedback_for(state.gesture)
        if fb.cursor_color is not None:
            self._cursor_color = QColor(*fb.cursor_color)
            self._color_timer.stop()
        if fb.reset_ms is not None:
            self._color_timer.start(fb.reset_ms)
        if fb.alpha is not None:
            self._cursor_alpha = fb.alpha
        if fb.label is not None:
            self._label_text = fb.label
            self._label_color = QColor(*fb.label_color)
            self._label_timer.start(self._label_timeout_ms)

        self.update()

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the landmark preview.

        Args:
            frame: BGR numpy array from HandTracker.get_frame_with_landmarks
        """
        if frame is None:
            self.webcam_preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    def _reset_color(self):
        self._cursor_color = QColor(*IDLE_COLOR)
        self.update()

    def _hide_label(self):
        self._label_text = None
        self.update()

    def paintEvent(self, event):
        """Draw the cursor ring, its centre dot and the gesture label."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        if self._cursor_pos is not None:
            # Screen pixels -> widget coordinates
            origin = self.geometry().topLeft()
            cx = self._cursor_pos[0] - origin.x()
            cy = self._cursor_pos[1] - origin.y()
            center = QPointF(cx, cy)

            color = QColor(self._cursor_color)
            color.setAlpha(self._cursor_alpha)

            ring_r = self._cursor_size * 0.4
            painter.setBrush(Qt.NoBrush)
            painter.setPen(QPen(color, 3))
            painter.drawEllipse(center, ring_r, ring_r)

            dot_r = self._cursor_size * 0.15
            painter.setPen(Qt.NoPen)
            painter.setBrush(color)
            painter.drawEllipse(center, dot_r, dot_r)

        if self._label_text:
            font = QFont()
            font.setPointSize(14)
            painter.setFont(font)
            metrics = painter.fontMetrics()
            text_w = metrics.horizontalAdvance(self._label_text) + 48
            text_h = metrics.height() + 24
            rect = QRectF((self.width() - text_w) / 2, 100, text_w, text_h)

            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(0, 0, 0, 204))
            painter.drawRoundedRect(rect, 24, 24)

            painter.setPen(self._label_color)
            painter.drawText(rect, Qt.AlignCenter, self._label_text)
