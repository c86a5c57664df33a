"""
PinchPoint Webcam Module

Pinch gesture recognition and cursor smoothing from hand landmarks.
The camera-facing pieces (HandTracker, WebcamWorker) live in their own
modules so the recognizer can be used without OpenCV, MediaPipe or Qt.
"""
from .config import Config, ConfigError, GestureConfig, load_config
from .events import Gesture, GestureState
from .frame_slot import FrameSlot
from .gesture_recognizer import GestureRecognizer
from .landmarks import HandLandmarks, TrackedFrame

__all__ = [
    'Config',
    'ConfigError',
    'GestureConfig',
    'load_config',
    'Gesture',
    'GestureState',
    'FrameSlot',
    'GestureRecognizer',
    'HandLandmarks',
    'TrackedFrame',
]
