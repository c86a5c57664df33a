"""
PinchPoint UI Module

Gesture feedback styles. The PyQt5 overlay itself is in cursor_overlay.
"""
from .feedback import Feedback, feedback_for, FEEDBACK, IDLE_COLOR

__all__ = [
    'Feedback',
    'feedback_for',
    'FEEDBACK',
    'IDLE_COLOR',
]
