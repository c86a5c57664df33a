"""
PinchPoint Actions Module

Dispatches recognized gestures to the desktop. The pyautogui backend is
imported on demand from actions.pyautogui_backend.
"""
from .backend import ActionBackend, DryRunBackend
from .dispatcher import ActionDispatcher, amplify_swipe

__all__ = [
    'ActionBackend',
    'DryRunBackend',
    'ActionDispatcher',
    'amplify_swipe',
]
