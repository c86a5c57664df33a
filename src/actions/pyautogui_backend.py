"""
Desktop backend using pyautogui.
Imported lazily: pyautogui needs a display at import time.
"""
from typing import Tuple
import pyautogui

from .backend import ActionBackend

pyautogui.FAILSAFE = False
pyautogui.PAUSE = 0


def screen_size() -> Tuple[int, int]:
    width, height = pyautogui.size()
    return int(width), int(height)


class PyAutoGuiBackend(ActionBackend):
    """Synthesizes mouse and keyboard input on the local desktop."""

    def move_to(self, x, y):
        pyautogui.moveTo(float(x), float(y), _pause=False)

    def tap(self, x, y):
        pyautogui.click(float(x), float(y))

    def press(self, x, y):
        pyautogui.mouseDown(float(x), float(y), button='left')

    def release(self, x, y):
        pyautogui.mouseUp(float(x), float(y), button='left')

    def drag(self, start, end, duration):
        pyautogui.moveTo(float(start[0]), float(start[1]), _pause=False)
        pyautogui.dragTo(float(end[0]), float(end[1]), duration=duration, button='left')

    def hotkey(self, keys):
        pyautogui.hotkey(*keys)
