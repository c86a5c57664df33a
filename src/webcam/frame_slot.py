"""
Single-slot hand-off between the capture thread and the processing loop.
"""
import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FrameSlot(Generic[T]):
    """
    Holds at most one pending item.

    put() overwrites an item nobody has taken yet (keep latest, drop oldest).
    take() blocks until an item arrives, the timeout expires, or the slot is
    closed.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._item: Optional[T] = None
        self._has_item = False
        self._closed = False
        self._dropped = 0

    def put(self, item: T) -> bool:
        """
        Offer an item. Returns False if the slot has been closed.
        """
        with self._cond:
            if self._closed:
                return False
            if self._has_item:
                self._dropped += 1
            self._item = item
            self._has_item = True
            self._cond.notify()
            return True

    def take(self, timeout: Optional[float] = None) -> Optional[T]:
        """
        Remove and return the pending item, or None on timeout / close.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._has_item or self._closed, timeout=timeout)
            if not self._has_item:
                return None
            item = self._item
            self._item = None
            self._has_item = False
            return item

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def dropped(self) -> int:
        """Items overwritten before they were taken."""
        return self._dropped
