import pytest

from webcam.landmarks import HandLandmarks

FAR = 0.2


def _make_hand(swipe=FAR, click=FAR, back=FAR, pinky=FAR, index=(0.5, 0.5)):
    """
    Build 21 landmarks with the given thumb-to-fingertip distances.

    The thumb sits to the right of the index tip, so moving `index` moves the
    whole hand without changing any pinch distance.
    """
    ix, iy = index
    tx, ty = ix + swipe, iy
    points = [(0.5, 0.5)] * 21
    points[HandLandmarks.THUMB_TIP] = (tx, ty)
    points[HandLandmarks.INDEX_TIP] = (ix, iy)
    points[HandLandmarks.MIDDLE_TIP] = (tx, ty + click)
    points[HandLandmarks.RING_TIP] = (tx, ty - back)
    points[HandLandmarks.PINKY_TIP] = (tx + pinky * 0.6, ty + pinky * 0.8)
    return HandLandmarks(landmarks=points, handedness="Right", confidence=0.9)


@pytest.fixture
def make_hand():
    return _make_hand
