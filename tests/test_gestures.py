import random
import pytest

from webcam.config import GestureConfig
from webcam.events import Gesture, GestureState
from webcam.gesture_recognizer import GestureRecognizer
from webcam.pinch import BACK, CLICK, PINKY, SWIPE

SCREEN = (1000, 800)
FRAME = 1 / 30


@pytest.fixture
def recognizer():
    return GestureRecognizer(GestureConfig(), SCREEN)


def feed(recognizer, frames):
    """frames: list of (landmarks or None, timestamp)."""
    return [recognizer.update(hand, t) for hand, t in frames]


def gestures(states):
    return [s.gesture for s in states]


def test_idle_hand_reports_position(recognizer, make_hand):
    state = recognizer.update(make_hand(), 0.0)
    assert state.gesture == Gesture.NONE
    assert state.hand_present
    assert state.active_channel is None
    # Centre of the frame maps to the centre of the screen
    assert state.position == pytest.approx((500.0, 400.0))
    assert recognizer.last_position == state.position


def test_swipe_then_hand_lost(recognizer, make_hand):
    frames = [(make_hand(swipe=0.03, index=(0.5 + 0.02 * i, 0.5)), i * FRAME) for i in range(3)]
    frames.append((None, 3 * FRAME))
    states = feed(recognizer, frames)

    assert gestures(states) == [
        Gesture.SWIPE_START, Gesture.SWIPING, Gesture.SWIPING, Gesture.SWIPE_END,
    ]
    assert states[-1].position == states[2].position
    assert recognizer.channels[SWIPE].is_active is False


def test_swipe_release(recognizer, make_hand):
    states = feed(recognizer, [
        (make_hand(swipe=0.03), 0.0),
        (make_hand(swipe=0.03), 0.1),
        (make_hand(), 0.2),
    ])
    assert gestures(states) == [Gesture.SWIPE_START, Gesture.SWIPING, Gesture.SWIPE_END]


def test_long_press(recognizer, make_hand):
    times = [0.0, 0.1, 0.2, 0.3, 0.4, 0.55, 0.6]
    frames = [(make_hand(click=0.02), t) for t in times]
    frames.append((make_hand(), 0.7))
    events = gestures(feed(recognizer, frames))

    assert events == [Gesture.NONE] * 5 + [
        Gesture.LONG_PRESS_START, Gesture.NONE, Gesture.LONG_PRESS_END,
    ]
    assert Gesture.CLICK not in events


def test_tap(recognizer, make_hand):
    frames = [(make_hand(click=0.02), t) for t in (0.0, 0.1, 0.2)]
    frames.append((make_hand(), 0.3))
    events = gestures(feed(recognizer, frames))

    assert events == [Gesture.NONE, Gesture.NONE, Gesture.NONE, Gesture.CLICK]


def test_hand_lost_after_threshold(recognizer):
    states = feed(recognizer, [(None, i * FRAME) for i in range(6)])

    assert gestures(states) == [Gesture.NONE] * 4 + [Gesture.HAND_LOST] * 2
    assert all(s.position is None for s in states)
    assert recognizer.hand_lost_counter == 6


def test_hand_lost_counter_resets(recognizer, make_hand):
    feed(recognizer, [(None, i * FRAME) for i in range(4)])
    recognizer.update(make_hand(), 4 * FRAME)
    states = feed(recognizer, [(None, (5 + i) * FRAME) for i in range(4)])

    assert Gesture.HAND_LOST not in gestures(states)


def test_hand_lost_threshold_is_configurable(make_hand):
    rec = GestureRecognizer(GestureConfig(hand_lost_frames=2), SCREEN)
    assert gestures(feed(rec, [(None, 0.0), (None, 0.1)])) == [Gesture.NONE, Gesture.HAND_LOST]


def test_back_single_shot(recognizer, make_hand):
    states = feed(recognizer, [
        (make_hand(back=0.02), 0.0),
        (make_hand(), 0.1),
    ])
    assert gestures(states) == [Gesture.BACK, Gesture.NONE]


def test_back_held_does_not_repeat(recognizer, make_hand):
    frames = [(make_hand(back=0.02), i * 0.2) for i in range(5)]
    assert gestures(feed(recognizer, frames)) == [Gesture.BACK] + [Gesture.NONE] * 4


def test_swipe_has_priority_over_click(recognizer, make_hand):
    state = recognizer.update(make_hand(swipe=0.02, click=0.02), 0.0)

    assert state.active_channel == SWIPE
    assert state.gesture == Gesture.SWIPE_START
    assert recognizer.channels[CLICK].is_active is False


def test_home_and_recent_apps(recognizer, make_hand):
    home = feed(recognizer, [(make_hand(pinky=0.02), 0.0), (make_hand(), 0.1)])
    assert gestures(home) == [Gesture.NONE, Gesture.HOME]

    recents = feed(recognizer, [
        (make_hand(pinky=0.02), 1.0),
        (make_hand(pinky=0.02), 1.6),
        (make_hand(), 1.7),
    ])
    assert gestures(recents) == [Gesture.NONE, Gesture.RECENT_APPS, Gesture.NONE]


def test_notifications_is_never_emitted(recognizer, make_hand):
    frames = [(make_hand(pinky=0.02), i * 0.25) for i in range(20)]
    frames.append((make_hand(), 5.0))
    assert Gesture.NOTIFICATIONS not in gestures(feed(recognizer, frames))


# --- hand loss finalization ---

def test_hand_lost_during_tap_clicks(recognizer, make_hand):
    tapped = recognizer.update(make_hand(click=0.02), 0.0)
    state = recognizer.update(None, 0.1)

    assert state.gesture == Gesture.CLICK
    assert state.position == tapped.position


def test_hand_lost_during_long_press_ends_it(recognizer, make_hand):
    feed(recognizer, [(make_hand(click=0.02), 0.0), (make_hand(click=0.02), 0.6)])
    state = recognizer.update(None, 0.7)

    assert state.gesture == Gesture.LONG_PRESS_END
    assert recognizer.channels[CLICK].hold_triggered is False


def test_hand_lost_during_pinky_goes_home(recognizer, make_hand):
    recognizer.update(make_hand(pinky=0.02), 0.0)
    assert recognizer.update(None, 0.1).gesture == Gesture.HOME


def test_hand_lost_after_recent_apps_owes_nothing(recognizer, make_hand):
    feed(recognizer, [(make_hand(pinky=0.02), 0.0), (make_hand(pinky=0.02), 0.6)])
    assert recognizer.update(None, 0.7).gesture == Gesture.NONE
    assert recognizer.channels[PINKY].hold_triggered is False


def test_back_can_fire_again_after_hand_lost(recognizer, make_hand):
    assert recognizer.update(make_hand(back=0.02), 0.0).gesture == Gesture.BACK
    assert recognizer.update(None, 0.1).gesture == Gesture.NONE
    assert recognizer.update(make_hand(back=0.02), 0.2).gesture == Gesture.BACK


def test_finalized_channel_is_not_released_twice(recognizer, make_hand):
    recognizer.update(make_hand(swipe=0.02), 0.0)
    assert recognizer.update(None, 0.1).gesture == Gesture.SWIPE_END
    assert recognizer.update(make_hand(), 0.2).gesture == Gesture.NONE


# --- cursor freeze ---

def test_click_freezes_cursor(recognizer, make_hand):
    recognizer.update(make_hand(index=(0.5, 0.5)), 0.0)
    onset = recognizer.update(make_hand(click=0.02, index=(0.5, 0.5)), 0.1)

    held = feed(recognizer, [
        (make_hand(click=0.02, index=(0.4 - 0.05 * i, 0.6)), 0.2 + 0.1 * i) for i in range(3)
    ])
    assert all(s.position == onset.position for s in held)

    released = recognizer.update(make_hand(index=(0.3, 0.6)), 0.6)
    assert released.gesture == Gesture.CLICK
    assert released.position != onset.position


def test_pinky_freezes_cursor(recognizer, make_hand):
    onset = recognizer.update(make_hand(pinky=0.02, index=(0.5, 0.5)), 0.0)
    moved = recognizer.update(make_hand(pinky=0.02, index=(0.3, 0.3)), 0.1)
    assert moved.position == onset.position


def test_swipe_tracks_cursor(recognizer, make_hand):
    start = recognizer.update(make_hand(swipe=0.02, index=(0.5, 0.5)), 0.0)
    moved = recognizer.update(make_hand(swipe=0.02, index=(0.3, 0.5)), 0.1)

    assert moved.gesture == Gesture.SWIPING
    assert moved.position[0] > start.position[0]  # mirrored: hand left, cursor right


def test_freeze_snapshot_retaken_after_hand_lost(recognizer, make_hand):
    first = recognizer.update(make_hand(click=0.02, index=(0.5, 0.5)), 0.0)
    recognizer.update(None, 0.1)
    # Hand returns elsewhere, already pinching
    again = recognizer.update(make_hand(click=0.02, index=(0.2, 0.2)), 0.2)

    assert again.gesture == Gesture.NONE
    assert again.position != first.position
    assert recognizer.update(make_hand(click=0.02, index=(0.6, 0.6)), 0.3).position == again.position


# --- properties over random sequences ---

def _random_frames(rng, make_hand, count):
    frames = []
    t = 0.0
    for _ in range(count):
        t += rng.choice([FRAME, 0.1, 0.3])
        if rng.random() < 0.15:
            frames.append((None, t))
            continue
        kwargs = {}
        name = rng.choice([SWIPE, CLICK, BACK, PINKY, None])
        if name:
            kwargs[name] = 0.02
        if rng.random() < 0.2:
            kwargs[rng.choice([SWIPE, CLICK, BACK, PINKY])] = 0.01
        index = (rng.uniform(0.2, 0.8), rng.uniform(0.2, 0.8))
        frames.append((make_hand(index=index, **kwargs), t))
    return frames


def test_one_state_per_frame(recognizer, make_hand):
    rng = random.Random(7)
    frames = _random_frames(rng, make_hand, 400)
    states = feed(recognizer, frames)

    assert len(states) == len(frames)
    assert all(isinstance(s, GestureState) and isinstance(s.gesture, Gesture) for s in states)


OWED = {
    (SWIPE, False): Gesture.SWIPE_END,
    (CLICK, False): Gesture.CLICK,
    (CLICK, True): Gesture.LONG_PRESS_END,
    (PINKY, False): Gesture.HOME,
}


def test_no_channel_left_active_after_hand_lost(make_hand):
    rng = random.Random(99)
    for trial in range(60):
        rec = GestureRecognizer(GestureConfig(), SCREEN)
        frames = _random_frames(rng, make_hand, rng.randint(1, 30))
        feed(rec, frames)

        active = [name for name, ch in rec.channels.items() if ch.is_active]
        assert len(active) <= 1
        owed = Gesture.NONE
        if active:
            owed = OWED.get((active[0], rec.channels[active[0]].hold_triggered), Gesture.NONE)

        t = frames[-1][1] + FRAME
        state = rec.update(None, t)

        if owed != Gesture.NONE:
            assert state.gesture == owed, f"trial {trial}"
        else:
            assert state.gesture in (Gesture.NONE, Gesture.HAND_LOST)
        assert not any(ch.is_active or ch.hold_triggered for ch in rec.channels.values())


def test_reset(recognizer, make_hand):
    recognizer.update(make_hand(swipe=0.02), 0.0)
    recognizer.reset()

    assert recognizer.last_position is None
    assert not recognizer.channels[SWIPE].is_active
    assert recognizer.update(make_hand(swipe=0.02), 0.1).gesture == Gesture.SWIPE_START
