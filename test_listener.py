#!/usr/bin/env python3
"""Tests for touch event handling, using synthetic evdev events."""

import math
from types import SimpleNamespace

import pytest

ecodes = pytest.importorskip("evdev").ecodes

from stroke_recognizer.core.listener import TouchListener
from stroke_recognizer.gestures.recognizer import GestureRecognizer
from stroke_recognizer.utils.gesture_utils import Point
from stroke_recognizer.utils.logger import GestureLogger


class FakeDeviceManager:
    def __init__(self, multitouch=True):
        self.multitouch = multitouch
        self.closed = False

    def close(self):
        self.closed = True


def ev(type_, code, value):
    return SimpleNamespace(type=type_, code=code, value=value)


SYN = ev(ecodes.EV_SYN, ecodes.SYN_REPORT, 0)


def circle_samples(n=16):
    return [(int(300 + 100 * math.cos(2 * math.pi * i / n)),
             int(300 + 100 * math.sin(2 * math.pi * i / n))) for i in range(n + 1)]


def make_listener(multitouch=True):
    recognizer = GestureRecognizer()
    recognizer.add_training("circle", [Point(x, y) for x, y in circle_samples()])
    recognizer.add_training("line", [Point(100 + 30 * i, 500) for i in range(10)])
    calls = []
    listener = TouchListener(recognizer,
                             on_result=lambda results, accepted: calls.append((results, accepted)),
                             device_manager=FakeDeviceManager(multitouch),
                             gesture_logger=GestureLogger(debug_file=None))
    return listener, calls


def multitouch_stroke(listener, samples, slot=0):
    x, y = samples[0]
    listener.process_event_batch([
        ev(ecodes.EV_ABS, ecodes.ABS_MT_SLOT, slot),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, 7),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, x),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, y),
        SYN,
    ])
    for x, y in samples[1:]:
        listener.process_event_batch([
            ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, x),
            ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, y),
            SYN,
        ])
    listener.process_event_batch([ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, -1), SYN])


def test_multitouch_stroke_is_recognized():
    listener, calls = make_listener()
    multitouch_stroke(listener, circle_samples(12))

    assert len(calls) == 1
    results, accepted = calls[0]
    assert [r.name for r in results] == ["circle", "line"]
    assert listener.active_slot is None
    assert not listener.recorder.recording


def test_second_finger_is_ignored():
    listener, calls = make_listener()
    listener.process_event_batch([
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, 1),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, 10),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, 10),
        SYN,
    ])
    listener.process_event_batch([
        ev(ecodes.EV_ABS, ecodes.ABS_MT_SLOT, 1),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, 2),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, 500),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, 500),
        SYN,
    ])
    listener.process_event_batch([ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, -1), SYN])
    assert calls == []
    assert listener.recorder.snapshot() == (Point(10, 10),)


def test_single_touch_device():
    listener, calls = make_listener(multitouch=False)
    samples = circle_samples(12)
    x, y = samples[0]
    listener.process_event_batch([
        ev(ecodes.EV_KEY, ecodes.BTN_TOUCH, 1),
        ev(ecodes.EV_ABS, ecodes.ABS_X, x),
        ev(ecodes.EV_ABS, ecodes.ABS_Y, y),
        SYN,
    ])
    for x, y in samples[1:]:
        listener.process_event_batch([
            ev(ecodes.EV_ABS, ecodes.ABS_X, x),
            ev(ecodes.EV_ABS, ecodes.ABS_Y, y),
            SYN,
        ])
    listener.process_event_batch([ev(ecodes.EV_KEY, ecodes.BTN_TOUCH, 0), SYN])

    assert len(calls) == 1
    assert calls[0][0][0].name == "circle"


def test_training_mode_stores_strokes():
    listener, calls = make_listener()
    listener.training_label = "loop"
    multitouch_stroke(listener, circle_samples(10))

    assert calls == []
    assert listener.recognizer.training_set.labels() == ["circle", "line", "loop"]


def test_empty_stroke_is_ignored():
    listener, calls = make_listener()
    listener.handle_stroke(())
    assert calls == []


def test_new_stroke_uses_its_own_slot_position():
    listener, calls = make_listener()
    listener.process_event_batch([
        ev(ecodes.EV_ABS, ecodes.ABS_MT_SLOT, 0),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, 1),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, 10),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, 10),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_SLOT, 1),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, 2),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, 500),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, 40),
        SYN,
    ])
    listener.process_event_batch([
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, -1),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_SLOT, 0),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, 300),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_Y, 300),
        SYN,
    ])
    listener.process_event_batch([ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, -1), SYN])
    assert len(calls) == 1

    # slot 1 comes back with only X changed; Y keeps slot 1's last value
    listener.process_event_batch([
        ev(ecodes.EV_ABS, ecodes.ABS_MT_SLOT, 1),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_TRACKING_ID, 3),
        ev(ecodes.EV_ABS, ecodes.ABS_MT_POSITION_X, 520),
        SYN,
    ])
    assert listener.active_slot == 1
    assert listener.recorder.snapshot() == (Point(520, 40),)
