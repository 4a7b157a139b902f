#!/usr/bin/env python3
"""Tests for the stroke capture buffer."""

from stroke_recognizer.core.recorder import StrokeRecorder
from stroke_recognizer.utils.gesture_utils import Point


def test_ignores_samples_when_not_recording():
    recorder = StrokeRecorder()
    assert not recorder.add_sample(1, 2, 0.0)
    assert recorder.snapshot() == ()


def test_records_a_stroke():
    recorder = StrokeRecorder()
    recorder.start()
    recorder.add_sample(1, 2, 0.0)
    recorder.add_sample(3, 4, 0.01)
    points = recorder.stop()
    assert points == (Point(1, 2), Point(3, 4))
    assert not recorder.recording
    assert not recorder.add_sample(5, 6, 0.02)


def test_start_discards_previous_stroke():
    recorder = StrokeRecorder()
    recorder.start()
    recorder.add_sample(1, 2, 0.0)
    recorder.start()
    assert len(recorder) == 0


def test_snapshot_is_not_affected_by_later_samples():
    recorder = StrokeRecorder()
    recorder.start()
    recorder.add_sample(1, 1, 0.0)
    snapshot = recorder.snapshot()
    recorder.add_sample(2, 2, 0.01)
    assert snapshot == (Point(1, 1),)
    assert len(recorder.snapshot()) == 2


def test_window_drops_old_samples():
    recorder = StrokeRecorder(window_ms=120)
    recorder.start()
    for i in range(5):
        recorder.add_sample(i, 0, i * 0.05)
    # newest at 0.20 s keeps samples from 0.08 s onwards
    assert recorder.snapshot() == (Point(2, 0), Point(3, 0), Point(4, 0))


def test_clear():
    recorder = StrokeRecorder()
    recorder.start()
    recorder.add_sample(1, 1)
    recorder.clear()
    assert recorder.snapshot() == ()
    assert recorder.recording
