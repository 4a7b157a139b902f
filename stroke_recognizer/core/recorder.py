"""
Stroke capture buffer shared between an input thread and a recognizer.
"""

import time
from typing import Optional, Tuple

from ..utils.gesture_utils import Point


class StrokeRecorder:
    """
    Single-writer buffer of captured samples.

    The writer (an input loop) calls add_sample; readers call snapshot.
    Each write publishes a new tuple, so a snapshot is never modified after
    it is handed out and no lock is shared between writer and readers.
    """

    def __init__(self, window_ms: Optional[float] = None):
        """
        Args:
            window_ms: If set, samples older than this (relative to the newest
                       sample) are dropped as new ones arrive.
        """
        self.window_ms = window_ms
        self.recording = False
        self._samples: Tuple[Tuple[Point, float], ...] = ()

    def __len__(self):
        return len(self._samples)

    def start(self):
        """Begin a new stroke, discarding any previous samples."""
        self._samples = ()
        self.recording = True

    def stop(self) -> Tuple[Point, ...]:
        """Finish the stroke and return its samples."""
        self.recording = False
        return self.snapshot()

    def clear(self):
        self._samples = ()

    def add_sample(self, x: float, y: float, t: Optional[float] = None) -> bool:
        """
        Append a sample if recording.

        Args:
            x, y: Sample position
            t: Capture time in seconds. Defaults to now.

        Returns:
            True if the sample was stored
        """
        if not self.recording:
            return False
        if t is None:
            t = time.time()

        samples = self._samples + ((Point(x, y), t),)
        if self.window_ms is not None:
            cutoff = t - self.window_ms / 1000.0
            samples = tuple(s for s in samples if s[1] >= cutoff)
        self._samples = samples
        return True

    def snapshot(self) -> Tuple[Point, ...]:
        """Points captured so far, timestamps stripped."""
        return tuple(point for point, _ in self._samples)
