"""
Catmull-Rom path smoothing.

This module turns a sparse, jittery sequence of captured samples into a
denser, smooth polyline with roughly uniform spacing between points, which
is what the point-cloud recognizer expects as input.
"""

import math
from typing import Iterable, List, Sequence

from ..config.settings import RecognizerConfig
from ..utils.gesture_utils import Point, GeometryUtils


class CatmullRomSmoother:
    """
    Catmull-Rom spline resampler.

    The raw samples are used as control points. Virtual control points are
    extrapolated past both ends so the first and last samples are interpolated
    through, and every segment is sampled at roughly `spacing` intervals.
    """

    def __init__(self, spacing: float = RecognizerConfig.SMOOTH_SPACING,
                 alpha: float = RecognizerConfig.SMOOTH_ALPHA):
        """
        Initialize the smoother.

        Args:
            spacing: Target distance between consecutive output points. Must be > 0.
            alpha: Knot parameterization in [0, 1]. 0 = uniform, 0.5 = centripetal,
                   1 = chordal. Defaults to the configured 0.1.
        """
        if spacing <= 0:
            raise ValueError(f"spacing must be positive, got {spacing}")
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be within [0, 1], got {alpha}")
        self.spacing = float(spacing)
        self.alpha = float(alpha)

    def __call__(self, points: Iterable) -> List[Point]:
        return self.smooth(points)

    def smooth(self, points: Iterable) -> List[Point]:
        """
        Smooth a path.

        Args:
            points: Ordered samples (Point objects or coordinate tuples)

        Returns:
            New list of Point objects. Inputs with fewer than two distinct
            samples are returned as they are.
        """
        controls = GeometryUtils.remove_duplicates(
            p if isinstance(p, Point) else Point(*p) for p in points
        )
        if len(controls) < 2:
            return controls

        first = controls[0] * 2 - controls[1]
        last = controls[-1] * 2 - controls[-2]
        extended = [first] + controls + [last]

        result = []
        for i in range(len(controls) - 1):
            result.extend(self._sample_segment(*extended[i:i + 4]))
        result.append(controls[-1])
        return result

    def _knot(self, t: float, p0: Point, p1: Point) -> float:
        return t + p0.distance_to(p1) ** self.alpha

    def _sample_segment(self, p0: Point, p1: Point, p2: Point, p3: Point) -> List[Point]:
        """Sample the curve between p1 and p2, excluding p2 itself."""
        chord = p1.distance_to(p2)
        if chord == 0:
            return []

        steps = max(1, int(math.ceil(chord / self.spacing)))
        t0 = 0.0
        t1 = self._knot(t0, p0, p1)
        t2 = self._knot(t1, p1, p2)
        t3 = self._knot(t2, p2, p3)

        if not t0 < t1 < t2 < t3:
            # knots collapsed under rounding; fall back to the chord
            return [p1 + (p2 - p1) * (k / steps) for k in range(steps)]

        samples = []
        for k in range(steps):
            t = t1 + (t2 - t1) * k / steps
            samples.append(self._evaluate(p0, p1, p2, p3, t0, t1, t2, t3, t))
        return samples

    @staticmethod
    def _evaluate(p0, p1, p2, p3, t0, t1, t2, t3, t) -> Point:
        """Barry-Goldman pyramidal evaluation of the spline at knot value t."""
        a1 = p0 * ((t1 - t) / (t1 - t0)) + p1 * ((t - t0) / (t1 - t0))
        a2 = p1 * ((t2 - t) / (t2 - t1)) + p2 * ((t - t1) / (t2 - t1))
        a3 = p2 * ((t3 - t) / (t3 - t2)) + p3 * ((t - t2) / (t3 - t2))
        b1 = a1 * ((t2 - t) / (t2 - t0)) + a2 * ((t - t0) / (t2 - t0))
        b2 = a2 * ((t3 - t) / (t3 - t1)) + a3 * ((t - t1) / (t3 - t1))
        return b1 * ((t2 - t) / (t2 - t1)) + b2 * ((t - t1) / (t2 - t1))


def smooth(points: Sequence, spacing: float = RecognizerConfig.SMOOTH_SPACING,
           alpha: float = RecognizerConfig.SMOOTH_ALPHA) -> List[Point]:
    """
    Convenience function for Catmull-Rom smoothing.

    Args:
        points: Ordered samples to smooth
        spacing: Target distance between output points
        alpha: Knot parameterization (0 uniform, 0.5 centripetal, 1 chordal),
               0.1 by default

    Returns:
        Smoothed list of Point objects

    Example:
        >>> path = smooth([Point(0, 0), Point(30, 0)], spacing=10.0)
        >>> len(path)
        4
    """
    return CatmullRomSmoother(spacing, alpha).smooth(points)
