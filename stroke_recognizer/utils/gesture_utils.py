"""
Shared geometry types and utilities for stroke recognition.

This module provides the point and gesture value types used by the
smoother, the point-cloud classifier and the storage layer, together with
the geometric helpers they share.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np


class InvalidGestureError(ValueError):
    """Raised when a gesture cannot be classified or stored."""


@dataclass(frozen=True)
class Point:
    """Immutable 2D/3D sample. Two points with equal coordinates are interchangeable."""
    x: float
    y: float
    z: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))
        object.__setattr__(self, 'z', float(self.z))

    def __repr__(self):
        if self.z:
            return f"Point({self.x:.1f}, {self.y:.1f}, {self.z:.1f})"
        return f"Point({self.x:.1f}, {self.y:.1f})"

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Point':
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def magnitude(self) -> float:
        """Length of the vector from the origin to this point."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return (self - other).magnitude()

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


class GeometryUtils:
    """Utility class for geometric calculations over point sequences."""

    @staticmethod
    def calculate_centroid(points: Sequence[Point]) -> Point:
        """Calculate the centroid of a list of points."""
        if not points:
            return Point(0, 0)
        n = len(points)
        return Point(sum(p.x for p in points) / n,
                     sum(p.y for p in points) / n,
                     sum(p.z for p in points) / n)

    @staticmethod
    def calculate_path_length(points: Sequence[Point]) -> float:
        """Calculate total path length."""
        length = 0.0
        for i in range(1, len(points)):
            length += points[i - 1].distance_to(points[i])
        return length

    @staticmethod
    def get_bounds(points: Sequence[Point]) -> Tuple[Point, Point]:
        """Get the (min, max) corners of the bounding box."""
        if not points:
            return Point(0, 0), Point(0, 0)
        lower = Point(min(p.x for p in points), min(p.y for p in points), min(p.z for p in points))
        upper = Point(max(p.x for p in points), max(p.y for p in points), max(p.z for p in points))
        return lower, upper

    @staticmethod
    def remove_duplicates(points: Iterable[Point]) -> List[Point]:
        """Remove consecutive duplicate points."""
        unique_points = []
        for point in points:
            if not unique_points or point != unique_points[-1]:
                unique_points.append(point)
        return unique_points

    @staticmethod
    def resample(points: Sequence[Point], num_points: int) -> List[Point]:
        """Resample a path to num_points points evenly spaced along its length."""
        if num_points < 2:
            raise ValueError("num_points must be at least 2")
        if not points:
            return []

        total_length = GeometryUtils.calculate_path_length(points)
        if len(points) == 1 or total_length == 0:
            return [points[0]] * num_points

        interval = total_length / (num_points - 1)
        working = list(points)
        D = 0.0
        resampled = [working[0]]
        i = 1
        while i < len(working):
            prev_point = working[i - 1]
            d = prev_point.distance_to(working[i])
            if d > 0 and D + d >= interval:
                q = prev_point + (working[i] - prev_point) * ((interval - D) / d)
                resampled.append(q)
                working.insert(i, q)
                D = 0.0
            else:
                D += d
            i += 1

        # rounding can leave us one short of the final point
        while len(resampled) < num_points:
            resampled.append(working[-1])
        return resampled[:num_points]

    @staticmethod
    def translate_to_origin(points: Sequence[Point]) -> List[Point]:
        """Translate points so the centroid is at the origin."""
        centroid = GeometryUtils.calculate_centroid(points)
        return [p - centroid for p in points]

    @staticmethod
    def scale_to_size(points: Sequence[Point], size: float) -> List[Point]:
        """Scale uniformly about the origin so the bounding-box diagonal equals size."""
        lower, upper = GeometryUtils.get_bounds(points)
        diagonal = upper.distance_to(lower)
        if diagonal == 0:
            return list(points)
        factor = size / diagonal
        return [p * factor for p in points]


class Gesture:
    """
    A named, ordered stroke.

    The point order is the order the stroke was drawn in and is never changed.
    Geometric properties used repeatedly during classification are computed once
    at construction, and normalized point clouds are cached per resample size.
    """

    def __init__(self, points: Iterable, name: str = ""):
        self._points = tuple(p if isinstance(p, Point) else Point(*p) for p in points)
        self._name = name or ""
        self._centroid = GeometryUtils.calculate_centroid(self._points)
        self._bounds = GeometryUtils.get_bounds(self._points)
        self._diagonal = self._bounds[1].distance_to(self._bounds[0])
        self._path_length = GeometryUtils.calculate_path_length(self._points)
        self._clouds: Dict[Tuple[int, float], np.ndarray] = {}

    def __repr__(self):
        return f"Gesture({self._name!r}, {len(self._points)} points)"

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    @property
    def name(self) -> str:
        return self._name

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def is_empty(self) -> bool:
        return not self._points

    @property
    def centroid(self) -> Point:
        return self._centroid

    @property
    def bounds(self) -> Tuple[Point, Point]:
        return self._bounds

    @property
    def diagonal(self) -> float:
        """Length of the bounding-box diagonal."""
        return self._diagonal

    @property
    def path_length(self) -> float:
        return self._path_length

    def labelled(self, name: str) -> 'Gesture':
        """Return a copy of this gesture carrying the given label."""
        return Gesture(self._points, name)

    def translated(self, offset: Point) -> 'Gesture':
        return Gesture((p + offset for p in self._points), self._name)

    def scaled(self, factor: float) -> 'Gesture':
        return Gesture((p * factor for p in self._points), self._name)

    def cloud(self, num_points: int, size: float = 1.0) -> np.ndarray:
        """
        Normalized point cloud for matching.

        The stroke is resampled to num_points evenly spaced points, translated so
        its centroid is at the origin and scaled so its bounding-box diagonal is
        size. The returned (num_points, 3) array is read-only and cached.

        Raises:
            InvalidGestureError: If the gesture has no points
        """
        if self.is_empty:
            raise InvalidGestureError("Cannot normalize an empty gesture")

        key = (num_points, size)
        cloud = self._clouds.get(key)
        if cloud is None:
            points = GeometryUtils.resample(self._points, num_points)
            points = GeometryUtils.translate_to_origin(points)
            points = GeometryUtils.scale_to_size(points, size)
            cloud = np.array([p.as_tuple() for p in points], dtype=float)
            cloud.flags.writeable = False
            self._clouds[key] = cloud
        return cloud


class PathUtils:
    """Utility class for converting between raw sample dicts and points."""

    @staticmethod
    def convert_dict_to_points(path: List[Dict[str, float]]) -> List[Point]:
        """Convert path from dict format to Point objects, dropping timestamps."""
        return [Point(p['x'], p['y'], p.get('z', 0.0)) for p in path]

    @staticmethod
    def convert_points_to_dict(points: Iterable[Point]) -> List[Dict[str, float]]:
        """Convert Point objects to dict format."""
        return [{'x': p.x, 'y': p.y, 'z': p.z} for p in points]
