"""
Point Cloud Recognizer Implementation

Scores a query stroke against every labelled example in a training set.
Both sides are normalized into point clouds of equal size (resampled,
centred on the origin, scaled to a reference diagonal) and compared with a
greedy closest-pair matching distance. Scores are distances: lower is better.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from ..config.settings import RecognizerConfig
from ..utils.gesture_utils import Gesture, InvalidGestureError
from .strategies import DistanceStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Score of one training gesture against a query."""
    name: str
    score: float


def _pairwise_distances(a: np.ndarray, b: np.ndarray, city_block: bool = False) -> np.ndarray:
    diff = a[:, np.newaxis, :] - b[np.newaxis, :, :]
    if city_block:
        return np.abs(diff).sum(axis=2)
    return np.sqrt((diff * diff).sum(axis=2))


def greedy_cloud_distance(a: np.ndarray, b: np.ndarray, city_block: bool = False) -> float:
    """
    Greedy matching distance between two equal-size point clouds.

    Repeatedly pairs the closest still-unmatched points of a and b, removes
    both, and accumulates the pair distance until every point is matched.
    Ties go to the lowest (a index, b index), so the result is deterministic.

    Args:
        a: Query cloud, shape (n, d)
        b: Candidate cloud, shape (n, d)
        city_block: Use Manhattan instead of Euclidean pair distances

    Returns:
        Mean pair distance
    """
    if a.shape != b.shape:
        raise ValueError(f"Clouds must have equal shape, got {a.shape} and {b.shape}")

    n = len(a)
    distances = _pairwise_distances(a, b, city_block)
    unmatched = distances.copy()
    total = 0.0
    for _ in range(n):
        i, j = divmod(int(np.argmin(unmatched)), n)
        total += distances[i, j]
        unmatched[i, :] = np.inf
        unmatched[:, j] = np.inf
    return total / n


def _rotate_cloud(cloud: np.ndarray, degrees: float) -> np.ndarray:
    theta = math.radians(degrees)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    rotation = np.array([[cos_t, -sin_t, 0.0],
                         [sin_t, cos_t, 0.0],
                         [0.0, 0.0, 1.0]])
    return cloud @ rotation.T


class PointCloudRecognizer:
    """
    Nearest-neighbour recognizer over a set of example strokes.

    Invariant to translation and uniform scale through normalization; the
    ROTATION_SWEEP strategy additionally tolerates small rotations.
    """

    def __init__(self, strategy: Union[DistanceStrategy, str, None] = None,
                 num_points: int = RecognizerConfig.NUM_POINTS,
                 size: float = RecognizerConfig.REFERENCE_SIZE,
                 rotation_angles: Sequence[float] = RecognizerConfig.ROTATION_ANGLES):
        """
        Initialize the recognizer.

        Args:
            strategy: Distance strategy, or its name. Defaults to the configured one.
            num_points: Resample size of every cloud
            size: Reference bounding-box diagonal after scaling
            rotation_angles: Query rotations in degrees tried by ROTATION_SWEEP
        """
        if strategy is None:
            strategy = RecognizerConfig.DISTANCE_STRATEGY
        if isinstance(strategy, str):
            strategy = DistanceStrategy.from_name(strategy)
        if num_points < 2:
            raise ValueError("num_points must be at least 2")
        self.strategy = strategy
        self.num_points = num_points
        self.size = size
        self.rotation_angles = tuple(rotation_angles) or (0,)

    def distance(self, query: Gesture, candidate: Gesture) -> float:
        """Score a single candidate against the query under the current strategy."""
        a = query.cloud(self.num_points, self.size)
        b = candidate.cloud(self.num_points, self.size)

        if self.strategy is DistanceStrategy.CITY_BLOCK:
            return greedy_cloud_distance(a, b, city_block=True)
        if self.strategy is DistanceStrategy.ROTATION_SWEEP:
            return min(greedy_cloud_distance(_rotate_cloud(a, angle), b)
                       for angle in self.rotation_angles)
        return greedy_cloud_distance(a, b)

    def classify(self, query: Gesture, training_set: Iterable[Gesture]) -> List[Result]:
        """
        Rank every training gesture against a query.

        Args:
            query: Completed stroke to classify
            training_set: Labelled example strokes, in order

        Returns:
            One Result per training gesture, best (lowest score) first. Equal
            scores keep training-set order. Empty training set gives [].

        Raises:
            InvalidGestureError: If the query or a training gesture has no points
        """
        if query.is_empty:
            raise InvalidGestureError("Cannot classify an empty gesture")

        candidates = tuple(training_set)
        results = []
        for index, candidate in enumerate(candidates):
            if candidate.is_empty:
                raise InvalidGestureError(f"Training gesture {index} ({candidate.name!r}) has no points")
            score = self.distance(query, candidate)
            logger.debug(f"{candidate.name}: {score:.4f}")
            results.append(Result(candidate.name, score))

        results.sort(key=lambda r: r.score)
        return results


def classify(query: Gesture, training_set: Iterable[Gesture],
             strategy: Optional[Union[DistanceStrategy, str]] = None,
             num_points: int = RecognizerConfig.NUM_POINTS) -> List[Result]:
    """Rank training gestures against a query. See PointCloudRecognizer.classify."""
    return PointCloudRecognizer(strategy, num_points).classify(query, training_set)
