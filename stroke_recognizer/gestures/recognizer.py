"""
High-level gesture recognizer.

Ties the smoother, the point-cloud recognizer and a training set together
for callers that hold raw captured samples.
"""

import logging
from typing import Iterable, List, Optional

from ..config.settings import RecognizerConfig, ThresholdConfig
from ..utils.gesture_utils import Gesture
from .point_cloud_recognizer import PointCloudRecognizer, Result
from .smoothing import CatmullRomSmoother
from .training_set import TrainingSet

logger = logging.getLogger(__name__)


class GestureRecognizer:
    """
    Smooths raw strokes and classifies them against a training set.
    """

    def __init__(self, training_set: Optional[TrainingSet] = None,
                 config=RecognizerConfig, threshold: Optional[ThresholdConfig] = None):
        """
        Initialize the recognizer.

        Args:
            training_set: Examples to compare against. Starts empty if None.
            config: Settings class providing smoothing and matching constants
            threshold: Acceptance threshold holder used by best_match
        """
        self.training_set = training_set if training_set is not None else TrainingSet()
        self.smoother = CatmullRomSmoother(config.SMOOTH_SPACING, config.SMOOTH_ALPHA)
        self.classifier = PointCloudRecognizer(
            config.DISTANCE_STRATEGY,
            num_points=config.NUM_POINTS,
            size=config.REFERENCE_SIZE,
            rotation_angles=config.ROTATION_ANGLES,
        )
        self.threshold = threshold or ThresholdConfig(config.ACCEPT_THRESHOLD)

    def prepare(self, raw_points: Iterable, name: str = "") -> Gesture:
        """Smooth raw samples into a gesture."""
        return Gesture(self.smoother.smooth(raw_points), name)

    def recognize(self, raw_points: Iterable) -> List[Result]:
        """
        Rank the training set against a raw stroke.

        Raises:
            InvalidGestureError: If the stroke has no points
        """
        return self.classifier.classify(self.prepare(raw_points), self.training_set.snapshot())

    def best_match(self, raw_points: Iterable, threshold: Optional[float] = None) -> Optional[Result]:
        """
        Top result if it is close enough to accept.

        Args:
            raw_points: Captured stroke
            threshold: Scores below this are accepted. Defaults to the configured threshold.

        Returns:
            The best Result, or None if there is none or it scores too high
        """
        if threshold is None:
            threshold = self.threshold.get_threshold()

        results = self.recognize(raw_points)
        if not results:
            return None
        best = results[0]
        if best.score < threshold:
            return best
        logger.debug(f"Best match '{best.name}' ({best.score:.4f}) above threshold {threshold:.4f}")
        return None

    def add_training(self, name: str, raw_points: Iterable) -> int:
        """
        Smooth a stroke and store it as a training example.

        Returns:
            Number of examples now stored under the name
        """
        count = self.training_set.append(self.prepare(raw_points, name))
        logger.info(f"Added template for gesture '{name}' ({count} total)")
        return count
