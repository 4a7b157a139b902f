"""
Gesture smoothing and classification.

This module provides the Catmull-Rom smoother, the point-cloud recognizer
and the training set it compares strokes against.
"""

from .strategies import DistanceStrategy
from .smoothing import CatmullRomSmoother, smooth
from .point_cloud_recognizer import PointCloudRecognizer, Result, classify, greedy_cloud_distance
from .training_set import TrainingSet
from .recognizer import GestureRecognizer

__all__ = [
    'DistanceStrategy',
    'CatmullRomSmoother',
    'smooth',
    'PointCloudRecognizer',
    'Result',
    'classify',
    'greedy_cloud_distance',
    'TrainingSet',
    'GestureRecognizer'
]
