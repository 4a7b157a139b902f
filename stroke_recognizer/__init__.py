"""
Stroke Recognizer Package
Catmull-Rom smoothing and point-cloud matching for custom 2D gestures.
"""

from .gestures.point_cloud_recognizer import PointCloudRecognizer, Result, classify
from .gestures.recognizer import GestureRecognizer
from .gestures.smoothing import smooth
from .gestures.training_set import TrainingSet
from .utils.gesture_utils import Gesture, InvalidGestureError, Point

__version__ = "1.0.0"
__all__ = ["Point", "Gesture", "InvalidGestureError", "smooth", "classify",
           "PointCloudRecognizer", "Result", "GestureRecognizer", "TrainingSet"]
