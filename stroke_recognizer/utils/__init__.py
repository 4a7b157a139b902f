"""
Utilities package for stroke geometry and logging.
"""

from .gesture_utils import (
    Point,
    Gesture,
    GeometryUtils,
    PathUtils,
    InvalidGestureError
)

__all__ = [
    'Point',
    'Gesture',
    'GeometryUtils',
    'PathUtils',
    'InvalidGestureError'
]
