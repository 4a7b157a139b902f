"""
Append-only collection of labelled example strokes.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from ..utils.gesture_utils import Gesture, InvalidGestureError

logger = logging.getLogger(__name__)


class TrainingSet:
    """
    Ordered training examples. Several examples may share a label.

    The contents are held in a tuple that is replaced, never mutated, on
    append. A reader holding a snapshot keeps a consistent view while a
    capture thread keeps appending.
    """

    def __init__(self, gestures: Iterable[Gesture] = ()):
        self._gestures: Tuple[Gesture, ...] = ()
        for gesture in gestures:
            self.append(gesture)

    def __len__(self):
        return len(self._gestures)

    def __iter__(self) -> Iterator[Gesture]:
        return iter(self._gestures)

    def __repr__(self):
        return f"TrainingSet({len(self._gestures)} gestures, {len(self.labels())} labels)"

    def snapshot(self) -> Tuple[Gesture, ...]:
        """Immutable view of the current contents."""
        return self._gestures

    def append(self, gesture: Gesture) -> int:
        """
        Add a labelled example.

        Returns:
            Number of examples now stored under the gesture's label

        Raises:
            InvalidGestureError: If the gesture is unlabelled or has no points
        """
        if not gesture.name:
            raise InvalidGestureError("Training gestures need a non-empty name")
        if gesture.is_empty:
            raise InvalidGestureError(f"Training gesture {gesture.name!r} has no points")

        self._gestures = self._gestures + (gesture,)
        logger.debug(f"Added training gesture '{gesture.name}' ({len(gesture)} points)")
        return self.count(gesture.name)

    def count(self, name: str) -> int:
        """Count the examples stored under a label."""
        return sum(1 for g in self._gestures if g.name == name)

    def labels(self) -> List[str]:
        """Distinct labels in first-seen order."""
        seen = []
        for gesture in self._gestures:
            if gesture.name not in seen:
                seen.append(gesture.name)
        return seen
