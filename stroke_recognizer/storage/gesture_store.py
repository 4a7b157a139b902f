"""
Reading and writing training gestures.

Several file formats can be read. Each format handler returns the gestures
it decoded, or None if the file is not in its format, and handlers are tried
in order until one succeeds. Writing always uses the canonical JSON format.
"""

import json
import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from ..gestures.training_set import TrainingSet
from ..utils.gesture_utils import Gesture, PathUtils, Point

logger = logging.getLogger(__name__)


class GestureFormatError(ValueError):
    """Raised when no format handler can read an existing file."""


def _read_json(path: str):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


class JsonListFormat:
    """Canonical format: [{"name": ..., "points": [{"x", "y", "z"}, ...]}, ...]"""

    name = 'json'

    def load(self, path: str) -> Optional[List[Gesture]]:
        data = _read_json(path)
        if not isinstance(data, list):
            return None
        try:
            return [Gesture(PathUtils.convert_dict_to_points(entry['points']), entry['name'])
                    for entry in data]
        except (KeyError, TypeError, ValueError):
            return None

    def save(self, path: str, gestures: Iterable[Gesture]):
        data = [{'name': g.name, 'points': PathUtils.convert_points_to_dict(g.points)}
                for g in gestures]
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)


class JsonTemplateMapFormat:
    """Template map: {"name": [[{"x", "y"}, ...], ...], ...}"""

    name = 'json-templates'

    def load(self, path: str) -> Optional[List[Gesture]]:
        data = _read_json(path)
        if not isinstance(data, dict):
            return None
        try:
            gestures = []
            for name, paths in data.items():
                for stroke in paths:
                    gestures.append(Gesture(PathUtils.convert_dict_to_points(stroke), name))
            return gestures
        except (KeyError, TypeError, ValueError):
            return None


class XmlFormat:
    """<Gestures><Gesture Name=".."><Point X=".." Y=".." Z=".."/>...</Gesture></Gestures>"""

    name = 'xml'

    def load(self, path: str) -> Optional[List[Gesture]]:
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError:
            return None

        if root.tag == 'Gesture':
            elements = [root]
        elif root.tag == 'Gestures':
            elements = root.findall('Gesture')
        else:
            return None

        try:
            gestures = []
            for element in elements:
                # Points may sit directly under Gesture or inside Stroke elements
                points = [Point(float(p.get('X')), float(p.get('Y')), float(p.get('Z', 0)))
                          for p in element.iter('Point')]
                gestures.append(Gesture(points, element.get('Name', '')))
            return gestures
        except (TypeError, ValueError):
            return None


FORMATS = [JsonListFormat(), JsonTemplateMapFormat(), XmlFormat()]
CANONICAL_FORMAT = FORMATS[0]


def read_gestures(path: str) -> List[Gesture]:
    """
    Read gestures from a file in any supported format.

    Returns:
        Gestures in file order, or [] if the file does not exist

    Raises:
        GestureFormatError: If the file exists but no format can read it
    """
    if not os.path.exists(path):
        logger.info(f"No gesture file at {path}, starting empty")
        return []

    for handler in FORMATS:
        gestures = handler.load(path)
        if gestures is not None:
            logger.info(f"Loaded {len(gestures)} gestures from {path} ({handler.name})")
            return gestures

    logger.warning(f"Unrecognized gesture file format: {path}")
    raise GestureFormatError(f"Unrecognized gesture file format: {path}")


def save_gestures(path: str, gestures: Iterable[Gesture]):
    """Write gestures in the canonical JSON format."""
    gestures = list(gestures)
    CANONICAL_FORMAT.save(path, gestures)
    logger.info(f"Saved {len(gestures)} gestures to {path}")


def load_training_set(path: str) -> TrainingSet:
    """
    Read a training set, skipping gestures that cannot be used for classification.
    """
    training_set = TrainingSet()
    for gesture in read_gestures(path):
        if not gesture.name or gesture.is_empty:
            logger.warning(f"Skipping unusable gesture {gesture!r} in {path}")
            continue
        training_set.append(gesture)
    return training_set


def save_training_set(path: str, training_set: TrainingSet):
    save_gestures(path, training_set.snapshot())
