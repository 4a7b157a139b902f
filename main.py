#!/usr/bin/env python3
"""
Stroke Recognizer - Main Entry Point
Recognizes strokes drawn on a touch device against the saved training set.

Usage:
    python main.py           recognize strokes
    python main.py NAME      store each stroke as a training example for NAME
"""

import logging
import sys
import time

from stroke_recognizer.config.settings import RecognizerConfig
from stroke_recognizer.core.listener import TouchListener
from stroke_recognizer.gestures.recognizer import GestureRecognizer
from stroke_recognizer.storage.gesture_store import load_training_set, save_training_set


def main():
    """Main entry point for the touch recognizer."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    training_set = load_training_set(RecognizerConfig.GESTURES_FILE)
    recognizer = GestureRecognizer(training_set)
    listener = TouchListener(recognizer)
    if len(sys.argv) > 1:
        listener.training_label = sys.argv[1]
        print(f"📝 Training mode: strokes are stored as '{listener.training_label}'")

    if not listener.start():
        return

    try:
        while listener.running:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()
        save_training_set(RecognizerConfig.GESTURES_FILE, recognizer.training_set)


if __name__ == "__main__":
    main()
