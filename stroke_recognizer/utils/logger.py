"""
Logging utilities for captured strokes and recognition results.
"""

import datetime
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class GestureLogger:
    """Prints recognition events to the console and mirrors them to a debug file."""

    def __init__(self, debug_file: Optional[str] = 'recognition_debug.log', max_results: int = 3):
        self.max_results = max_results
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    @staticmethod
    def _timestamp() -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def _write_debug(self, message: str):
        if self.debug_file:
            self.debug_file.write(f"{message}\n")
            self.debug_file.flush()

    def log_stroke(self, point_count: int, smoothed_count: int):
        """Log a completed stroke."""
        timestamp = self._timestamp()
        print(f"[{timestamp}] ✏️ STROKE: {point_count} samples -> {smoothed_count} points")
        self._write_debug(f"[{timestamp}] stroke samples={point_count} smoothed={smoothed_count}")

    def log_results(self, results: List, accepted=None):
        """Log the ranked results of one recognition."""
        timestamp = self._timestamp()
        if not results:
            print(f"[{timestamp}] 🤷 NO TRAINING GESTURES")
            self._write_debug(f"[{timestamp}] no training gestures")
            return

        if accepted is not None:
            print(f"[{timestamp}] ✅ RECOGNIZED: {accepted.name} [score {accepted.score:.4f}]")
        else:
            print(f"[{timestamp}] ❓ NO MATCH: best {results[0].name} [score {results[0].score:.4f}]")

        for rank, result in enumerate(results[:self.max_results], 1):
            print(f"   {rank}. {result.name}: {result.score:.4f}")

        self._write_debug(f"[{timestamp}] accepted={accepted} results={results}")

    def log_training_added(self, name: str, count: int):
        """Log a stroke stored as a training example."""
        timestamp = self._timestamp()
        print(f"[{timestamp}] 💾 TRAINED: {name} ({count} example(s))")
        self._write_debug(f"[{timestamp}] trained name={name} count={count}")

    def log_rejected(self, reason: str):
        """Log a stroke that could not be used."""
        timestamp = self._timestamp()
        print(f"[{timestamp}] ⚠️ IGNORED: {reason}")
        self._write_debug(f"[{timestamp}] ignored {reason}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
