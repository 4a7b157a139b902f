"""
Configuration settings for stroke recognition.
"""


class RecognizerConfig:
    """Configuration constants for smoothing and point-cloud matching."""

    # Point-cloud normalization
    NUM_POINTS = 32
    REFERENCE_SIZE = 1.0

    # Catmull-Rom smoothing (spacing in input units, alpha 0 = uniform, 0.5 = centripetal)
    SMOOTH_SPACING = 10.0
    SMOOTH_ALPHA = 0.1

    # Matching
    DISTANCE_STRATEGY = "euclidean"  # euclidean, city_block or rotation_sweep
    ROTATION_ANGLES = (-30, -15, 0, 15, 30)  # degrees, used by ROTATION_SWEEP

    # Acceptance: top result accepted when its score is below this
    ACCEPT_THRESHOLD = 0.1

    # Capture: samples older than this are dropped (None keeps the whole stroke)
    CAPTURE_WINDOW_MS = None

    GESTURES_FILE = 'gestures.json'


class ThresholdConfig:
    """Runtime-adjustable acceptance threshold."""

    MIN_THRESHOLD = 0.0
    MAX_THRESHOLD = 1.0

    def __init__(self, threshold: float = RecognizerConfig.ACCEPT_THRESHOLD):
        self.accept_threshold = threshold

    def set_threshold(self, threshold: float):
        """Set the acceptance threshold, clamped to [MIN_THRESHOLD, MAX_THRESHOLD]."""
        self.accept_threshold = max(self.MIN_THRESHOLD, min(self.MAX_THRESHOLD, threshold))

    def get_threshold(self) -> float:
        return self.accept_threshold
