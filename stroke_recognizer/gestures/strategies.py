"""
Distance strategies for point-cloud matching.
"""

from enum import Enum


class DistanceStrategy(Enum):
    """How two normalized clouds are compared."""
    EUCLIDEAN = "euclidean"
    CITY_BLOCK = "city_block"
    ROTATION_SWEEP = "rotation_sweep"  # Euclidean, best over the configured query rotations

    @classmethod
    def from_name(cls, name: str) -> 'DistanceStrategy':
        """Look up a strategy by its value, case-insensitively."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown distance strategy: {name!r}") from None
