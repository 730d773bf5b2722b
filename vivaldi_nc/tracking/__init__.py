from .coordinate_tracker import CoordinateTracker

__all__ = [
    "CoordinateTracker",
]
