"""
Vivaldi network coordinates for fast, distributed latency estimates.

Each node keeps a NetworkCoordinate, periodically sends it to peers,
and updates it with the measured RTT whenever it receives a peer's
coordinate. Any node can then estimate its RTT to any coordinate it
knows about, with no central authority.
"""

from .core import (
    Checked,
    EuclideanVector,
    HeightVector,
    NetworkCoordinate,
    NetworkCoordinate2D,
    NetworkCoordinate3D,
    UpdateOutcome,
    ValidationStatus,
)
from .exceptions import (
    CoordinateDecodeError,
    DimensionMismatchError,
    InvalidConfigError,
    VivaldiError,
)
from .models import CoordinateMessage, VivaldiConfig
from .tracking import CoordinateTracker

__all__ = [
    "Checked",
    "CoordinateDecodeError",
    "CoordinateMessage",
    "CoordinateTracker",
    "DimensionMismatchError",
    "EuclideanVector",
    "HeightVector",
    "InvalidConfigError",
    "NetworkCoordinate",
    "NetworkCoordinate2D",
    "NetworkCoordinate3D",
    "UpdateOutcome",
    "ValidationStatus",
    "VivaldiConfig",
    "VivaldiError",
]
