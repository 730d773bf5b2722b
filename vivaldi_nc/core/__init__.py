"""
Vivaldi coordinate core.

Provides:
- EuclideanVector: immutable fixed-dimension vector algebra
- HeightVector: Euclidean position plus access-link height, self-healing
- NetworkCoordinate: position plus error estimate, Vivaldi update rule
- Checked / ValidationStatus: distinguish computed from reinitialized values
"""

from .checked import Checked, ValidationStatus
from .euclidean_vector import EuclideanVector
from .height_vector import HeightVector
from .network_coordinate import (
    NetworkCoordinate,
    NetworkCoordinate2D,
    NetworkCoordinate3D,
    UpdateOutcome,
)

__all__ = [
    "Checked",
    "ValidationStatus",
    "EuclideanVector",
    "HeightVector",
    "NetworkCoordinate",
    "NetworkCoordinate2D",
    "NetworkCoordinate3D",
    "UpdateOutcome",
]
