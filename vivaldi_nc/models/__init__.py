from .coordinates import CoordinateMessage, VivaldiConfig, ZeroRttPolicy

__all__ = [
    "CoordinateMessage",
    "VivaldiConfig",
    "ZeroRttPolicy",
]
