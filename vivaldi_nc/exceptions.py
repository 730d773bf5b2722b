class VivaldiError(Exception):
    pass


class DimensionMismatchError(VivaldiError, ValueError):
    pass


class InvalidConfigError(VivaldiError, ValueError):
    pass


class CoordinateDecodeError(VivaldiError, ValueError):
    pass
