from __future__ import annotations

import math
from typing import Iterable, Iterator

from vivaldi_nc.exceptions import DimensionMismatchError


class EuclideanVector:
    """
    Minimal fixed-dimension Euclidean vector.

    Instances are immutable; every operation returns a new vector.
    Components are stored verbatim, so NaN or infinite values are
    allowed here and detected one layer up via is_invalid().
    """

    __slots__ = ("_components",)

    def __init__(self, components: Iterable[float]) -> None:
        values = tuple(float(component) for component in components)
        if len(values) < 1:
            raise DimensionMismatchError("EuclideanVector requires at least one dimension")

        self._components: tuple[float, ...] = values

    @classmethod
    def zeros(cls, dimensions: int) -> EuclideanVector:
        if dimensions < 1:
            raise DimensionMismatchError(
                f"EuclideanVector requires at least one dimension, got {dimensions}"
            )

        return cls(0.0 for _ in range(dimensions))

    @property
    def dimensions(self) -> int:
        return len(self._components)

    @property
    def components(self) -> tuple[float, ...]:
        return self._components

    def len(self) -> float:
        # hypot folding instead of sqrt(sum(x**2)) to avoid overflow
        magnitude = 0.0
        try:
            for component in self._components:
                magnitude = math.hypot(magnitude, component)

        except OverflowError:
            return math.inf

        return magnitude

    def is_invalid(self) -> bool:
        return any(
            math.isnan(component) or math.isinf(component)
            for component in self._components
        )

    def is_valid(self) -> bool:
        return not self.is_invalid()

    def _check_dimensions(self, other: EuclideanVector) -> None:
        if other.dimensions != self.dimensions:
            raise DimensionMismatchError(
                f"Cannot combine {self.dimensions}-dimensional vector with {other.dimensions}-dimensional vector"
            )

    def __add__(self, other: EuclideanVector) -> EuclideanVector:
        if not isinstance(other, EuclideanVector):
            return NotImplemented

        self._check_dimensions(other)
        return EuclideanVector(
            left + right for left, right in zip(self._components, other._components)
        )

    def __sub__(self, other: EuclideanVector) -> EuclideanVector:
        if not isinstance(other, EuclideanVector):
            return NotImplemented

        self._check_dimensions(other)
        return EuclideanVector(
            left - right for left, right in zip(self._components, other._components)
        )

    def __mul__(self, scalar: float) -> EuclideanVector:
        if not isinstance(scalar, (int, float)):
            return NotImplemented

        return EuclideanVector(component * scalar for component in self._components)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> EuclideanVector:
        if not isinstance(scalar, (int, float)):
            return NotImplemented

        if scalar == 0:
            return EuclideanVector(
                _divide_by_zero(component, scalar) for component in self._components
            )

        return EuclideanVector(component / scalar for component in self._components)

    def __getitem__(self, index: int) -> float:
        return self._components[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EuclideanVector):
            return NotImplemented

        return self._components == other._components

    def __hash__(self) -> int:
        return hash(self._components)

    def __repr__(self) -> str:
        return f"EuclideanVector({list(self._components)})"


def _divide_by_zero(component: float, divisor: float) -> float:
    # IEEE-754 semantics, Python raises ZeroDivisionError for float / 0.0
    if component == 0 or math.isnan(component):
        return math.nan

    sign = math.copysign(1.0, component) * math.copysign(1.0, divisor)
    return math.copysign(math.inf, sign)
