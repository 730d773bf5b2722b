"""
Vivaldi height vectors.

A height vector is a Euclidean position augmented with a non-negative
height. The Euclidean part models a high-speed Internet core where
latency is proportional to distance; the height models the access link
("stem") a packet must cross to reach the core. A packet travels the
source height, the Euclidean distance, then the destination height, so
two nodes are separated by their Euclidean distance plus *both* heights.
This is why the height is not simply an extra dimension, and why
vector algebra is redefined:

    [x, xh] - [y, yh] = [(x - y), xh + yh]
    ||[x, xh]||       = ||x|| + xh
    a * [x, xh]       = [a * x, a * xh]

Every producing operation re-validates its result. An invalid result
(NaN, infinite, or negative height) is replaced with a freshly drawn
random unit vector, so an invalid height vector is never returned.
"""

from __future__ import annotations

import math
import random
from typing import Iterable

from .checked import Checked, ValidationStatus
from .euclidean_vector import EuclideanVector
from vivaldi_nc.exceptions import DimensionMismatchError


class HeightVector:
    __slots__ = (
        "_position",
        "_height",
        "_rng",
    )

    def __init__(
        self,
        position: EuclideanVector,
        height: float,
        rng: random.Random | None = None,
    ) -> None:
        # Unchecked. Use checked()/from_components() for external values.
        self._position = position
        self._height = float(height)
        self._rng = rng

    @classmethod
    def random(
        cls,
        dimensions: int,
        rng: random.Random | None = None,
    ) -> HeightVector:
        """Draw a random unit-length height vector."""
        if dimensions < 1:
            raise DimensionMismatchError(
                f"HeightVector requires at least one dimension, got {dimensions}"
            )

        if rng is None:
            rng = random.Random()

        while True:
            candidate = cls(
                EuclideanVector(rng.random() - 0.5 for _ in range(dimensions)),
                abs(rng.random()),
                rng=rng,
            )

            length = candidate.len()
            if length > 0.0 and math.isfinite(length):
                return candidate._scaled(1.0 / length)

    @classmethod
    def new(
        cls,
        dimensions: int,
        rng: random.Random | None = None,
    ) -> HeightVector:
        return cls.random(dimensions, rng=rng)

    @classmethod
    def zero(cls, dimensions: int) -> HeightVector:
        return cls(EuclideanVector.zeros(dimensions), 0.0)

    @classmethod
    def checked(
        cls,
        position: EuclideanVector,
        height: float,
        rng: random.Random | None = None,
    ) -> Checked[HeightVector]:
        candidate = cls(position, height, rng=rng)
        if candidate.is_valid():
            return Checked(candidate)

        return Checked(
            cls.random(position.dimensions, rng=rng),
            ValidationStatus.REINITIALIZED,
        )

    @classmethod
    def from_components(
        cls,
        components: Iterable[float],
        height: float,
        rng: random.Random | None = None,
    ) -> HeightVector:
        return cls.checked(
            EuclideanVector(components),
            height,
            rng=rng,
        ).value

    @property
    def position(self) -> EuclideanVector:
        return self._position

    @property
    def height(self) -> float:
        return self._height

    @property
    def dimensions(self) -> int:
        return self._position.dimensions

    def len(self) -> float:
        return self._position.len() + self._height

    def is_invalid(self) -> bool:
        return (
            self._position.is_invalid()
            or math.isnan(self._height)
            or math.isinf(self._height)
            or self._height < 0.0
        )

    def is_valid(self) -> bool:
        return not self.is_invalid()

    def checked_normalized(self) -> Checked[HeightVector]:
        length = self.len()
        if length == 0.0 or not math.isfinite(length):
            return Checked(
                HeightVector.random(self.dimensions, rng=self._rng),
                ValidationStatus.REINITIALIZED,
            )

        return self._scaled(1.0 / length)._validated()

    def normalized(self) -> HeightVector:
        return self.checked_normalized().value

    def checked_add(self, other: HeightVector) -> Checked[HeightVector]:
        return HeightVector(
            self._position + other._position,
            self._height + other._height,
            rng=self._rng,
        )._validated()

    def checked_sub(self, other: HeightVector) -> Checked[HeightVector]:
        # heights sum: both access links are traversed regardless of direction
        return HeightVector(
            self._position - other._position,
            self._height + other._height,
            rng=self._rng,
        )._validated()

    def checked_mul(self, scalar: float) -> Checked[HeightVector]:
        return self._scaled(scalar)._validated()

    def distance(self, other: HeightVector) -> float:
        return (self - other).len()

    def _scaled(self, scalar: float) -> HeightVector:
        return HeightVector(
            self._position * scalar,
            self._height * scalar,
            rng=self._rng,
        )

    def _validated(self) -> Checked[HeightVector]:
        if self.is_valid():
            return Checked(self)

        return Checked(
            HeightVector.random(self.dimensions, rng=self._rng),
            ValidationStatus.REINITIALIZED,
        )

    def __add__(self, other: HeightVector) -> HeightVector:
        if not isinstance(other, HeightVector):
            return NotImplemented

        return self.checked_add(other).value

    def __sub__(self, other: HeightVector) -> HeightVector:
        if not isinstance(other, HeightVector):
            return NotImplemented

        return self.checked_sub(other).value

    def __mul__(self, scalar: float) -> HeightVector:
        if not isinstance(scalar, (int, float)):
            return NotImplemented

        return self.checked_mul(scalar).value

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeightVector):
            return NotImplemented

        return self._position == other._position and self._height == other._height

    def __hash__(self) -> int:
        return hash((self._position, self._height))

    def __repr__(self) -> str:
        return f"HeightVector(position={list(self._position)}, height={self._height})"
