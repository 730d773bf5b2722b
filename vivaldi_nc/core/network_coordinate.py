"""
A Vivaldi network coordinate.

Implements the update rule from Dabek et al., "Vivaldi: A Decentralized
Network Coordinate System" (SIGCOMM 2004):

    vivaldi(rtt, xj, ej)
        w  = ei / (ei + ej)                      # sample weight
        es = | ||xi - xj|| - rtt | / rtt         # relative sample error
        ei = es * ce * w + ei * (1 - ce * w)     # moving average of local error
        d  = cc * w
        xi = xi + d * (rtt - ||xi - xj||) * u(xi - xj)

Distances are height-vector distances and are read as milliseconds.
"""

from __future__ import annotations

import datetime
import math
import random
from enum import Enum
from typing import Any, Iterable

from vivaldi_nc.exceptions import DimensionMismatchError
from vivaldi_nc.models.coordinates import VivaldiConfig

from .height_vector import HeightVector


class UpdateOutcome(Enum):
    APPLIED = "APPLIED"
    REINITIALIZED = "REINITIALIZED"
    REJECTED_NEGATIVE_RTT = "REJECTED_NEGATIVE_RTT"
    REJECTED_INVALID_RTT = "REJECTED_INVALID_RTT"
    SKIPPED_ZERO_RTT = "SKIPPED_ZERO_RTT"

    @property
    def accepted(self) -> bool:
        return self in (UpdateOutcome.APPLIED, UpdateOutcome.REINITIALIZED)


class NetworkCoordinate:
    """
    One node's position in latency space plus its confidence.

    ``error`` is the node's own estimate of how wrong its position is;
    lower means more confident. A new coordinate starts at a random unit
    position with ``config.default_error``.

    ``update`` is a read-modify-write of the whole coordinate and is not
    safe to call concurrently on the same instance. Coordinates received
    from peers are only read, never mutated.
    """

    default_dimensions: int | None = None

    __slots__ = (
        "_config",
        "_rng",
        "_position",
        "_error",
    )

    def __init__(
        self,
        dimensions: int | None = None,
        config: VivaldiConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = (config or VivaldiConfig()).validate()

        if dimensions is None:
            dimensions = self.default_dimensions or self._config.dimensions

        self._rng = rng or random.Random()
        self._position = HeightVector.random(dimensions, rng=self._rng)
        self._error = self._config.default_error

    @classmethod
    def new(
        cls,
        dimensions: int | None = None,
        config: VivaldiConfig | None = None,
        rng: random.Random | None = None,
    ) -> NetworkCoordinate:
        return cls(
            dimensions=dimensions,
            config=config,
            rng=rng,
        )

    @classmethod
    def from_parts(
        cls,
        components: Iterable[float],
        height: float,
        error: float,
        config: VivaldiConfig | None = None,
        rng: random.Random | None = None,
    ) -> NetworkCoordinate:
        """
        Build a coordinate from its three logical values.

        The position is re-validated and replaced with a random unit
        vector if invalid. A non-finite error becomes the default error
        and a finite error below the floor is raised to the floor.
        """
        components = list(components)
        coordinate = cls(
            dimensions=len(components),
            config=config,
            rng=rng,
        )

        coordinate._position = HeightVector.from_components(
            components,
            height,
            rng=coordinate._rng,
        )
        coordinate._error = coordinate._sanitize_error(float(error))

        return coordinate

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        config: VivaldiConfig | None = None,
        rng: random.Random | None = None,
    ) -> NetworkCoordinate:
        return cls.from_parts(
            data["position"],
            data["height"],
            data["error"],
            config=config,
            rng=rng,
        )

    def to_dict(self) -> dict[str, list[float] | float]:
        return {
            "position": list(self._position.position),
            "height": self._position.height,
            "error": self._error,
        }

    @property
    def position(self) -> HeightVector:
        return self._position

    @property
    def error(self) -> float:
        return self._error

    @property
    def dimensions(self) -> int:
        return self._position.dimensions

    @property
    def config(self) -> VivaldiConfig:
        return self._config

    def snapshot(self) -> NetworkCoordinate:
        """Independent copy, safe to hand to other nodes."""
        copy = object.__new__(type(self))
        copy._config = self._config
        copy._rng = self._rng
        copy._position = self._position
        copy._error = self._error

        return copy

    def is_converged(self, threshold: float | None = None) -> bool:
        if threshold is None:
            threshold = self._config.convergence_error_threshold

        return self._error <= threshold

    def estimated_rtt_ms(self, other: NetworkCoordinate) -> float:
        self._check_dimensions(other)

        # same point in latency space, no access link is crossed
        if self._position == other._position:
            return 0.0

        return self._position.distance(other._position)

    def estimated_rtt(self, other: NetworkCoordinate) -> datetime.timedelta:
        try:
            return datetime.timedelta(milliseconds=self.estimated_rtt_ms(other))

        except OverflowError:
            # distance beyond what a timedelta can hold
            return datetime.timedelta.max

    def update(
        self,
        other: NetworkCoordinate,
        rtt: datetime.timedelta,
    ) -> UpdateOutcome:
        return self.update_ms(other, rtt.total_seconds() * 1000.0)

    def update_ms(
        self,
        other: NetworkCoordinate,
        rtt_ms: float,
    ) -> UpdateOutcome:
        """
        Move toward (or away from) ``other`` to better match ``rtt_ms``.

        Returns how the sample was handled. Rejected and skipped samples
        leave the coordinate untouched. If the arithmetic produces an
        invalid position or error the whole coordinate is reset to a new
        random one and ``UpdateOutcome.REINITIALIZED`` is returned.
        """
        self._check_dimensions(other)

        rtt_ms = float(rtt_ms)
        if math.isnan(rtt_ms):
            return UpdateOutcome.REJECTED_INVALID_RTT

        if rtt_ms < 0.0:
            return UpdateOutcome.REJECTED_NEGATIVE_RTT

        if math.isinf(rtt_ms):
            return UpdateOutcome.REJECTED_INVALID_RTT

        if rtt_ms == 0.0:
            if self._config.zero_rtt_policy == "skip":
                return UpdateOutcome.SKIPPED_ZERO_RTT

            rtt_ms = self._config.rtt_epsilon_ms

        rtt_estimated_ms = self.estimated_rtt_ms(other)

        weight = self._error / (self._error + other._error)

        error_delta_ms = rtt_ms - rtt_estimated_ms
        sample_error = abs(error_delta_ms) / rtt_ms

        c_error = self._config.c_error
        error = sample_error * c_error * weight + self._error * (1.0 - c_error * weight)

        # max() would keep a leading NaN, so check before flooring
        if math.isnan(error) or math.isinf(error):
            self._reset()
            return UpdateOutcome.REINITIALIZED

        delta = self._config.c_delta * weight
        direction = (self._position - other._position).normalized()
        moved = self._position.checked_add(direction * (delta * error_delta_ms))

        if moved.reinitialized:
            self._reset()
            return UpdateOutcome.REINITIALIZED

        self._position = moved.value
        self._error = max(error, self._config.min_error)

        return UpdateOutcome.APPLIED

    def _reset(self) -> None:
        self._position = HeightVector.random(self.dimensions, rng=self._rng)
        self._error = self._config.default_error

    def _sanitize_error(self, error: float) -> float:
        if math.isnan(error) or math.isinf(error):
            return self._config.default_error

        return max(error, self._config.min_error)

    def _check_dimensions(self, other: NetworkCoordinate) -> None:
        if other.dimensions != self.dimensions:
            raise DimensionMismatchError(
                f"Cannot compare {self.dimensions}-dimensional coordinate with {other.dimensions}-dimensional coordinate"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkCoordinate):
            return NotImplemented

        return self._position == other._position and self._error == other._error

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(position={list(self._position.position)}, "
            f"height={self._position.height}, error={self._error})"
        )


class NetworkCoordinate2D(NetworkCoordinate):
    default_dimensions = 2

    __slots__ = ()


class NetworkCoordinate3D(NetworkCoordinate):
    default_dimensions = 3

    __slots__ = ()
