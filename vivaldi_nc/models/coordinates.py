import math
from dataclasses import dataclass
from typing import Literal

import msgspec

from vivaldi_nc.exceptions import InvalidConfigError


ZeroRttPolicy = Literal["skip", "clamp"]


@dataclass(slots=True)
class VivaldiConfig:
    """
    Configuration for the Vivaldi coordinate system.

    Provides the tuning constants for the update rule, the policy for
    zero-RTT samples, and the parameters used by the tracker for RTT
    upper confidence bounds and coordinate quality.
    """
    # Coordinate dimensions
    dimensions: int = 3

    # Update algorithm parameters
    c_error: float = 0.25  # Weight of a sample in the error moving average
    c_delta: float = 0.25  # Weight of a sample in the position step
    default_error: float = 200.0  # Error of a coordinate with no information
    min_error: float = 2.0**-23  # Error floor, keeps sample weights in (0, 1)

    # Zero-RTT samples make the relative error undefined
    zero_rtt_policy: ZeroRttPolicy = "skip"
    rtt_epsilon_ms: float = 0.001  # Substitute RTT under the "clamp" policy

    # RTT UCB parameters
    k_sigma: float = 2.0  # UCB multiplier for error margin
    rtt_default_ms: float = 100.0  # Default RTT when coordinate unavailable
    sigma_default_ms: float = 50.0  # Default sigma when coordinate unavailable
    sigma_min_ms: float = 1.0  # Minimum sigma bound
    sigma_max_ms: float = 500.0  # Maximum sigma bound
    rtt_min_ms: float = 0.0  # Minimum RTT estimate
    rtt_max_ms: float = 10000.0  # Maximum RTT estimate (10 seconds)

    # Coordinate quality parameters
    min_samples_for_quality: int = 10  # Minimum samples for quality = 1.0
    error_good: float = 0.2  # Error at or below which error quality = 1.0
    coord_ttl_seconds: float = 300.0  # Coordinate staleness TTL

    # Convergence thresholds
    convergence_error_threshold: float = 0.5  # Error below which considered converged
    convergence_min_samples: int = 10  # Minimum samples for convergence

    def validate(self) -> "VivaldiConfig":
        if self.dimensions < 1:
            raise InvalidConfigError(
                f"dimensions must be at least 1, got {self.dimensions}"
            )

        for name in ("c_error", "c_delta"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise InvalidConfigError(f"{name} must be in (0, 1], got {value}")

        if not (math.isfinite(self.min_error) and self.min_error > 0.0):
            raise InvalidConfigError(
                f"min_error must be finite and positive, got {self.min_error}"
            )

        if not (math.isfinite(self.default_error) and self.default_error >= self.min_error):
            raise InvalidConfigError(
                f"default_error must be finite and at least min_error, got {self.default_error}"
            )

        if self.zero_rtt_policy not in ("skip", "clamp"):
            raise InvalidConfigError(
                f"zero_rtt_policy must be 'skip' or 'clamp', got {self.zero_rtt_policy!r}"
            )

        if not (math.isfinite(self.rtt_epsilon_ms) and self.rtt_epsilon_ms > 0.0):
            raise InvalidConfigError(
                f"rtt_epsilon_ms must be finite and positive, got {self.rtt_epsilon_ms}"
            )

        if self.sigma_min_ms > self.sigma_max_ms:
            raise InvalidConfigError("sigma_min_ms must not exceed sigma_max_ms")

        if self.rtt_min_ms > self.rtt_max_ms:
            raise InvalidConfigError("rtt_min_ms must not exceed rtt_max_ms")

        if self.min_samples_for_quality < 1:
            raise InvalidConfigError("min_samples_for_quality must be at least 1")

        return self


class CoordinateMessage(msgspec.Struct, kw_only=True):
    """Wire form of a network coordinate."""

    position: list[float]
    height: float
    error: float
