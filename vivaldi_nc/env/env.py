from __future__ import annotations
from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr
from typing import Callable, Dict, Literal, Union

from vivaldi_nc.models.coordinates import VivaldiConfig

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    VIVALDI_LOG_LEVEL: StrictStr = "info"
    VIVALDI_LOG_OUTPUT: Literal["stdout", "stderr"] = "stdout"
    VIVALDI_LOGS_DIRECTORY: StrictStr | None = None

    # Update rule settings
    VIVALDI_DIMENSIONS: StrictInt = 3
    VIVALDI_C_ERROR: StrictFloat = 0.25
    VIVALDI_C_DELTA: StrictFloat = 0.25
    VIVALDI_DEFAULT_ERROR: StrictFloat = 200.0
    VIVALDI_MIN_ERROR: StrictFloat = 2.0**-23
    VIVALDI_ZERO_RTT_POLICY: Literal["skip", "clamp"] = "skip"
    VIVALDI_RTT_EPSILON_MS: StrictFloat = 0.001

    # Tracker settings
    VIVALDI_K_SIGMA: StrictFloat = 2.0
    VIVALDI_COORD_TTL_SECONDS: StrictFloat = 300.0
    VIVALDI_CONVERGENCE_ERROR_THRESHOLD: StrictFloat = 0.5
    VIVALDI_CONVERGENCE_MIN_SAMPLES: StrictInt = 10

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "VIVALDI_LOG_LEVEL": str,
            "VIVALDI_LOG_OUTPUT": str,
            "VIVALDI_LOGS_DIRECTORY": str,
            "VIVALDI_DIMENSIONS": int,
            "VIVALDI_C_ERROR": float,
            "VIVALDI_C_DELTA": float,
            "VIVALDI_DEFAULT_ERROR": float,
            "VIVALDI_MIN_ERROR": float,
            "VIVALDI_ZERO_RTT_POLICY": str,
            "VIVALDI_RTT_EPSILON_MS": float,
            "VIVALDI_K_SIGMA": float,
            "VIVALDI_COORD_TTL_SECONDS": float,
            "VIVALDI_CONVERGENCE_ERROR_THRESHOLD": float,
            "VIVALDI_CONVERGENCE_MIN_SAMPLES": int,
        }

    def get_vivaldi_config(self) -> VivaldiConfig:
        """Get Vivaldi configuration from environment settings."""
        return VivaldiConfig(
            dimensions=self.VIVALDI_DIMENSIONS,
            c_error=self.VIVALDI_C_ERROR,
            c_delta=self.VIVALDI_C_DELTA,
            default_error=self.VIVALDI_DEFAULT_ERROR,
            min_error=self.VIVALDI_MIN_ERROR,
            zero_rtt_policy=self.VIVALDI_ZERO_RTT_POLICY,
            rtt_epsilon_ms=self.VIVALDI_RTT_EPSILON_MS,
            k_sigma=self.VIVALDI_K_SIGMA,
            coord_ttl_seconds=self.VIVALDI_COORD_TTL_SECONDS,
            convergence_error_threshold=self.VIVALDI_CONVERGENCE_ERROR_THRESHOLD,
            convergence_min_samples=self.VIVALDI_CONVERGENCE_MIN_SAMPLES,
        ).validate()

    def get_logging_config(self) -> dict:
        """Get logging settings in the shape LoggingConfig.update() accepts."""
        return {
            'log_level': self.VIVALDI_LOG_LEVEL,
            'log_output': self.VIVALDI_LOG_OUTPUT,
            'log_directory': self.VIVALDI_LOGS_DIRECTORY,
        }
