import random
import threading
import time
from typing import Callable

from vivaldi_nc.core.network_coordinate import NetworkCoordinate, UpdateOutcome
from vivaldi_nc.env import Env, load_env
from vivaldi_nc.logging.config.logging_config import LoggingConfig
from vivaldi_nc.logging.streams.logger_stream import LoggerStream
from vivaldi_nc.logging.vivaldi_logging_models import (
    CoordinateReinitialized,
    CoordinateUpdated,
    PeersExpired,
    RttSampleRejected,
)
from vivaldi_nc.models.coordinates import VivaldiConfig


class CoordinateTracker:
    """
    Owns the local node's Vivaldi coordinate and the last coordinate
    reported by each peer.

    All mutation of the local coordinate goes through a single lock, so
    concurrent RTT samples are applied one at a time. Peer coordinates
    are stored as snapshots and never modified.
    """

    def __init__(
        self,
        coordinate: NetworkCoordinate | None = None,
        config: VivaldiConfig | None = None,
        rng: random.Random | None = None,
        logger: LoggerStream | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if coordinate is not None:
            config = coordinate.config

        self._config = (config or VivaldiConfig()).validate()
        self._coordinate = coordinate or NetworkCoordinate(
            config=self._config,
            rng=rng,
        )
        self._logger = logger or LoggerStream(name="coordinate_tracker")
        self._clock = clock

        self._lock = threading.Lock()
        self._sample_count = 0
        self._updated_at = clock()
        self._peers: dict[str, NetworkCoordinate] = {}
        self._peer_last_seen: dict[str, float] = {}

    @classmethod
    def from_env(
        cls,
        env: Env | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "CoordinateTracker":
        """
        Build a tracker from VIVALDI_* settings.

        Loads the environment (and any .env file) when no Env is given,
        applies its log level, output and directory to the shared
        LoggingConfig, then builds the tracker from its VivaldiConfig.
        """
        if env is None:
            env = load_env(Env)

        LoggingConfig().update(**env.get_logging_config())

        return cls(
            config=env.get_vivaldi_config(),
            rng=rng,
            logger=LoggerStream(name="coordinate_tracker"),
            clock=clock,
        )

    @property
    def sample_count(self) -> int:
        return self._sample_count

    def get_coordinate(self) -> NetworkCoordinate:
        """Get a snapshot of the local node's coordinate."""
        with self._lock:
            return self._coordinate.snapshot()

    def update_peer_coordinate(
        self,
        peer_id: str,
        peer_coordinate: NetworkCoordinate,
        rtt_ms: float,
    ) -> UpdateOutcome:
        """
        Update local coordinate based on RTT measurement to peer.

        Also stores the peer's coordinate for future RTT estimation
        unless the sample was rejected.

        Args:
            peer_id: Identifier of the peer
            peer_coordinate: Peer's reported coordinate
            rtt_ms: Measured round-trip time in milliseconds

        Returns:
            How the sample was handled
        """
        peer_snapshot = peer_coordinate.snapshot()

        with self._lock:
            estimated_rtt_ms = self._coordinate.estimated_rtt_ms(peer_snapshot)
            outcome = self._coordinate.update_ms(peer_snapshot, rtt_ms)

            samples_discarded = self._sample_count
            if outcome == UpdateOutcome.APPLIED:
                self._sample_count += 1
                self._updated_at = self._clock()

            elif outcome == UpdateOutcome.REINITIALIZED:
                self._sample_count = 0
                self._updated_at = self._clock()

            error = self._coordinate.error

            rejected = outcome in (
                UpdateOutcome.REJECTED_NEGATIVE_RTT,
                UpdateOutcome.REJECTED_INVALID_RTT,
            )
            if not rejected:
                self._peers[peer_id] = peer_snapshot
                self._peer_last_seen[peer_id] = self._clock()

        if rejected:
            self._logger.log(
                RttSampleRejected(
                    message=f"Rejected RTT sample from {peer_id}",
                    peer_id=peer_id,
                    rtt_ms=rtt_ms,
                    outcome=outcome.value,
                )
            )

            return outcome

        if outcome == UpdateOutcome.SKIPPED_ZERO_RTT:
            self._logger.log(
                RttSampleRejected(
                    message=f"Skipped zero RTT sample from {peer_id}",
                    peer_id=peer_id,
                    rtt_ms=rtt_ms,
                    outcome=outcome.value,
                )
            )

        elif outcome == UpdateOutcome.REINITIALIZED:
            self._logger.log(
                CoordinateReinitialized(
                    message=f"Coordinate reset after invalid update from {peer_id}",
                    peer_id=peer_id,
                    rtt_ms=rtt_ms,
                    samples_discarded=samples_discarded,
                )
            )

        else:
            self._logger.log(
                CoordinateUpdated(
                    message=f"Updated coordinate from {peer_id}",
                    peer_id=peer_id,
                    rtt_ms=rtt_ms,
                    estimated_rtt_ms=estimated_rtt_ms,
                    error=error,
                )
            )

        return outcome

    def estimate_rtt_ms(self, peer_coordinate: NetworkCoordinate) -> float:
        """Estimate RTT to a peer using Vivaldi distance."""
        return self.get_coordinate().estimated_rtt_ms(peer_coordinate)

    def estimate_rtt_ms_for_peer(self, peer_id: str) -> float | None:
        """Estimate RTT to a tracked peer, or None if the peer is unknown."""
        peer_coordinate = self.get_peer_coordinate(peer_id)
        if peer_coordinate is None:
            return None

        return self.estimate_rtt_ms(peer_coordinate)

    def estimate_rtt_ucb_ms(
        self,
        peer_coordinate: NetworkCoordinate | None = None,
        peer_id: str | None = None,
    ) -> float:
        """
        Estimate RTT with upper confidence bound.

        Uses the Vivaldi distance plus a safety margin scaled by both
        coordinates' relative error. Falls back to conservative defaults
        when the peer's coordinate is unknown.

        Formula: rtt_ucb = clamp(rtt_hat + k_sigma * sigma, rtt_min, rtt_max)

        Args:
            peer_coordinate: Peer's coordinate (if known)
            peer_id: Peer ID to look up coordinate (if peer_coordinate not provided)

        Returns:
            RTT upper confidence bound in milliseconds
        """
        if peer_coordinate is None and peer_id is not None:
            peer_coordinate = self.get_peer_coordinate(peer_id)

        if peer_coordinate is None:
            rtt_hat_ms = self._config.rtt_default_ms
            sigma_ms = self._config.sigma_default_ms

        else:
            local = self.get_coordinate()
            rtt_hat_ms = local.estimated_rtt_ms(peer_coordinate)
            # error is relative, so scale it by the estimate
            sigma_ms = self._clamp(
                rtt_hat_ms * (local.error + peer_coordinate.error),
                self._config.sigma_min_ms,
                self._config.sigma_max_ms,
            )

        rtt_ucb = rtt_hat_ms + self._config.k_sigma * sigma_ms

        return self._clamp(
            rtt_ucb,
            self._config.rtt_min_ms,
            self._config.rtt_max_ms,
        )

    def coordinate_quality(self) -> float:
        """
        Compute the local coordinate's quality score.

        Quality is a value in [0.0, 1.0] based on:
        - Sample count: More samples = higher quality
        - Error: Lower error = higher quality
        - Staleness: Fresher coordinates = higher quality

        Formula: quality = sample_quality * error_quality * staleness_quality

        Returns:
            Quality score in [0.0, 1.0]
        """
        with self._lock:
            error = self._coordinate.error
            sample_count = self._sample_count
            updated_at = self._updated_at

        sample_quality = min(
            1.0,
            sample_count / self._config.min_samples_for_quality,
        )

        error_quality = min(
            1.0,
            self._config.error_good / max(error, self._config.min_error),
        )

        staleness_seconds = self._clock() - updated_at
        if staleness_seconds <= self._config.coord_ttl_seconds:
            staleness_quality = 1.0
        else:
            staleness_quality = self._config.coord_ttl_seconds / staleness_seconds

        quality = sample_quality * error_quality * staleness_quality

        return self._clamp(quality, 0.0, 1.0)

    def is_converged(self) -> bool:
        """
        Check if the local coordinate has converged.

        A coordinate is converged when its error is at or below the
        convergence threshold and it has absorbed enough samples.
        """
        with self._lock:
            error_converged = self._coordinate.is_converged(
                self._config.convergence_error_threshold
            )
            samples_sufficient = self._sample_count >= self._config.convergence_min_samples

        return error_converged and samples_sufficient

    def get_config(self) -> VivaldiConfig:
        """Get the Vivaldi configuration."""
        return self._config

    def get_peer_coordinate(self, peer_id: str) -> NetworkCoordinate | None:
        """Get stored coordinate for a peer."""
        with self._lock:
            return self._peers.get(peer_id)

    def cleanup_stale_peers(self, max_age_seconds: float | None = None) -> int:
        """
        Remove stale peer coordinates.

        Args:
            max_age_seconds: Maximum age for peer coordinates (defaults to config TTL)

        Returns:
            Number of peers removed
        """
        if max_age_seconds is None:
            max_age_seconds = self._config.coord_ttl_seconds

        now = self._clock()
        with self._lock:
            stale_peers = [
                peer_id
                for peer_id, last_seen in self._peer_last_seen.items()
                if now - last_seen > max_age_seconds
            ]

            for peer_id in stale_peers:
                self._peers.pop(peer_id, None)
                self._peer_last_seen.pop(peer_id, None)

        if stale_peers:
            self._logger.log(
                PeersExpired(
                    message=f"Expired {len(stale_peers)} stale peer coordinates",
                    peers=stale_peers,
                    max_age_seconds=max_age_seconds,
                )
            )

        return len(stale_peers)

    def get_peer_count(self) -> int:
        """Get the number of tracked peer coordinates."""
        with self._lock:
            return len(self._peers)

    def get_all_peer_ids(self) -> list[str]:
        """Get all tracked peer IDs."""
        with self._lock:
            return list(self._peers.keys())

    def close(self) -> None:
        """Close the tracker's log stream."""
        self._logger.close()

    @staticmethod
    def _clamp(value: float, min_value: float, max_value: float) -> float:
        return max(min_value, min(max_value, value))
