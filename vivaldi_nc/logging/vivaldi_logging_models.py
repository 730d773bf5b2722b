from .models import Entry, LogLevel


class CoordinateUpdated(Entry, kw_only=True):
    peer_id: str
    rtt_ms: float
    estimated_rtt_ms: float
    error: float
    level: LogLevel = LogLevel.TRACE

class RttSampleRejected(Entry, kw_only=True):
    peer_id: str
    rtt_ms: float
    outcome: str
    level: LogLevel = LogLevel.DEBUG

class CoordinateReinitialized(Entry, kw_only=True):
    peer_id: str
    rtt_ms: float
    samples_discarded: int
    level: LogLevel = LogLevel.WARN

class PeersExpired(Entry, kw_only=True):
    peers: list[str]
    max_age_seconds: float
    level: LogLevel = LogLevel.DEBUG
