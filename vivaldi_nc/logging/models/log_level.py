from __future__ import annotations
from enum import Enum
from typing import Literal

LogLevelName = Literal[
    'trace',
    'debug',
    'info',
    'warn',
    'error',
    'critical',
    'fatal'
]


class LogLevel(Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    FATAL = 'FATAL'

    @classmethod
    def to_level(cls, level_name: LogLevelName) -> LogLevel | None:
        return cls.__members__.get(level_name.upper())

    @property
    def severity(self) -> int:
        # members are declared from least to most severe
        return list(LogLevel).index(self)

    def at_least(self, threshold: LogLevel) -> bool:
        return self.severity >= threshold.severity
