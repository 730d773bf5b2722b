"""
Pytest configuration shared by unit and integration tests.

Provides seeded random sources so randomized tests are reproducible,
and keeps tracker logging quiet unless a test opts in.
"""

import random

import pytest

from vivaldi_nc.logging.config.logging_config import (
    LoggingConfig,
    _global_logging_directory,
)
from vivaldi_nc.logging.models import Entry, LogLevel
from vivaldi_nc.logging.streams.logger_stream import LoggerStream
from vivaldi_nc.models.coordinates import VivaldiConfig


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="error", log_output="stdout")
    _global_logging_directory.set(None)
    yield
    config.update(log_level="error", log_output="stdout")
    _global_logging_directory.set(None)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(0x5EED)


@pytest.fixture
def vivaldi_config() -> VivaldiConfig:
    return VivaldiConfig()


@pytest.fixture
def temp_log_directory(tmp_path) -> str:
    return str(tmp_path)


@pytest.fixture
def file_logger(temp_log_directory: str):
    stream = LoggerStream(
        name="test_tracker",
        filename="tracker.json",
        directory=temp_log_directory,
    )
    yield stream
    stream.close()


@pytest.fixture
def sample_entry() -> Entry:
    return Entry(
        message="Test log message",
        level=LogLevel.INFO,
    )
