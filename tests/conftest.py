"""Pytest configuration and fixtures."""

import io

import pytest
import errtree.config as config_module
import errtree.logging_config as logging_config_module
from errtree.config import Settings, install_settings
from errtree.logging_config import configure_logging
from errtree.sinks import StreamSink


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests.

    This fixture runs once per session and configures structlog for testing.
    cache_logger_on_first_use=False ensures test isolation.
    """
    configure_logging(log_level="DEBUG")


@pytest.fixture(autouse=True)
def reset_global_state() -> None:
    """Reset the settings cell and logging config state before each test for isolation."""
    config_module._installed = None
    logging_config_module._CONFIGURED = False


@pytest.fixture
def plain_settings() -> Settings:
    """Install deterministic settings: no timestamps, no colour, fixed width."""
    return install_settings(Settings(timestamps=False, color=False, line_width=80))


@pytest.fixture
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def sink(buffer: io.StringIO) -> StreamSink:
    return StreamSink(buffer, width=80)
