"""Tests for process setup and the package surface."""

import pytest

import errtree
from errtree.config import Settings, get_settings
from errtree.errors import ConfigurationError
from errtree.levels import Level
from errtree.sinks import StreamSink


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ["ERRTREE_LOG_LEVEL", "ERRTREE_COLOR", "ERRTREE_LINE_WIDTH", "ERRTREE_TIMESTAMPS"]:
        monkeypatch.delenv(key, raising=False)


class TestSetup:
    """Test building the root Log from settings."""

    def test_setup_installs_settings(self, buffer, sink) -> None:
        settings = Settings(log_level="WARN", timestamps=False, color=False)
        log = errtree.setup(settings, sink=sink)

        assert get_settings() is settings
        assert log.min_level is Level.WARN
        log.info("hidden")
        log.warn("shown")
        assert buffer.getvalue() == "WARN: shown\n"

    def test_setup_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ERRTREE_LOG_LEVEL", "debug")
        monkeypatch.setenv("ERRTREE_COLOR", "false")
        log = errtree.setup()
        assert log.min_level is Level.DEBUG
        assert isinstance(log.sink, StreamSink)

    def test_setup_twice_with_different_settings(self, sink) -> None:
        errtree.setup(Settings(log_level="INFO"), sink=sink)
        with pytest.raises(ConfigurationError):
            errtree.setup(Settings(log_level="ERROR"), sink=sink)


class TestPackageSurface:
    """Test the names exported from the package."""

    def test_level_constants(self) -> None:
        assert errtree.WARN is Level.WARN
        assert errtree.DEBUG < errtree.INFO < errtree.WARN < errtree.ERROR

    def test_all_exports_resolve(self) -> None:
        for name in errtree.__all__:
            assert hasattr(errtree, name), name

    def test_end_to_end(self, plain_settings, buffer, sink) -> None:
        log = errtree.Log.new_root(errtree.INFO, sink=sink).fork(errtree.ea(run="nightly"))
        failures = [log.fork(errtree.ea(item=i)).err("item failed") for i in (1, 2)]
        error = errtree.combine(log.agg_err("batch failed", failures), errtree.err("cleanup failed"))

        log.log_error(errtree.ERROR, error)

        assert buffer.getvalue() == (
            "ERROR: batch failed\n"
            "  - run = nightly\n"
            "  Caused by:\n"
            "    item failed\n"
            "      - item = 1\n"
            "    item failed\n"
            "      - item = 2\n"
            "  Incidentally:\n"
            "    cleanup failed\n"
        )
