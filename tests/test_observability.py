"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from native_package.core.observability.logging_config import (
    _parse_level,
    level_from_flags,
    setup_logging,
    short_name,
)


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch):
    for var in ("NPKG_LOG_LEVEL", "NPKG_LOG_FILE", "NPKG_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    @pytest.mark.parametrize("name, expected", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("Error", logging.ERROR),
    ])
    def test_known(self, name, expected):
        assert _parse_level(name) == expected

    @pytest.mark.parametrize("name", ["", None, "LOUD", "basicConfig"])
    def test_unknown_defaults_to_warning(self, name):
        assert _parse_level(name) == logging.WARNING


class TestLevelFromFlags:
    def test_default(self):
        assert level_from_flags() == logging.WARNING

    def test_env(self, monkeypatch):
        monkeypatch.setenv("NPKG_LOG_LEVEL", "info")
        assert level_from_flags() == logging.INFO

    def test_flags_beat_env(self, monkeypatch):
        monkeypatch.setenv("NPKG_LOG_LEVEL", "error")
        assert level_from_flags(verbose=True) == logging.INFO
        assert level_from_flags(debug=True, quiet=True) == logging.DEBUG
        assert level_from_flags(quiet=True) == logging.ERROR


class TestShortName:
    @pytest.mark.parametrize("name, expected", [
        ("native_package.core.services.native_package.orchestration.orchestrator",
         "orchestration.orchestrator"),
        ("native_package.core.use_cases.apply", "use_cases.apply"),
        ("native_package.main", "main"),
        ("urllib3.connectionpool", "urllib3.connectionpool"),
    ])
    def test_prefix_stripped(self, name, expected):
        assert short_name(name) == expected


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_console_shows_layer_name(self):
        setup_logging(logging.INFO)
        formatter = logging.getLogger().handlers[0].formatter
        record = logging.LogRecord(
            "native_package.core.services.native_package.execution.backends",
            logging.INFO, __file__, 1, "CMD apt-get install", None, None,
        )
        line = formatter.format(record)
        assert "[execution.backends] CMD apt-get install" in line

    def test_warning_format(self):
        setup_logging(logging.WARNING)
        formatter = logging.getLogger().handlers[0].formatter
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "state check failed", None, None)
        assert formatter.format(record) == "WARNING: state check failed"

    def test_file_handler_lower_level(self, tmp_path: Path):
        log_file = tmp_path / "npkg.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("native_package.test").debug("resolve detail")
        for h in root.handlers:
            h.flush()
        assert "native_package.test" in log_file.read_text()
        assert "resolve detail" in log_file.read_text()

    def test_file_from_env(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("NPKG_LOG_FILE", str(log_file))
        monkeypatch.setenv("NPKG_LOG_FILE_LEVEL", "INFO")
        setup_logging(logging.ERROR)
        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.handlers[1].level == logging.INFO
        assert root.level == logging.INFO
