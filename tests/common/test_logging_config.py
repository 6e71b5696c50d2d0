"""
Tests for logging configuration.

Covers environment variable resolution, handler installation on the
"evolvingGraphs" logger, JSON formatting and the performance timer.
"""

import json
import logging
import os
from unittest.mock import patch

import pytest

from evolvingGraphs.common.logging_config import (
    LOGGER_NAME,
    DEFAULT_LOG_FILE_NAME,
    setup_logging,
    get_logger,
    configure_external_library_logging,
    log_performance_metric,
    LoggingTimer,
    JSONFormatter,
    PerformanceFilter,
    _resolve_logging_config
)


def _reset_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestResolveLoggingConfig:
    """Test parameter and environment variable precedence."""

    def test_defaults(self):
        """Test defaults with no environment."""
        with patch.dict(os.environ, {}, clear=True):
            config = _resolve_logging_config()

        assert config["level"] == "INFO"
        assert config["log_file"] is None
        assert config["console"] is True
        assert config["json_format"] is False
        assert config["performance_logging"] is False

    def test_environment_variables(self):
        """Test EVG_* environment variables."""
        env = {
            "EVG_LOG_LEVEL": "DEBUG",
            "EVG_LOG_CONSOLE": "off",
            "EVG_LOG_JSON": "yes",
            "EVG_LOG_PERFORMANCE": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            config = _resolve_logging_config()

        assert config["level"] == "DEBUG"
        assert config["console"] is False
        assert config["json_format"] is True
        assert config["performance_logging"] is True

    def test_parameters_override_environment(self):
        """Test parameters take precedence over environment."""
        with patch.dict(os.environ, {"EVG_LOG_LEVEL": "DEBUG", "EVG_LOG_CONSOLE": "false"}, clear=True):
            config = _resolve_logging_config(level="ERROR", console=True)

        assert config["level"] == "ERROR"
        assert config["console"] is True

    def test_log_dir_names_default_file(self, tmp_path):
        """Test log directory gets the default file name."""
        with patch.dict(os.environ, {"EVG_LOG_DIR": str(tmp_path)}, clear=True):
            config = _resolve_logging_config()

        assert config["log_file"] == os.path.join(str(tmp_path), DEFAULT_LOG_FILE_NAME)

    def test_unrecognized_boolean_uses_default(self):
        """Test unrecognized boolean values fall back to the default."""
        with patch.dict(os.environ, {"EVG_LOG_CONSOLE": "maybe"}, clear=True):
            config = _resolve_logging_config()

        assert config["console"] is True


class TestSetupLogging:
    """Test handler installation."""

    def setup_method(self):
        _reset_package_logger()

    def teardown_method(self):
        _reset_package_logger()

    def test_console_only_by_default(self):
        """Test default setup installs a console handler only."""
        with patch.dict(os.environ, {}, clear=True):
            logger = setup_logging()

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.FileHandler)
        assert logger.propagate is False

    def test_idempotent_without_force(self):
        """Test repeated setup keeps the first configuration."""
        with patch.dict(os.environ, {}, clear=True):
            setup_logging()
            logger = setup_logging(level="DEBUG")

        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_force_setup_replaces_handlers(self):
        """Test forced setup replaces handlers."""
        with patch.dict(os.environ, {}, clear=True):
            setup_logging()
            logger = setup_logging(level="DEBUG", force_setup=True)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_invalid_level(self):
        """Test invalid logging level."""
        with pytest.raises(ValueError, match="Invalid logging level: LOUD"):
            setup_logging(level="LOUD", force_setup=True)

    def test_file_logging_from_module_logger(self, tmp_path):
        """Test module loggers write to the configured file."""
        log_file = tmp_path / "logs" / "evg.log"
        with patch.dict(os.environ, {}, clear=True):
            logger = setup_logging(level="DEBUG", log_file=str(log_file), console=False)

        get_logger("evolvingGraphs.graphs.evolving_graph").info("Added node %s", "a")
        for handler in logger.handlers:
            handler.flush()

        assert "Added node a" in log_file.read_text(encoding="utf-8")

    def test_json_file_logging(self, tmp_path):
        """Test JSON records in the log file."""
        log_file = tmp_path / "evg.json.log"
        with patch.dict(os.environ, {}, clear=True):
            logger = setup_logging(log_file=str(log_file), console=False, json_format=True)

        log_performance_metric("matrix", 0.5, {"nodes": 4})
        for handler in logger.handlers:
            handler.flush()

        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert records[0]["logger"] == "evolvingGraphs"
        assert records[0]["message"].startswith("Logging configured")

        record = next(r for r in records if r["logger"] == "evolvingGraphs.performance")
        assert record["operation"] == "matrix"
        assert record["nodes"] == 4
        assert "matrix completed in 0.500s" in record["message"]


class TestFormattersAndFilters:
    """Test the JSON formatter and performance filter directly."""

    def _record(self, message):
        return logging.LogRecord(
            name="evolvingGraphs.test", level=logging.INFO, pathname=__file__,
            lineno=1, msg=message, args=(), exc_info=None
        )

    def test_json_formatter(self):
        """Test JSON formatter output and extras."""
        record = self._record("hello")
        record.edges = 3

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["edges"] == 3
        assert "msg" not in data

    def test_performance_filter(self):
        """Test performance filter keywords."""
        perf_filter = PerformanceFilter()

        assert perf_filter.filter(self._record("Performance: matrix completed"))
        assert not perf_filter.filter(self._record("Added node a"))


class TestLoggingTimer:
    """Test the timing context manager."""

    def test_records_duration(self, caplog):
        """Test timer records and logs duration."""
        with caplog.at_level(logging.INFO, logger="evolvingGraphs.performance"):
            with LoggingTimer("from_triples", {"triples": 2}) as timer:
                pass

        assert timer.duration is not None
        assert timer.duration >= 0
        assert "Performance: from_triples completed" in caplog.text
        assert "triples=2" in caplog.text

    def test_logs_even_when_body_raises(self, caplog):
        """Test timer logs when the timed block raises."""
        with caplog.at_level(logging.INFO, logger="evolvingGraphs.performance"):
            with pytest.raises(RuntimeError):
                with LoggingTimer("spmatrix"):
                    raise RuntimeError("boom")

        assert "spmatrix completed" in caplog.text


class TestExternalLibraryLogging:
    """Test third-party logger configuration."""

    def test_custom_levels(self):
        """Test custom levels for external libraries."""
        configure_external_library_logging({"networkit": "ERROR", "bogus": "NOPE"})

        assert logging.getLogger("networkit").level == logging.ERROR
        assert logging.getLogger("bogus").level == logging.NOTSET
