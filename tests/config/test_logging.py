"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from recordcheck.config.logging import QUIET_LOGGERS, configure_logging, log_context


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("recordcheck").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("recordcheck").level == logging.WARNING

    def test_third_party_loggers_stay_quiet(self) -> None:
        configure_logging(verbose=True, log_json=False)
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("recordcheck.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "recordcheck.test"

    def test_stdlib_records_rendered(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("recordcheck.infrastructure.client").debug("GET %s", "/booking/1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "GET /booking/1"
        assert parsed["level"] == "debug"


class TestLogContext:
    def test_values_bound_inside_block(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("recordcheck.test")
        with log_context(base_url="https://booker.test"):
            log.info("inside")
        log.info("outside")
        inside, outside = (json.loads(line) for line in capfd.readouterr().err.splitlines())
        assert inside["base_url"] == "https://booker.test"
        assert "base_url" not in outside
