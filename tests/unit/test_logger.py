"""Test structured logging setup."""

import logging

import structlog

from edge_journal.core.config import ObservabilityConfig
from edge_journal.observability.logger import get_logger, setup_logging, start_run


class TestStartRun:
    def test_binds_run_context(self):
        run_id = start_run("analyze")
        bound = structlog.contextvars.get_contextvars()
        assert bound == {"run_id": run_id, "command": "analyze"}

    def test_each_run_is_fresh(self):
        first = start_run("analyze")
        second = start_run("insight")
        assert first != second
        assert structlog.contextvars.get_contextvars()["command"] == "insight"


class TestSetupLogging:
    def test_level_override(self):
        setup_logging(ObservabilityConfig(log_level="INFO"), level="debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_http_clients_quiet_by_default(self):
        setup_logging(ObservabilityConfig(log_level="INFO", log_format="json"))
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("anthropic").level == logging.WARNING

    def test_get_logger_accepts_key_values(self):
        setup_logging()
        get_logger("edge_journal.test").info("event", count=1)
