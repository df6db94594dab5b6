"""
Test suite for logging configuration, correlation IDs and log helpers.

System role: Verification of the observability layer
"""

import logging

import pytest

from docchat.observability import configure_logging, get_correlation_id, set_correlation_id
from docchat.observability.correlation import clear_correlation_id
from docchat.observability.log_utils import log_exception_with_context, log_with_context, safe_log_value
from docchat.observability.logger import CorrelationIdFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCorrelationId:
    def test_set_and_clear(self) -> None:
        assert set_correlation_id("abc") == "abc"
        assert get_correlation_id() == "abc"

        clear_correlation_id()

        assert get_correlation_id() == ""

    def test_generates_when_missing(self) -> None:
        generated = set_correlation_id()

        assert generated
        assert get_correlation_id() == generated
        clear_correlation_id()

    def test_filter_injects_id(self) -> None:
        set_correlation_id("req-7")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record)
        assert record.correlation_id == "req-7"
        clear_correlation_id()


class TestConfigureLogging:
    def test_single_stdout_handler(self, restore_root_logger) -> None:
        configure_logging("debug")
        configure_logging("WARNING")

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING


class TestLogUtils:
    """Test suite for log_utils helpers."""

    def test_safe_log_value(self) -> None:
        assert safe_log_value(None) == "None"
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value("x" * 10, max_length=4) == "xxxx... (truncated, 10 total)"
        assert safe_log_value(42) == "42"

    def test_log_with_context(self, caplog) -> None:
        logger = logging.getLogger("docchat.test")

        with caplog.at_level(logging.INFO, logger="docchat.test"):
            log_with_context(logger, logging.INFO, "ingested", chunk_texts=["a", "b"])

        assert caplog.records[0].chunk_texts == "list(2 items)"

    def test_log_exception_with_context(self, caplog) -> None:
        logger = logging.getLogger("docchat.test")

        with caplog.at_level(logging.ERROR, logger="docchat.test"):
            log_exception_with_context(logger, "cleanup failed", RuntimeError("disk full"), source_id="s1")

        record = caplog.records[0]
        assert record.error_type == "RuntimeError"
        assert record.error_msg == "disk full"
        assert record.source_id == "s1"
        assert record.exc_info is not None
