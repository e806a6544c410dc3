"""Tests for logging helpers."""

import logging

from craftsman_rag.observability.correlation import clear_correlation_id, set_correlation_id
from craftsman_rag.observability.log_utils import safe_log_value
from craftsman_rag.observability.logger import CorrelationIdFilter


class TestSafeLogValue:
    def test_short_text_is_flattened(self) -> None:
        assert safe_log_value("نجار\nفي القاهرة") == "نجار في القاهرة"

    def test_long_text_is_cut(self) -> None:
        assert safe_log_value("x" * 20, max_length=5) == "xxxxx... (20 chars)"

    def test_containers_are_summarised(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"


class TestCorrelationIdFilter:
    def test_record_carries_current_id(self) -> None:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        set_correlation_id("abc-123")
        try:
            CorrelationIdFilter().filter(record)
        finally:
            clear_correlation_id()

        assert record.correlation_id == "abc-123"

    def test_placeholder_without_request(self) -> None:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"
