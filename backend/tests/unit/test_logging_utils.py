"""Unit tests for correlation-aware logging helpers."""

import logging

import pytest

from hotel_shared.utils.logging import (
    CorrelationIdFilter,
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_hotel_operation,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_correlation() -> None:
    clear_correlation_id()


class TestCorrelationId:
    """Tests for correlation ID context handling."""

    def test_set_keeps_given_id(self) -> None:
        assert set_correlation_id("req-1") == "req-1"
        assert get_correlation_id() == "req-1"

    def test_set_generates_when_missing(self) -> None:
        generated = set_correlation_id(None)
        assert generated
        assert get_correlation_id() == generated

    def test_clear(self) -> None:
        set_correlation_id("req-2")
        clear_correlation_id()
        assert get_correlation_id() is None


class TestFormatting:
    """Tests for the filter and formatter."""

    def test_formatter_prefixes_correlation_id(self) -> None:
        set_correlation_id("req-3")
        record = logging.LogRecord("hotel", logging.INFO, __file__, 1, "hello", None, None)

        output = StructuredFormatter("%(message)s").format(record)

        assert output == "[req-3] hello"

    def test_filter_uses_placeholder(self) -> None:
        record = logging.LogRecord("hotel", logging.INFO, __file__, 1, "hello", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "no-correlation-id"

    def test_get_logger_adds_filter_once(self) -> None:
        logger = get_logger("hotel.tests.filter")
        get_logger("hotel.tests.filter")

        filters = [f for f in logger.filters if isinstance(f, CorrelationIdFilter)]
        assert len(filters) == 1


class TestLogHotelOperation:
    """Tests for log_hotel_operation."""

    def test_success_logs_info(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("hotel.tests.ops")

        with caplog.at_level(logging.INFO, logger="hotel.tests.ops"):
            log_hotel_operation(logger, "approve_hotel", hotel_id="h-1", status="approved")

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "Hotel operation: approve_hotel" in record.getMessage()
        assert "hotel_id=h-1" in record.getMessage()
        assert record.status == "approved"

    def test_error_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("hotel.tests.ops")

        with caplog.at_level(logging.INFO, logger="hotel.tests.ops"):
            log_hotel_operation(logger, "ownership_check", error="NO_PERMISSION")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.error == "NO_PERMISSION"
