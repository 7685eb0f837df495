from __future__ import annotations

import logging

import pytest

from mapevents.builders import build_error_payload
from mapevents.sink import ErrorSink, LoggingErrorSink


def test_logging_sink_is_an_error_sink() -> None:
    assert isinstance(LoggingErrorSink(), ErrorSink)


def test_report_logs_message_at_error(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="test.sink")
    sink = LoggingErrorSink("test.sink")

    sink.report(build_error_payload("map", "style is invalid"))

    records = [r for r in caplog.records if r.name == "test.sink"]
    assert len(records) == 1
    assert records[0].levelno == logging.ERROR
    assert "Unhandled map error: style is invalid" in records[0].getMessage()
    assert records[0].exc_info is None


def test_report_includes_correlation_and_cause(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="test.sink")
    sink = LoggingErrorSink(logging.getLogger("test.sink"))
    cause = TimeoutError("tile timed out")

    sink.report(build_error_payload("map", cause, data_type="source", resource_id="roads", coordinate=(4, 2, 3)))

    record = next(r for r in caplog.records if r.name == "test.sink")
    message = record.getMessage()
    assert "tile timed out" in message
    assert "roads" in message
    assert "4/2/3" in message
    assert record.exc_info is not None
    assert record.exc_info[1] is cause


def test_long_messages_are_truncated(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="test.sink")
    sink = LoggingErrorSink("test.sink", max_string=8)

    sink.report(build_error_payload("map", "x" * 100))

    message = next(r for r in caplog.records if r.name == "test.sink").getMessage()
    assert "<truncated>" in message
    assert "x" * 9 not in message


def test_report_never_raises(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="test.sink")
    sink = LoggingErrorSink("test.sink")

    sink.report(object())  # type: ignore[arg-type]

    message = next(r for r in caplog.records if r.name == "test.sink").getMessage()
    assert "unrenderable" in message
