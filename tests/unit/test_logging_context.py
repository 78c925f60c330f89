"""Request context binding and the logging filter that reads it."""

import logging

from assetverse.shared.context import bind_request_id, get_request_id, reset_request_id
from assetverse.shared.logging import RequestContextFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("assetverse.test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_defaults_outside_a_request() -> None:
    record = _record()
    assert RequestContextFilter().filter(record) is True
    assert record.request_id == "-"


def test_filter_reads_bound_request_id() -> None:
    token = bind_request_id("req-42")
    try:
        record = _record()
        RequestContextFilter().filter(record)
        assert record.request_id == "req-42"
    finally:
        reset_request_id(token)
    assert get_request_id() is None
