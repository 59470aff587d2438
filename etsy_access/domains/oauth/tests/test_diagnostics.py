"""Tests for correlation markers and ErrorWrapper."""

import json
import logging

from etsy_access.core.exceptions import EtsyCallException
from etsy_access.domains.oauth.diagnostics import ErrorWrapper, method_call_info, new_mark


def test_marks_are_unique():
    assert len({new_mark() for _ in range(50)}) == 50


def test_method_call_info_is_json():
    info = json.loads(method_call_info("https://x/y", "m1", "op", method_result="ok", shop="1"))

    assert info == {
        "description": "op",
        "url": "https://x/y",
        "mark": "m1",
        "result": "ok",
        "additional_info": {"shop": "1"},
    }


def test_capture_wraps_and_logs(caplog):
    original = TimeoutError("timed out")

    with caplog.at_level(logging.ERROR, logger="etsy_access"):
        wrapped = ErrorWrapper().capture(original, url="https://x/y", mark="m1", description="op")

    assert isinstance(wrapped, EtsyCallException)
    assert wrapped.__cause__ is original
    assert (wrapped.url, wrapped.mark, wrapped.description) == ("https://x/y", "m1", "op")
    assert "timed out" in str(wrapped)

    (record,) = caplog.records
    assert "TimeoutError during op" in record.getMessage()
    assert '"mark": "m1"' in record.getMessage()
    assert record.exc_info is not None


def test_capture_message_falls_back_to_type_name():
    wrapped = ErrorWrapper().capture(KeyError(), url="u", mark="m", description="op")
    assert wrapped.message == "KeyError"
