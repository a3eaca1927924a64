"""
Exercise Tracker: Middleware Unit Tests
=========================================

What:  Request-id resolution, the log filter and access-log level selection.
       The middleware running inside the app is covered in test_api.py.
"""

import logging

import pytest

from exercise_tracker.middleware.logging import access_log_level
from exercise_tracker.middleware.request_id import (
    RequestIdLogFilter,
    request_id_var,
    resolve_request_id,
)


class TestResolveRequestId:

    @pytest.mark.parametrize("value", ["abc123", "checkout-42", "a.b_c", "x" * 64])
    def test_well_formed_id_reused(self, value):
        assert resolve_request_id(value) == value

    @pytest.mark.parametrize("value", [None, "", "x" * 65, "has space", "line\nbreak", "<script>"])
    def test_other_values_replaced(self, value):
        rid = resolve_request_id(value)

        assert rid != value
        assert len(rid) == 8


class TestRequestIdLogFilter:

    def _record(self):
        return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

    def test_stamps_current_request_id(self):
        token = request_id_var.set("abc123")
        try:
            record = self._record()
            assert RequestIdLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc123"

    def test_dash_outside_a_request(self):
        record = self._record()
        RequestIdLogFilter().filter(record)

        assert record.request_id == "-"


class TestAccessLogLevel:

    @pytest.mark.parametrize(
        "status,body_error,expected",
        [
            (200, False, logging.INFO),
            (200, True, logging.WARNING),
            (404, False, logging.WARNING),
            (500, False, logging.ERROR),
            (500, True, logging.ERROR),
        ],
    )
    def test_levels(self, status, body_error, expected):
        assert access_log_level(status, body_error) == expected
