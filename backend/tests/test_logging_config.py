"""Tests for the JSON formatter, request id stamping and secret redaction."""

import json
import logging

from garage.core.logging_config import _ContextFilter, _JsonFormatter, redact, request_id_var


def _record(msg, *args, **extra):
    record = logging.LogRecord("garage.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:

    def test_extra_fields_are_top_level(self):
        line = _JsonFormatter().format(_record("Asset created", asset_id=3))
        payload = json.loads(line)
        assert payload["message"] == "Asset created"
        assert payload["asset_id"] == 3
        assert payload["level"] == "INFO"

    def test_request_id_is_included(self):
        token = request_id_var.set("req-1")
        try:
            payload = json.loads(_JsonFormatter().format(_record("hello")))
        finally:
            request_id_var.reset(token)
        assert payload["request_id"] == "req-1"

    def test_stamped_request_id_is_not_repeated_as_extra(self):
        record = _record("hello")
        _ContextFilter().filter(record)
        payload = json.loads(_JsonFormatter().format(record))
        assert "request_id" not in payload


class TestContextFilter:

    def test_password_values_are_redacted(self):
        record = _record("seeding user password=hunter2 role=wrench")
        _ContextFilter().filter(record)
        assert "hunter2" not in record.msg
        assert "role=wrench" in record.msg

    def test_secrets_passed_as_args_are_redacted(self):
        record = _record("seeding %s password=%s", "admin", "hunter2")
        _ContextFilter().filter(record)
        assert record.getMessage() == "seeding admin password=***REDACTED***"

    def test_request_id_defaults_to_dash(self):
        record = _record("hello")
        _ContextFilter().filter(record)
        assert record.request_id == "-"

    def test_mismatched_args_are_left_alone(self):
        record = _record("two %s %s", "only-one")
        assert _ContextFilter().filter(record) is True
        assert record.args == ("only-one",)


class TestRedact:

    def test_quoted_json_value(self):
        assert "hunter2" not in redact('{"password": "hunter2"}')

    def test_plain_text_untouched(self):
        assert redact("uploaded logo.png") == "uploaded logo.png"
