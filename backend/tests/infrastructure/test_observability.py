"""Structured logging — JSON formatter surfaces gateway extra fields."""

import json
import logging

from intranet_api.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "intranet_api.test", logging.WARNING, __file__, 1,
        "Gateway call failed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_gateway_fields():
    out = json.loads(JSONFormatter().format(_record(
        error_kind="TargetNotFound", target_name="P_FOOBAR",
        routing_value="FooBar",
    )))
    assert out["level"] == "WARNING"
    assert out["message"] == "Gateway call failed"
    assert out["error_kind"] == "TargetNotFound"
    assert out["target_name"] == "P_FOOBAR"
    assert out["routing_value"] == "FooBar"


def test_json_formatter_omits_absent_fields():
    out = json.loads(JSONFormatter().format(_record(target_name=None)))
    assert "target_name" not in out
    assert "exception" not in out
