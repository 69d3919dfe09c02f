"""Tests for structured logging renderers and scoped context."""

from __future__ import annotations

import io

import orjson
import pytest

from mecha_mcp.runtime.observability import (
    JsonRenderer,
    NoOpRenderer,
    configure_logging,
    get_logger,
    log_context,
)


def test_json_renderer_merges_context() -> None:
    out = io.StringIO()
    configure_logging("json", "DEBUG", output=out)
    log = get_logger("mecha.test").bind(path="agents")

    with log_context(tool="list-agents"):
        log.warning("request failed", status_code=404)

    record = orjson.loads(out.getvalue())
    assert record["event"] == "request failed"
    assert record["level"] == "warning"
    assert record["logger"] == "mecha.test"
    assert record["tool"] == "list-agents"
    assert record["path"] == "agents"
    assert record["status_code"] == 404


def test_scoped_context_is_removed_on_exit() -> None:
    out = io.StringIO()
    configure_logging("json", output=out)

    with log_context(tool="get-agent"):
        pass
    get_logger().info("after")

    assert "tool" not in orjson.loads(out.getvalue())


def test_level_filters_records() -> None:
    out = io.StringIO()
    configure_logging("console", "WARNING", output=out, colors=False)
    log = get_logger("mecha.test")

    log.debug("hidden")
    log.info("hidden too")
    log.error("shown", code="TIMEOUT")

    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    assert "[error] shown" in lines[0]
    assert 'code="TIMEOUT"' in lines[0]


def test_bind_returns_new_logger() -> None:
    base = get_logger("mecha.test")
    bound = base.bind(method="GET")

    assert "method" not in base.context
    assert bound.context == {"logger": "mecha.test", "method": "GET"}


def test_none_format_is_silent() -> None:
    assert isinstance(configure_logging("none"), NoOpRenderer)
    assert isinstance(configure_logging("json", output=io.StringIO()), JsonRenderer)


def test_unknown_format_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging("xml")
