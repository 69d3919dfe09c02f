"""Tests for the structured and text response adapters."""

from __future__ import annotations

import json

from mecha_mcp.foundation.errors import Err, ErrorCode, Ok, error_info
from mecha_mcp.tools import ToolResponse, format_error, structured_response, text_response

NOT_FOUND = error_info("Not found", status_code=404, code=ErrorCode.HTTP_ERROR)
TIMED_OUT = error_info("Request timeout after 10000ms", code=ErrorCode.TIMEOUT)


def test_format_error_with_and_without_status() -> None:
    assert format_error(NOT_FOUND) == "Error(404): Not found"
    assert format_error(TIMED_OUT) == "Error(): Request timeout after 10000ms"


# ═════════════════════════════════════════════════════════════════════════════
# Text
# ═════════════════════════════════════════════════════════════════════════════


def test_text_string_value_is_verbatim() -> None:
    response = text_response(Ok("hello"))

    assert response.content == ("hello",)
    assert not response.is_error
    assert response.structured_content is None


def test_text_error() -> None:
    response = text_response(Err(NOT_FOUND))

    assert response.content == ("Error(404): Not found",)
    assert response.is_error


def test_text_none_value_is_empty() -> None:
    assert text_response(Ok(None)).text == ""


def test_text_structured_value_is_json() -> None:
    value = {"id": "a1", "isPublished": True, "tags": ["x"]}
    assert json.loads(text_response(Ok(value)).text) == value


def test_text_non_ascii_kept() -> None:
    assert text_response(Ok({"name": "Café"})).text == '{"name": "Café"}'


# ═════════════════════════════════════════════════════════════════════════════
# Structured
# ═════════════════════════════════════════════════════════════════════════════


def test_structured_success() -> None:
    agents = [{"id": "a1"}, {"id": "a2"}]
    response = structured_response(Ok(agents), "agents")

    assert response.structured_content == {"agents": agents, "error": None}
    assert response.content == ()
    assert not response.is_error


def test_structured_error_without_status() -> None:
    response = structured_response(Err(TIMED_OUT), "agents")

    assert response.structured_content == {"agents": None, "error": "Error(): Request timeout after 10000ms"}
    assert response.is_error


def test_structured_success_with_null_data() -> None:
    response = structured_response(Ok(None), "dataset")

    assert response.structured_content == {"dataset": None, "error": None}
    assert not response.is_error


# ═════════════════════════════════════════════════════════════════════════════
# MCP Conversion
# ═════════════════════════════════════════════════════════════════════════════


def test_call_tool_result_conversion() -> None:
    result = text_response(Err(NOT_FOUND)).to_call_tool_result()

    assert result.isError is True
    assert result.content[0].text == "Error(404): Not found"


def test_error_factory() -> None:
    response = ToolResponse.error("boom")
    assert response.is_error and response.text == "boom"
