"""Tests for error codes, ErrorInfo and ToolError rendering."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from mecha_mcp.ext.mcp import ToolServer
from mecha_mcp.foundation.errors import ErrorCode, ErrorInfo, ToolError, ToolException, classify_exception, error_info
from mecha_mcp.io.http import ApiClient
from mecha_mcp.tools import Endpoint, build_registry


@pytest.mark.parametrize(("exc", "code"), [
    (httpx.ConnectError("refused"), ErrorCode.NETWORK_ERROR),
    (TimeoutError("timed out"), ErrorCode.TIMEOUT),
    (TypeError("Object of type object is not JSON serializable"), ErrorCode.PARSE_ERROR),
    (RuntimeError("something odd"), ErrorCode.UNKNOWN),
])
def test_classify_exception(exc: Exception, code: ErrorCode) -> None:
    assert classify_exception(exc) is code


def test_error_info_validation_and_helpers() -> None:
    info = error_info("Not found", status_code=404, code=ErrorCode.HTTP_ERROR)

    assert info == ErrorInfo(message="Not found", status_code=404, code=ErrorCode.HTTP_ERROR)
    assert info.is_http_error
    assert not error_info("Request timeout after 5ms").is_http_error
    assert hash(info) == hash(error_info("Not found", status_code=404, code=ErrorCode.HTTP_ERROR))
    with pytest.raises(ValidationError):
        ErrorInfo(message="bad", status_code=42)


def test_tool_error_render() -> None:
    recoverable = ToolError.create("get-agent", "Invalid parameters: agentId: Field required",
                                   ErrorCode.INVALID_PARAMS)
    fatal = ToolError.create("nope", "Tool 'nope' not found", ErrorCode.NOT_FOUND, recoverable=False)

    assert recoverable.render() == (
        "**Tool Error (get-agent):** Invalid parameters: agentId: Field required\n"
        "_Check the arguments and try again._"
    )
    assert str(fatal) == "**Tool Error (nope):** Tool 'nope' not found"


def test_tool_error_from_exception() -> None:
    error = ToolError.from_exception("list-agents", ValueError("bad value"), "Execution failed")

    assert error.message == "Execution failed: bad value"
    assert not error.recoverable


# ═════════════════════════════════════════════════════════════════════════════
# Raised Inside a Tool
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_tool_exception_is_rendered(client: ApiClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def refuse(self: Endpoint, client: ApiClient, params: object) -> None:
        raise ToolException.create(self.name, "Dataset is locked", ErrorCode.INVALID_PARAMS, recoverable=False)

    monkeypatch.setattr(Endpoint, "call", refuse)
    response = await ToolServer("test", build_registry(), client).invoke("list-datasets", {})

    assert response.is_error
    assert response.text == "**Tool Error (list-datasets):** Dataset is locked"


@pytest.mark.asyncio
async def test_unexpected_exception_is_rendered(client: ApiClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def crash(self: Endpoint, client: ApiClient, params: object) -> None:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(Endpoint, "call", crash)
    response = await ToolServer("test", build_registry(), client).invoke("list-agents", {})

    assert response.is_error
    assert "Execution failed: kaboom" in response.text
