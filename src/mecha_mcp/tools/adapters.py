"""Reshape a backend Result into an MCP tool response.

Both adapters are pure and total over every Result state. Failures render
as ``Error({status_code}): {message}``; a missing status renders empty, as
in ``Error(): Request timeout after 10000ms``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from mecha_mcp.foundation.errors import ErrorInfo, JsonDict

if TYPE_CHECKING:
    from mcp.types import CallToolResult

    from mecha_mcp.io.http import FetchResult


class ToolResponse(BaseModel):
    """Result of one tool invocation, independent of the MCP SDK types."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content: tuple[str, ...] = ()
    structured_content: JsonDict | None = Field(default=None, repr=False)
    is_error: bool = False

    @property
    def text(self) -> str:
        """All text blocks joined."""
        return "\n".join(self.content)

    @classmethod
    def error(cls, message: str) -> ToolResponse:
        return cls(content=(message,), is_error=True)

    def to_call_tool_result(self) -> CallToolResult:
        """Convert to the MCP wire type."""
        from mcp.types import CallToolResult, TextContent
        return CallToolResult(
            content=[TextContent(type="text", text=t) for t in self.content],
            structuredContent=self.structured_content,
            isError=self.is_error,
        )


def format_error(error: ErrorInfo) -> str:
    """``Error(404): Not found``; ``Error(): ...`` without a status."""
    status = "" if error.status_code is None else str(error.status_code)
    return f"Error({status}): {error.message}"


def stringify(value: Any) -> str:
    """Text form of a success value: strings verbatim, None empty, the rest JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True)
    return json.dumps(value, ensure_ascii=False, default=str)


def structured_response(result: FetchResult, key: str) -> ToolResponse:
    """Data under ``key`` and an ``error`` field; exactly one of them is non-null."""
    err = result.err()
    return ToolResponse(
        structured_content={
            key: result.ok() if err is None else None,
            "error": None if err is None else format_error(err),
        },
        is_error=err is not None,
    )


def text_response(result: FetchResult) -> ToolResponse:
    """Single text block: the stringified value or the formatted error."""
    return result.match(
        ok=lambda value: ToolResponse(content=(stringify(value),)),
        err=lambda e: ToolResponse(content=(format_error(e),), is_error=True),
    )
