"""Error types for backend calls and tool invocations.

- ``ErrorInfo`` is the failure side of every backend call: a message, the
  HTTP status when there was one, and a taxonomy code for logs.
- ``ToolError`` covers calls the server rejects before the backend is
  reached (unknown tool, invalid arguments) and renders them for the LLM.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Failure kinds.

    The first four classify backend calls; the rest are server-side
    rejections.
    """
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    INVALID_PARAMS = "INVALID_PARAMS"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN = "UNKNOWN"


# Substring of "ExcType message" -> code, first match wins
_KEYWORDS: tuple[tuple[str, ErrorCode], ...] = (
    ("timeout", ErrorCode.TIMEOUT),
    ("timed out", ErrorCode.TIMEOUT),
    ("connect", ErrorCode.NETWORK_ERROR),
    ("network", ErrorCode.NETWORK_ERROR),
    ("protocol", ErrorCode.NETWORK_ERROR),
    ("socket", ErrorCode.NETWORK_ERROR),
    ("json", ErrorCode.PARSE_ERROR),
    ("decode", ErrorCode.PARSE_ERROR),
    ("serializable", ErrorCode.PARSE_ERROR),
    ("validation", ErrorCode.INVALID_PARAMS),
)


@lru_cache(maxsize=256)
def _code_for(text: str) -> ErrorCode:
    text = text.lower()
    return next((code for keyword, code in _KEYWORDS if keyword in text), ErrorCode.UNKNOWN)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Best-effort code for an unexpected exception, from its type name and message."""
    return _code_for(f"{type(exc).__name__} {exc}")


class ErrorInfo(BaseModel):
    """Failure side of a backend call.

    Attributes:
        message: Backend ``error`` field, decoder message, network fault
            message or timeout notice
        status_code: HTTP status, present only for non-2xx responses
        code: Taxonomy kind, informational only
    """

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    message: str
    status_code: Annotated[int, Field(ge=100, le=599)] | None = None
    code: ErrorCode = ErrorCode.UNKNOWN

    @computed_field
    @property
    def is_http_error(self) -> bool:
        return self.status_code is not None

    def __hash__(self) -> int:
        return hash((self.message, self.status_code, self.code))


def error_info(message: str, *, status_code: int | None = None, code: ErrorCode = ErrorCode.UNKNOWN) -> ErrorInfo:
    """Build ErrorInfo without validation (inputs come from the client itself)."""
    return ErrorInfo.model_construct(message=message, status_code=status_code, code=code)


class ToolError(BaseModel):
    """A tool call rejected before reaching the backend.

    Attributes:
        tool_name: Requested tool
        message: What went wrong
        code: NOT_FOUND, INVALID_PARAMS, or a classified exception code
        recoverable: Whether retrying with other arguments can succeed
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    tool_name: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode = ErrorCode.UNKNOWN
    recoverable: bool = True

    @classmethod
    def create(
        cls,
        tool_name: str,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        *,
        recoverable: bool = True,
    ) -> Self:
        return cls(tool_name=tool_name, message=message, code=code, recoverable=recoverable)

    @classmethod
    def from_exception(cls, tool_name: str, exc: Exception, context: str = "") -> Self:
        text = str(exc) or type(exc).__name__
        return cls(
            tool_name=tool_name,
            message=f"{context}: {text}" if context else text,
            code=classify_exception(exc),
            recoverable=False,
        )

    def render(self) -> str:
        """Markdown text shown to the LLM."""
        lines = [f"**Tool Error ({self.tool_name}):** {self.message}"]
        if self.recoverable:
            lines.append("_Check the arguments and try again._")
        return "\n".join(lines)

    __str__ = render


class ToolException(Exception):
    """Raisable carrier for a ToolError; ``ToolServer.invoke`` renders it."""

    def __init__(self, error: ToolError) -> None:
        super().__init__(error.message)
        self.error = error

    @classmethod
    def create(cls, tool_name: str, message: str, code: ErrorCode = ErrorCode.UNKNOWN, *,
               recoverable: bool = True) -> Self:
        return cls(ToolError.create(tool_name, message, code, recoverable=recoverable))
