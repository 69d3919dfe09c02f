"""Unified error handling for mecha_mcp.

- ErrorCode: Standard error codes for backend and tool failures
- ErrorInfo: Failure payload of every backend call
- ToolError: Structured errors for calls rejected before dispatch
- ToolException: Raisable wrapper around ToolError
- Result/Ok/Err: Monadic error handling
"""

from .errors import ErrorCode, ErrorInfo, ToolError, ToolException, classify_exception, error_info
from .result import Err, Ok, Result
from .types import JsonDict, JsonMapping, JsonPrimitive, JsonValue

__all__ = [
    # Core errors
    "ErrorCode", "ErrorInfo", "ToolError", "ToolException", "classify_exception", "error_info",
    # Result monad
    "Result", "Ok", "Err",
    # JSON aliases
    "JsonDict", "JsonMapping", "JsonPrimitive", "JsonValue",
]
