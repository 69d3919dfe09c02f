"""MCP tools: declarative endpoints, response adapters, registry and catalog."""

from .adapters import ToolResponse, format_error, stringify, structured_response, text_response
from .catalog import ALL_ENDPOINTS, build_registry
from .endpoint import ALL_FIELDS, EmptyParams, Endpoint, ToolParams
from .registry import ToolRegistry

__all__ = [
    # Adapters
    "ToolResponse", "format_error", "stringify", "structured_response", "text_response",
    # Declarations
    "Endpoint", "ToolParams", "EmptyParams", "ALL_FIELDS",
    # Registry
    "ToolRegistry", "ALL_ENDPOINTS", "build_registry",
]
