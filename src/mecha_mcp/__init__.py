"""mecha-mcp: MCP server exposing the Mecha Agent platform API as tools.

Quick Start:
    >>> from mecha_mcp import ApiClient, build_registry
    >>> client = ApiClient("https://mecha.example.com", "mak_...")
    >>> result = await client.get("agents")
    >>> result.unwrap_or([])

Serving:
    $ export MECHA_AGENT_SERVER_URL=https://mecha.example.com
    $ export MECHA_AGENT_API_KEY=mak_...
    $ mecha-mcp serve
"""

__version__ = "0.1.0"

from .foundation.config import MechaSettings, clear_settings_cache, get_settings
from .foundation.errors import Err, ErrorCode, ErrorInfo, Ok, Result, ToolError, ToolException
from .io.http import ApiClient, FetchResult, FormData
from .runtime.observability import configure_logging, get_logger, log_context
from .tools import Endpoint, ToolRegistry, ToolResponse, build_registry, structured_response, text_response

__all__ = [
    "__version__",
    # Config
    "MechaSettings", "get_settings", "clear_settings_cache",
    # Errors
    "Result", "Ok", "Err", "ErrorCode", "ErrorInfo", "ToolError", "ToolException",
    # Transport
    "ApiClient", "FetchResult", "FormData",
    # Tools
    "Endpoint", "ToolRegistry", "ToolResponse", "build_registry", "structured_response", "text_response",
    # Observability
    "configure_logging", "get_logger", "log_context",
]
