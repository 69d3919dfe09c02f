"""MCP server exposing the Mecha Agent tool catalog.

``ToolServer`` owns the protocol-independent part of a call: resolve the
tool, validate its arguments, run the backend call and adapt the Result.
``MCPServer`` puts a FastMCP instance in front of it; every registry entry
becomes one ``EndpointTool`` carrying the endpoint's input and output
schemas.

Failures never escape ``invoke``: unknown tools and invalid arguments come
back as rendered ``ToolError`` text, backend failures as adapted error
responses. Both reach the client with ``isError`` set, structured tools
keeping their ``{key: null, "error": ...}`` payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from fastmcp import FastMCP
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import CallToolResult, TextContent, ToolAnnotations
from pydantic import PrivateAttr, ValidationError

from mecha_mcp.foundation.config import MechaSettings, get_settings
from mecha_mcp.foundation.errors import ErrorCode, ToolError, ToolException
from mecha_mcp.io.http import ApiClient
from mecha_mcp.runtime.observability import get_logger, log_context
from mecha_mcp.tools import Endpoint, ToolRegistry, ToolResponse, build_registry

if TYPE_CHECKING:
    import httpx

Transport = Literal["stdio", "sse", "streamable-http"]

_log = get_logger("mecha.server")


# ═══════════════════════════════════════════════════════════════════════════════
# Protocol-independent server
# ═══════════════════════════════════════════════════════════════════════════════


class ToolServer:
    """Resolves and runs registry tools against one ``ApiClient``."""

    __slots__ = ("_name", "_registry", "_client")

    def __init__(self, name: str, registry: ToolRegistry, client: ApiClient) -> None:
        self._name = name
        self._registry = registry
        self._client = client

    @property
    def name(self) -> str:
        return self._name

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def client(self) -> ApiClient:
        return self._client

    def list_tools(self) -> list[dict[str, object]]:
        """All tools with their schemas, in registration order."""
        return [
            {
                "name": e.name,
                "title": e.title,
                "description": e.description,
                "category": e.category,
                "inputSchema": e.input_schema(),
                "outputSchema": e.output_schema(),
            }
            for e in self._registry
        ]

    async def invoke(self, tool_name: str, params: dict[str, Any] | None) -> ToolResponse:
        """Invoke a tool by name. Returns an error response instead of raising."""
        endpoint = self._registry.get(tool_name)
        if endpoint is None:
            return _rejected(ToolError.create(
                tool_name, f"Tool '{tool_name}' not found", ErrorCode.NOT_FOUND, recoverable=False,
            ))

        try:
            validated = endpoint.validate_params(params or {})
        except ValidationError as e:
            return _rejected(ToolError.create(
                tool_name, f"Invalid parameters: {_validation_summary(e)}", ErrorCode.INVALID_PARAMS,
            ))

        with log_context(tool=tool_name):
            try:
                response = await endpoint.call(self._client, validated)
            except ToolException as e:
                return _rejected(e.error)
            except Exception as e:
                _log.exception("tool crashed")
                return _rejected(ToolError.from_exception(tool_name, e, "Execution failed"))
            _log.info("tool finished", is_error=response.is_error)
        return response


def _rejected(error: ToolError) -> ToolResponse:
    _log.warning("tool rejected", tool=error.tool_name, code=error.code.value, error=error.message)
    return ToolResponse.error(error.render())


def _validation_summary(exc: ValidationError) -> str:
    """``agentId: Field required; title: ...`` from a pydantic error."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
        for err in exc.errors(include_url=False)
    )


# ═══════════════════════════════════════════════════════════════════════════════
# FastMCP Adapter
# ═══════════════════════════════════════════════════════════════════════════════


class EndpointTool(Tool):
    """FastMCP tool delegating every call to ``ToolServer.invoke``.

    Arguments reach ``invoke`` untouched, so validation and error wording
    are the same whichever front end is used.
    """

    _server: ToolServer = PrivateAttr()

    @classmethod
    def from_endpoint(cls, endpoint: Endpoint, server: ToolServer) -> EndpointTool:
        tool = cls(
            name=endpoint.name,
            title=endpoint.title,
            description=endpoint.description,
            tags={endpoint.category},
            parameters=endpoint.input_schema(),
            output_schema=endpoint.output_schema(),
            annotations=ToolAnnotations(
                title=endpoint.title,
                readOnlyHint=endpoint.method == "GET",
                destructiveHint=endpoint.method == "DELETE",
                openWorldHint=True,
            ),
        )
        tool._server = server
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return EndpointResult(await self._server.invoke(self.name, arguments))


class EndpointResult(ToolResult):
    """ToolResult sent to the client exactly as the adapter built it.

    Error responses keep their structured payload next to ``isError``
    instead of being collapsed into a text-only protocol error.
    """

    def __init__(self, response: ToolResponse) -> None:
        super().__init__(
            content=[TextContent(type="text", text=t) for t in response.content],
            structured_content=response.structured_content,
        )
        self.response = response

    @property
    def is_error(self) -> bool:
        return self.response.is_error

    def to_mcp_result(self) -> CallToolResult:
        return self.response.to_call_tool_result()


class MCPServer(ToolServer):
    """FastMCP-backed server for MCP clients.

    Example:
        >>> server = MCPServer("mecha_agent_mcp_server", build_registry(), ApiClient.from_settings())
        >>> server.run(transport="stdio")
    """

    __slots__ = ("_mcp",)

    def __init__(self, name: str, registry: ToolRegistry, client: ApiClient) -> None:
        super().__init__(name, registry, client)
        self._mcp = FastMCP(name)
        for endpoint in registry:
            self._mcp.add_tool(EndpointTool.from_endpoint(endpoint, self))

    @property
    def fastmcp(self) -> FastMCP:
        """Access underlying FastMCP instance."""
        return self._mcp

    def run(
        self,
        transport: Transport = "stdio",
        *,
        host: str = "127.0.0.1",
        port: int = 8080,
    ) -> None:
        """Start the server (blocking).

        Args:
            transport: "stdio" (spawned by the client), "sse", "streamable-http"
            host: Host for HTTP transports
            port: Port for HTTP transports
        """
        _log.info("server starting", server=self._name, transport=transport, tools=len(self._registry))
        if transport == "stdio":
            self._mcp.run(transport="stdio", show_banner=False)
        else:
            self._mcp.run(transport=transport, host=host, port=port, show_banner=False)


# ═══════════════════════════════════════════════════════════════════════════════
# Convenience Functions
# ═══════════════════════════════════════════════════════════════════════════════


def create_mcp_server(
    settings: MechaSettings | None = None,
    *,
    registry: ToolRegistry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MCPServer:
    """Build the server from settings and the full catalog.

    Raises:
        pydantic.ValidationError: when required settings are missing.
    """
    settings = settings or get_settings()
    client = ApiClient.from_settings(settings, transport=transport)
    return MCPServer(settings.server.name, registry or build_registry(), client)


def serve_mcp(
    settings: MechaSettings | None = None,
    *,
    transport: Transport | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Create and run the server; unset arguments fall back to settings."""
    settings = settings or get_settings()
    server = create_mcp_server(settings)
    server.run(
        transport or settings.server.transport,
        host=host or settings.server.host,
        port=port or settings.server.port,
    )
