"""MCP server over FastMCP.

Example:
    >>> from mecha_mcp.ext.mcp import serve_mcp
    >>> serve_mcp(transport="stdio")
"""

from .server import EndpointResult, EndpointTool, MCPServer, ToolServer, Transport, create_mcp_server, serve_mcp

__all__ = ["EndpointResult", "EndpointTool", "MCPServer", "ToolServer", "Transport", "create_mcp_server", "serve_mcp"]
