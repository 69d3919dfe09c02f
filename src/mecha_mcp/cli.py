"""Command line entry point: ``mecha-mcp serve`` and ``mecha-mcp tools``."""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError

from mecha_mcp.foundation.config import get_settings
from mecha_mcp.runtime.observability import configure_logging

app = typer.Typer(add_completion=False, help="MCP server for the Mecha Agent platform")


def _missing_settings(exc: ValidationError) -> str:
    fields = ", ".join(
        "MECHA_AGENT_" + "_".join(str(p) for p in err["loc"]).upper() for err in exc.errors(include_url=False)
    )
    return f"[error] Invalid or missing configuration: {fields}"


@app.command()
def serve(transport: Optional[str] = typer.Option(None, "--transport", "-t",
                                                  help="stdio, sse or streamable-http (default from settings)"),
          host: Optional[str] = typer.Option(None, "--host", help="Host for HTTP transports"),
          port: Optional[int] = typer.Option(None, "--port", help="Port for HTTP transports")):
    """Run the MCP server."""
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(_missing_settings(e), err=True)
        typer.echo("Set MECHA_AGENT_SERVER_URL and MECHA_AGENT_API_KEY (environment or .env)", err=True)
        raise typer.Exit(code=1)

    if transport is not None and transport not in ("stdio", "sse", "streamable-http"):
        typer.echo(f"[error] Unknown transport: {transport}", err=True)
        raise typer.Exit(code=2)

    configure_logging(settings.logging.format, settings.logging.level)

    from mecha_mcp.ext.mcp import serve_mcp
    try:
        serve_mcp(settings, transport=transport, host=host, port=port)  # type: ignore[arg-type]
    except KeyboardInterrupt:
        pass


@app.command()
def tools(category: Optional[str] = typer.Option(None, "--category", "-c", help="Only list one category")):
    """List the tools the server exposes."""
    from mecha_mcp.tools import build_registry

    registry = build_registry()
    endpoints = registry.list_by_category(category) if category else list(registry)
    for e in endpoints:
        typer.echo(f"{e.name:<28} {e.method:<6} /api/{e.path:<32} {e.description}")


def main():
    app()


if __name__ == "__main__":
    main()
