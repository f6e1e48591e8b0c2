"""serve — start the MCP server."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from d365mcp.commands._context import AppContext


@click.command(
    epilog="""\b
Examples:
  # stdio transport (default), for desktop MCP clients
  d365mcp serve

  # Streamable HTTP on a custom host/port
  d365mcp serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport, else stdio).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: AppContext, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP server."""
    from d365mcp.mcp.server import create_server

    server = create_server(backend=app.backend, host=host, port=port)
    server.run(transport=transport or app.settings.mcp.transport)
