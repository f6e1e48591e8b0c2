"""FastMCP server setup.

Transport: stdio default, sse and streamable HTTP optional.
Logs go to stderr; stdout belongs to the stdio transport.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

if TYPE_CHECKING:
    from d365mcp.config.settings import D365Settings
    from d365mcp.infrastructure.backend import Backend

__all__ = ["SERVER_NAME", "create_server"]

SERVER_NAME = "d365-fno-mcp-server"


def create_server(
    settings: D365Settings | None = None,
    *,
    backend: Backend | None = None,
    host: str | None = None,
    port: int | None = None,
) -> FastMCP:
    """Create and configure the MCP server.

    Builds a :class:`Backend` from *settings* (or discovered settings) unless
    one is given, and registers all tools and resources.

    *host* and *port* configure the bind address for HTTP transports
    (sse, streamable-http); they default to the ``[mcp]`` config section
    and are ignored for stdio.
    """
    from d365mcp.config.settings import D365Settings
    from d365mcp.infrastructure.backend import Backend
    from d365mcp.mcp.resources import register_resources
    from d365mcp.mcp.tools import register_tools

    if backend is None:
        backend = Backend(settings or D365Settings.from_cli())
    mcp_config = backend.settings.mcp

    server = FastMCP(
        SERVER_NAME,
        host=host or mcp_config.host,
        port=port or mcp_config.port,
    )

    register_tools(server, backend)
    register_resources(server, backend)

    return server
