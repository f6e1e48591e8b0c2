"""MCP resource definitions.

URIs: d365://entities (the canonical entity-set catalog).
Each resource has a ``<name>_impl`` function testable without a server.
"""

from __future__ import annotations

from typing import Any


def entities_impl(backend: Any) -> str:
    """Newline-separated canonical entity names, sorted."""
    return "\n".join(backend.registry)


def register_resources(server: Any, backend: Any) -> None:
    """Register all MCP resources on the FastMCP server."""

    @server.resource(  # type: ignore[untyped-decorator]
        "d365://entities",
        name="entities",
        description="Canonical OData entity-set names accepted by odataQuery.",
        mime_type="text/plain",
    )
    def entities() -> str:
        return entities_impl(backend)
