"""Backend — the single dependency injected into every service.

Bundles the settings, the entity registry and matcher, and the gateway.
Constructed once per process (CLI invocation or MCP server) and shared
read-only between concurrent tool calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from d365mcp.domain.matcher import EntityMatcher
from d365mcp.domain.registry import EntityRegistry
from d365mcp.errors import ConfigurationError
from d365mcp.infrastructure.gateway import Gateway, HttpGateway

if TYPE_CHECKING:
    from d365mcp.config.settings import D365Settings


class Backend:
    """Settings, registry, matcher, and gateway for one backend instance."""

    def __init__(
        self,
        settings: D365Settings,
        *,
        gateway: Gateway | None = None,
        registry: EntityRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry or EntityRegistry.default(extra=settings.entities.extra)
        self.matcher = EntityMatcher(self.registry, threshold=settings.entities.match_threshold)
        self.gateway: Gateway = gateway or HttpGateway(settings.dynamics)

    @property
    def data_root(self) -> str:
        """``<resource_url>/data`` without a trailing slash."""
        resource_url = self.settings.dynamics.resource_url.rstrip("/")
        if not resource_url:
            msg = "Dynamics resource URL is not configured (D365MCP_DYNAMICS__RESOURCE_URL)"
            raise ConfigurationError(msg)
        return f"{resource_url}/data"

    def data_url(self, path: str) -> str:
        return f"{self.data_root}/{path}"
