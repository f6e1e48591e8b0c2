"""BaseService — foundation for all d365mcp services.

Every service receives a :class:`Backend` and a :class:`NotificationRelay`
at construction time. The relay is per invocation (it wraps the calling
client's notification channel); the backend is shared.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from d365mcp.services.notify import NotificationRelay

if TYPE_CHECKING:
    from d365mcp.domain.result import GatewayResult
    from d365mcp.infrastructure.backend import Backend

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RecordService(BaseService):
            async def create_customer(self, data: dict[str, Any]) -> GatewayResult:
                return await self._call("POST", "CustomersV3", data)
    """

    def __init__(self, backend: Backend, relay: NotificationRelay | None = None) -> None:
        self._backend = backend
        self._relay = relay or NotificationRelay()

    async def _call(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> GatewayResult:
        """Issue one gateway call against ``<resource_url>/data/<path>``."""
        return await self._call_url(method, self._backend.data_url(path), body)

    async def _call_url(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None = None,
    ) -> GatewayResult:
        logger.debug("%s %s", method, url)
        return await self._backend.gateway.call(method, url, body, self._relay)
