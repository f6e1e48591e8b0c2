"""Gateway — executes one HTTP request against the OData backend.

``call(method, url, body, notifier)`` always returns a
:class:`~d365mcp.domain.result.GatewayResult`; transport, HTTP, and
credential failures become ``is_error`` results, as does any non-2xx
status (redirects are not followed). There is no retry policy here:
one call, one request.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog

from d365mcp.domain.result import GatewayResult
from d365mcp.errors import D365Error
from d365mcp.infrastructure.auth import ClientCredentialsTokenProvider

if TYPE_CHECKING:
    from d365mcp.config.models import DynamicsConfig

log = structlog.get_logger(__name__)


class Notifier(Protocol):
    async def notify(self, message: str, level: str = "info") -> None: ...


class TokenProvider(Protocol):
    async def authorization_header(self) -> str: ...


class Gateway(Protocol):
    async def call(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None = None,
        notifier: Notifier | None = None,
    ) -> GatewayResult: ...


def _render_body(response: httpx.Response) -> str:
    """Pretty-print JSON bodies, pass text through, describe empty bodies."""
    if response.status_code == 204 or not response.content:
        return f"Operation completed successfully (status {response.status_code})."
    if "json" in response.headers.get("content-type", ""):
        try:
            return json.dumps(response.json(), indent=2, ensure_ascii=False)
        except ValueError:
            pass
    return response.text


class HttpGateway:
    """httpx-backed gateway with bearer-token authentication."""

    def __init__(
        self,
        config: DynamicsConfig,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._tokens = token_provider or ClientCredentialsTokenProvider(
            config, transport=transport
        )

    async def _headers(self) -> dict[str, str]:
        return {
            "Authorization": await self._tokens.authorization_header(),
            "Accept": "application/json",
            "OData-Version": "4.0",
            "OData-MaxVersion": "4.0",
        }

    async def call(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None = None,
        notifier: Notifier | None = None,
    ) -> GatewayResult:
        if notifier is not None:
            await notifier.notify(f"Sending {method} request to {url}")
        log.debug("gateway.request", method=method, url=url)

        try:
            headers = await self._headers()
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._config.timeout_seconds
            ) as client:
                response = await client.request(method, url, json=body, headers=headers)
        except (D365Error, httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("gateway.failed", method=method, url=url, error=str(exc))
            return GatewayResult.error(f"Request to {url} failed: {exc}")

        if notifier is not None:
            await notifier.notify(
                f"{method} request completed with status {response.status_code}.",
                "info" if response.is_success else "error",
            )
        log.debug("gateway.response", method=method, url=url, status=response.status_code)

        if not response.is_success:
            return GatewayResult.error(
                f"API request failed with status {response.status_code}: {response.text}"
            )
        return GatewayResult.ok(_render_body(response))
