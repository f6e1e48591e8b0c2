"""Azure AD client-credentials token provider.

Tokens are cached in memory and refreshed five minutes before expiry.
Concurrent callers may race to refresh; the last token fetched wins.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
import structlog

from d365mcp.errors import AuthenticationError, ConfigurationError

if TYPE_CHECKING:
    from d365mcp.config.models import DynamicsConfig

log = structlog.get_logger(__name__)

EXPIRY_BUFFER_SECONDS = 300


@dataclass(frozen=True)
class AccessToken:
    """OAuth2 access token with expiration tracking."""

    access_token: str
    token_type: str
    expires_at: float

    @property
    def is_expired(self) -> bool:
        return time.monotonic() >= self.expires_at - EXPIRY_BUFFER_SECONDS

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"


class ClientCredentialsTokenProvider:
    """Fetch bearer tokens for the OData resource with the client-credentials grant."""

    def __init__(
        self,
        config: DynamicsConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._token: AccessToken | None = None

    @property
    def token_endpoint(self) -> str:
        return f"{self._config.authority_url.rstrip('/')}/{self._config.tenant_id}/oauth2/v2.0/token"

    def _check_config(self) -> None:
        missing = [
            name
            for name, value in (
                ("resource_url", self._config.resource_url),
                ("tenant_id", self._config.tenant_id),
                ("client_id", self._config.client_id),
                ("client_secret", self._config.client_secret.get_secret_value()),
            )
            if not value
        ]
        if missing:
            msg = f"Missing Dynamics configuration: {', '.join(missing)}"
            raise ConfigurationError(msg)

    async def authorization_header(self) -> str:
        """Return a valid ``Authorization`` header value, fetching a token if needed.

        Raises:
            ConfigurationError: Connection settings are incomplete.
            AuthenticationError: The token endpoint refused the request.
        """
        if self._token is None or self._token.is_expired:
            self._token = await self._fetch_token()
        return self._token.authorization_header

    async def _fetch_token(self) -> AccessToken:
        self._check_config()
        form = {
            "grant_type": "client_credentials",
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret.get_secret_value(),
            "scope": self._config.scope,
        }
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._config.timeout_seconds
            ) as client:
                response = await client.post(self.token_endpoint, data=form)
        except httpx.HTTPError as exc:
            msg = f"Token request failed: {exc}"
            raise AuthenticationError(msg) from exc

        if response.status_code >= 400:
            msg = f"Token request failed with status {response.status_code}: {response.text}"
            raise AuthenticationError(msg, response.status_code)

        try:
            payload = response.json()
            access_token = payload["access_token"]
        except (ValueError, KeyError) as exc:
            msg = "Token endpoint returned no access_token"
            raise AuthenticationError(msg, response.status_code) from exc

        expires_in = int(payload.get("expires_in", 3600))
        log.debug("token.acquired", expires_in=expires_in)
        return AccessToken(
            access_token=access_token,
            token_type=payload.get("token_type", "Bearer"),
            expires_at=time.monotonic() + expires_in,
        )
