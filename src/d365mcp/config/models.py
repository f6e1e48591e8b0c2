"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, d365mcp.toml only contains overrides.
A working setup needs only the [dynamics] connection values.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

# --- d365mcp.toml sections ---


class DynamicsConfig(BaseModel):
    """[dynamics] section — backend connection and credentials."""

    model_config = {"frozen": True}

    resource_url: str = ""
    tenant_id: str = ""
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    authority_url: str = "https://login.microsoftonline.com"
    timeout_seconds: float = 30.0

    @property
    def scope(self) -> str:
        """OAuth2 scope for the client-credentials grant."""
        return f"{self.resource_url.rstrip('/')}/.default"


class QueryConfig(BaseModel):
    """[query] section."""

    model_config = {"frozen": True}

    default_page_size: int = Field(default=5, gt=0)
    company_field: str = "dataAreaId"


class EntitiesConfig(BaseModel):
    """[entities] section."""

    model_config = {"frozen": True}

    match_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    extra: list[str] = Field(default_factory=list)


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


class D365Config(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    dynamics: DynamicsConfig = Field(default_factory=DynamicsConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    entities: EntitiesConfig = Field(default_factory=EntitiesConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)
