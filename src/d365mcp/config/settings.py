"""D365Settings — one frozen object merging every configuration layer.

Highest priority first:

1. keyword arguments (CLI flags, test overrides)
2. ``D365MCP_*`` environment variables; nested fields use ``__``
   (``D365MCP_DYNAMICS__CLIENT_SECRET``)
3. the ``d365mcp.toml`` file picked by :func:`~d365mcp.config.discovery.find_config`
4. defaults on the section models

Sections merge field by field, so an env var can override one
``[dynamics]`` key while the rest still come from the file.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from d365mcp.config.discovery import find_config, read_toml
from d365mcp.config.models import DynamicsConfig, EntitiesConfig, McpConfig, QueryConfig

# File chosen by from_cli(), visible to the source while the model is built.
_active_file: ContextVar[Path | None] = ContextVar("d365mcp_config_file", default=None)


class TomlFileSource(PydanticBaseSettingsSource):
    """Settings source backed by a single TOML file (or nothing)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class D365Settings(BaseSettings):
    """Settings shared by the CLI and the MCP server.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="D365MCP_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    dynamics: DynamicsConfig = Field(default_factory=DynamicsConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    entities: EntitiesConfig = Field(default_factory=EntitiesConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlFileSource(settings_cls, _active_file.get()))

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> D365Settings:
        """Build settings for one invocation.

        An explicit *config_path* wins over discovery; a path that does not
        exist means "no file". Discovery walks up from *start* (cwd by
        default). Remaining keyword arguments override every other layer.

        Raises:
            ConfigurationError: The chosen file is not valid TOML.
        """
        if config_path:
            path: Path | None = Path(config_path)
            if not path.is_file():
                path = None
        else:
            path = find_config(start)

        token = _active_file.set(path)
        try:
            return cls(config_path=path, **overrides)
        finally:
            _active_file.reset(token)
