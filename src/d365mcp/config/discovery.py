"""Locate and read ``d365mcp.toml``.

Lookup order: the ``D365MCP_CONFIG`` variable (authoritative, even when it
names a missing file), then the start directory and each of its parents.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path

from d365mcp.config.models import D365Config
from d365mcp.errors import ConfigurationError

CONFIG_FILENAME = "d365mcp.toml"
CONFIG_ENV_VAR = "D365MCP_CONFIG"


def _search_path(start: Path | None) -> Iterator[Path]:
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file that applies to *start* (default: cwd), if any."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((p for p in _search_path(start) if p.is_file()), None)


def read_toml(path: Path) -> dict[str, object]:
    """Parse *path*, reporting syntax errors as :class:`ConfigurationError`."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> D365Config:
    """Validated file configuration; code defaults when no file applies."""
    path = path or find_config(cwd)
    if path is None:
        return D365Config()
    return D365Config.model_validate(read_toml(path))
