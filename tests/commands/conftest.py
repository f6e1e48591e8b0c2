"""Fixtures for CLI command tests: a configured backend with a fake gateway."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import patch

import pytest

from tests.conftest import RESOURCE_URL, FakeGateway


@pytest.fixture
def cli_gateway(monkeypatch: pytest.MonkeyPatch) -> Generator[FakeGateway]:
    """Route every backend the CLI builds to a FakeGateway."""
    monkeypatch.setenv("D365MCP_DYNAMICS__RESOURCE_URL", RESOURCE_URL)
    gateway = FakeGateway()
    with patch("d365mcp.infrastructure.backend.HttpGateway", return_value=gateway):
        yield gateway
