"""Shared pytest fixtures and test doubles for d365mcp tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from d365mcp.config.models import DynamicsConfig
from d365mcp.config.settings import D365Settings
from d365mcp.domain.result import GatewayResult
from d365mcp.infrastructure.backend import Backend
from d365mcp.services.notify import NotificationRelay

RESOURCE_URL = "https://contoso.operations.dynamics.com"
DATA_ROOT = f"{RESOURCE_URL}/data"

Responder = Callable[[str, str, "dict[str, Any] | None"], GatewayResult]


@dataclass
class GatewayCall:
    method: str
    url: str
    body: dict[str, Any] | None


class FakeGateway:
    """Records every call; answers through ``responder`` (default: ``{}`` success)."""

    def __init__(self) -> None:
        self.calls: list[GatewayCall] = []
        self.responder: Responder = lambda method, url, body: GatewayResult.ok("{}")

    async def call(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None = None,
        notifier: Any = None,
    ) -> GatewayResult:
        self.calls.append(GatewayCall(method, url, body))
        return self.responder(method, url, body)


class RecordingRelay(NotificationRelay):
    """Relay that keeps ``(level, message)`` pairs in delivery order."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

        async def send(level: str, message: str) -> None:
            self.messages.append((level, message))

        super().__init__(send)

    @property
    def texts(self) -> list[str]:
        return [message for _, message in self.messages]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real config files and D365MCP_* variables out of tests."""
    monkeypatch.setenv("D365MCP_CONFIG", str(tmp_path / "absent.toml"))
    for name in (
        "D365MCP_DYNAMICS__RESOURCE_URL",
        "D365MCP_VERBOSE",
        "D365MCP_JSON_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def dynamics_config() -> DynamicsConfig:
    return DynamicsConfig(
        resource_url=RESOURCE_URL,
        tenant_id="tenant-id",
        client_id="client-id",
        client_secret="client-secret",
    )


@pytest.fixture
def settings(dynamics_config: DynamicsConfig) -> D365Settings:
    return D365Settings.from_cli(dynamics=dynamics_config)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def backend(settings: D365Settings, fake_gateway: FakeGateway) -> Backend:
    return Backend(settings, gateway=fake_gateway)


@pytest.fixture
def relay() -> RecordingRelay:
    return RecordingRelay()
