"""Tests for MCP resources."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from d365mcp.domain.registry import EntityRegistry
from d365mcp.infrastructure.backend import Backend
from d365mcp.mcp.resources import entities_impl, register_resources
from tests.conftest import FakeGateway


class TestEntitiesResource:
    def test_lists_sorted_names(self, backend: Backend) -> None:
        lines = entities_impl(backend).splitlines()
        assert lines == sorted(lines)
        assert "CustomersV3" in lines
        assert len(lines) == len(backend.registry)

    def test_custom_registry(self, settings: Any) -> None:
        registry = EntityRegistry.from_names(["Zeta", "Alpha"])
        backend = Backend(settings, gateway=FakeGateway(), registry=registry)
        assert entities_impl(backend) == "Alpha\nZeta"

    def test_registration(self, backend: Backend) -> None:
        registered: dict[str, Callable[..., Any]] = {}

        class DummyServer:
            def resource(self, uri: str, **kwargs: Any) -> Callable[..., Any]:
                def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                    registered[uri] = func
                    return func

                return decorator

        register_resources(DummyServer(), backend)
        assert set(registered) == {"d365://entities"}
        assert registered["d365://entities"]() == entities_impl(backend)
