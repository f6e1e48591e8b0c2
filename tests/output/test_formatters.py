"""Tests for result formatting and rich renderers."""

from __future__ import annotations

import json

from d365mcp.domain.result import GatewayResult
from d365mcp.output.formatters import format_result
from d365mcp.output.renderers import render_entities, render_resolution


class TestFormatResult:
    def test_success_text(self) -> None:
        assert format_result(GatewayResult.ok("42")) == "42"

    def test_error_text(self) -> None:
        assert format_result(GatewayResult.error("nope")) == "ERROR: nope"

    def test_json_envelope(self) -> None:
        payload = json.loads(format_result(GatewayResult.error("nope"), json_output=True))
        assert payload == {"isError": True, "content": [{"type": "text", "text": "nope"}]}


class TestRenderers:
    def test_render_entities(self) -> None:
        output = render_entities(["CustomersV3", "VendorsV2"])
        assert "CustomersV3" in output
        assert "VendorsV2" in output
        assert output.endswith("2 entities")

    def test_render_resolution_ok(self) -> None:
        output = render_resolution("customerv3", "CustomersV3", [("CustomersV3", 0.95238)])
        assert "customerv3 -> CustomersV3" in output
        assert "0.952" in output

    def test_render_resolution_miss(self) -> None:
        output = render_resolution("xyzzy", None, [])
        assert output == "No matching entity for 'xyzzy'"
