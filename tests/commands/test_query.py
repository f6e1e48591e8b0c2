"""Tests for the query and count commands."""

from __future__ import annotations

import json

from click.testing import CliRunner

from d365mcp.cli import cli
from d365mcp.domain.result import GatewayResult
from tests.conftest import DATA_ROOT, FakeGateway


class TestQueryCommand:
    def test_query_prints_body(self, cli_runner: CliRunner, cli_gateway: FakeGateway) -> None:
        cli_gateway.responder = lambda method, url, body: GatewayResult.ok('{"value": []}')
        result = cli_runner.invoke(cli, ["query", "CustomersV3", "--select", "Name"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == '{"value": []}'
        assert cli_gateway.calls[0].url == f"{DATA_ROOT}/CustomersV3?%24top=5&%24select=Name"

    def test_filters_keep_order(self, cli_runner: CliRunner, cli_gateway: FakeGateway) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "query",
                "ReleasedProductsV2",
                "--filter",
                "ItemNumber=D0001",
                "--filter",
                "dataAreaId=usmf",
                "--no-cross-company",
            ],
        )
        assert result.exit_code == 0, result.output
        url = cli_gateway.calls[0].url
        assert "%24filter=ItemNumber+eq+%27D0001%27+and+dataAreaId+eq+%27usmf%27" in url
        assert "cross-company" not in url

    def test_bad_filter_syntax(self, cli_runner: CliRunner, cli_gateway: FakeGateway) -> None:
        result = cli_runner.invoke(cli, ["query", "CustomersV3", "--filter", "nokey"])
        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output
        assert cli_gateway.calls == []

    def test_invalid_top_rejected(self, cli_runner: CliRunner, cli_gateway: FakeGateway) -> None:
        result = cli_runner.invoke(cli, ["query", "CustomersV3", "--top", "0"])
        assert result.exit_code == 2

    def test_unknown_entity(self, cli_runner: CliRunner, cli_gateway: FakeGateway) -> None:
        result = cli_runner.invoke(cli, ["query", "xyzzy"])
        assert result.exit_code == 1
        assert "ERROR: Could not find a matching entity for 'xyzzy'" in result.stderr
        assert cli_gateway.calls == []

    def test_error_json_goes_to_stderr(
        self, cli_runner: CliRunner, cli_gateway: FakeGateway
    ) -> None:
        cli_gateway.responder = lambda method, url, body: GatewayResult.error(
            "API request failed with status 401: unauthorized"
        )
        result = cli_runner.invoke(cli, ["--json", "query", "CustomersV3"])
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["isError"] is True
        assert payload["content"][0]["text"].startswith("API request failed with status 401")

    def test_verbose_echoes_notifications(
        self, cli_runner: CliRunner, cli_gateway: FakeGateway
    ) -> None:
        result = cli_runner.invoke(cli, ["-v", "query", "customerv3"])
        assert result.exit_code == 0, result.output
        assert "[info] Corrected entity name from 'customerv3' to 'CustomersV3'." in (
            result.stderr
        )


class TestCountCommand:
    def test_count(self, cli_runner: CliRunner, cli_gateway: FakeGateway) -> None:
        cli_gateway.responder = lambda method, url, body: GatewayResult.ok("42")
        result = cli_runner.invoke(cli, ["count", "vendor", "--cross-company"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "42"
        assert cli_gateway.calls[0].url == f"{DATA_ROOT}/VendorsV2/$count?cross-company=true"
