"""``d365mcp`` command line entry point."""

from __future__ import annotations

import click

from d365mcp import __version__
from d365mcp.commands import register_commands
from d365mcp.commands._context import AppContext
from d365mcp.config.settings import D365Settings
from d365mcp.errors import ConfigurationError

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(__version__, prog_name="d365mcp")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON envelopes.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and progress notifications on stderr.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of the discovered d365mcp.toml.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Dynamics 365 Finance & Operations OData tools, served over MCP."""
    try:
        settings = D365Settings.from_cli(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
