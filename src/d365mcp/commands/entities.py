"""Command group: inspect the entity catalog and test name resolution."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from d365mcp.output.renderers import render_entities, render_resolution

if TYPE_CHECKING:
    from d365mcp.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  d365mcp entities list
  d365mcp entities resolve customerv3
  d365mcp --json entities resolve 'sales order lines'""",
)
def entities() -> None:
    """List canonical entity sets and resolve fuzzy names."""


@entities.command(name="list")
@click.pass_obj
def list_entities(app: AppContext) -> None:
    """List every canonical entity-set name in the catalog."""
    names = list(app.backend.registry)
    if app.settings.json_output:
        click.echo(json.dumps({"count": len(names), "entities": names}, indent=2))
        return
    click.echo(render_entities(names))


@entities.command()
@click.argument("name")
@click.option("--limit", default=5, type=click.IntRange(min=1), help="Max candidates to show.")
@click.pass_obj
def resolve(app: AppContext, name: str, limit: int) -> None:
    """Show how NAME resolves and the closest candidates."""
    matcher = app.backend.matcher
    resolved = matcher.resolve(name)
    candidates = matcher.candidates(name, limit=limit)
    if app.settings.json_output:
        payload = {
            "input": name,
            "resolved": resolved,
            "threshold": matcher.threshold,
            "candidates": [{"name": n, "score": round(s, 4)} for n, s in candidates],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(render_resolution(name, resolved, candidates))
    if resolved is None:
        raise SystemExit(1)
