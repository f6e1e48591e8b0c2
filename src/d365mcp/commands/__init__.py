"""Subcommand modules for d365mcp.

Provides register_commands() which uses deferred imports to keep
``d365mcp --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    1 group (entities) + 3 standalone commands (serve, query, count).
    """
    # --- Groups ---
    from d365mcp.commands.entities import entities

    cli.add_command(entities)

    # --- Standalone commands ---
    from d365mcp.commands.query import count, query
    from d365mcp.commands.serve import serve

    cli.add_command(serve)
    cli.add_command(query)
    cli.add_command(count)
