"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Backend construction, a notification
relay that prints progress to stderr, and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any, TypeVar

import click

from d365mcp.errors import D365Error
from d365mcp.output.formatters import format_result
from d365mcp.services.notify import NotificationRelay

if TYPE_CHECKING:
    from d365mcp.config.settings import D365Settings
    from d365mcp.domain.result import GatewayResult
    from d365mcp.infrastructure.backend import Backend

_T = TypeVar("_T")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The backend is built on first use so ``--help`` and ``--version``
    never touch configuration beyond flag parsing.
    """

    def __init__(self, settings: D365Settings) -> None:
        self.settings = settings
        self._backend: Backend | None = None

        from d365mcp.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def backend(self) -> Backend:
        """The backend instance (created lazily on first access)."""
        if self._backend is None:
            from d365mcp.infrastructure.backend import Backend

            self._backend = Backend(self.settings)
        return self._backend

    def relay(self) -> NotificationRelay:
        """Relay echoing notifications to stderr in verbose mode."""
        if not self.settings.verbose:
            return NotificationRelay()

        async def send(level: str, message: str) -> None:
            click.echo(f"[{level}] {message}", err=True)

        return NotificationRelay(send)

    def run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Drive an async service call to completion.

        Missing configuration surfaces as a usage error instead of a traceback.
        """
        try:
            return asyncio.run(coro)
        except D365Error as exc:
            raise click.ClickException(str(exc)) from exc

    def emit(self, result: GatewayResult) -> None:
        """Format and output a result with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Error: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if not result.is_error:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
