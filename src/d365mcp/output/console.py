"""Rich console used by the renderers.

Renderers never print directly: they build rich renderables and turn
them into a string with :func:`render_text`, which the command layer
echoes. Color codes are emitted only when stdout is a terminal.
"""

from __future__ import annotations

import sys

from rich.console import Console, RenderableType
from rich.theme import Theme

D365_THEME = Theme(
    {
        "d365.ok": "bold green",
        "d365.error": "bold red",
        "d365.entity": "bold cyan",
        "d365.score": "magenta",
        "d365.dim": "dim",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, width: int = DEFAULT_WIDTH) -> Console:
    return Console(
        theme=D365_THEME,
        width=width,
        highlight=False,
        force_terminal=sys.stdout.isatty(),
    )


def render_text(*renderables: RenderableType, width: int = DEFAULT_WIDTH) -> str:
    """Render *renderables* one per line and return the captured text."""
    console = create_console(width=width)
    with console.capture() as capture:
        for renderable in renderables:
            console.print(renderable)
    return capture.get().rstrip("\n")
