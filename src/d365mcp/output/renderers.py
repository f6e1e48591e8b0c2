"""Rich renderers for entity-catalog commands."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import RenderableType
from rich.table import Table
from rich.text import Text

from d365mcp.output.console import render_text


def _table(*columns: tuple[str, str, str]) -> Table:
    table = Table(show_header=True, header_style="bold", box=None)
    for header, style, justify in columns:
        table.add_column(header, style=style, justify=justify)  # type: ignore[arg-type]
    return table


def render_entities(names: Iterable[str]) -> str:
    """One entity name per row, with a total footer."""
    table = _table(("Entity", "d365.entity", "left"))
    for name in names:
        table.add_row(name)
    return render_text(table, Text(f"{table.row_count} entities", style="d365.dim"))


def render_resolution(
    raw: str,
    resolved: str | None,
    candidates: list[tuple[str, float]],
) -> str:
    """Resolution verdict followed by the ranked candidates above threshold."""
    parts: list[RenderableType] = []
    if resolved is None:
        parts.append(Text(f"No matching entity for '{raw}'", style="d365.error"))
    else:
        parts.append(Text.assemble(("OK", "d365.ok"), (f"  {raw} -> {resolved}", "d365.entity")))
    if candidates:
        table = _table(("Candidate", "d365.entity", "left"), ("Score", "d365.score", "right"))
        for name, score in candidates:
            table.add_row(name, f"{score:.3f}")
        parts.append(table)
    return render_text(*parts)
