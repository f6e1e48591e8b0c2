"""Standalone commands: run an entity query or count from the shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from d365mcp.domain.query import QueryRequest
from d365mcp.services.query import QueryService

if TYPE_CHECKING:
    from d365mcp.commands._context import AppContext


def _parse_filters(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """``KEY=VALUE`` pairs into an ordered dict; later keys overwrite earlier ones."""
    filters: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            msg = f"expected KEY=VALUE, got {item!r}"
            raise click.BadParameter(msg)
        filters[key.strip()] = value
    return filters


@click.command(
    epilog="""\b
Examples:
  d365mcp query CustomersV3 --select CustomerAccount,Name
  d365mcp query releasedproducts --filter ItemNumber=D0001 --filter dataAreaId=usmf
  d365mcp query SalesOrderHeadersV4 --top 10 --skip 20 --no-cross-company""",
)
@click.argument("entity")
@click.option("--select", default=None, help="$select field list.")
@click.option(
    "--filter",
    "filters",
    multiple=True,
    callback=_parse_filters,
    help="Equality filter KEY=VALUE (repeatable, order preserved).",
)
@click.option("--expand", default=None, help="$expand navigation properties.")
@click.option("--top", type=click.IntRange(min=1), default=None, help="Page size.")
@click.option("--skip", type=click.IntRange(min=0), default=None, help="Records to skip.")
@click.option(
    "--cross-company/--no-cross-company",
    "cross_company",
    default=None,
    help="Query across all companies (auto-enabled by a dataAreaId filter).",
)
@click.pass_obj
def query(
    app: AppContext,
    entity: str,
    select: str | None,
    filters: dict[str, str],
    expand: str | None,
    top: int | None,
    skip: int | None,
    cross_company: bool | None,
) -> None:
    """Query ENTITY (fuzzy-matched) and print the page of records."""
    request = QueryRequest(
        entity=entity,
        select=select,
        filter=filters,
        expand=expand,
        top=top,
        skip=skip,
        cross_company=cross_company,
    )
    svc = QueryService(app.backend, app.relay())
    app.emit(app.run(svc.query(request)))


@click.command(
    epilog="""\b
Examples:
  d365mcp count CustomersV3
  d365mcp count vendors --cross-company""",
)
@click.argument("entity")
@click.option("--cross-company", is_flag=True, help="Count across all companies.")
@click.pass_obj
def count(app: AppContext, entity: str, cross_company: bool) -> None:
    """Print the total number of ENTITY records."""
    svc = QueryService(app.backend, app.relay())
    app.emit(app.run(svc.count(entity, cross_company=cross_company)))
