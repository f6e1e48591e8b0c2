"""QueryRequest compilation into OData query parameters.

Compilation is infallible: malformed values pass through untouched.
Parameter order is fixed (``$top``, ``$skip``, ``cross-company``,
``$select``, ``$filter``, ``$expand``) and ``$filter`` clauses follow the
insertion order of the filter mapping, so an identical request always
yields byte-identical parameters.

Filter values are single-quoted but NOT escaped; a value containing a
quote produces an invalid filter that the backend rejects.
"""

from __future__ import annotations

from urllib.parse import urlencode

from pydantic import BaseModel, Field

DEFAULT_COMPANY_FIELD = "dataAreaId"


class QueryRequest(BaseModel):
    """Structured read request against one entity set."""

    model_config = {"frozen": True}

    entity: str
    select: str | None = None
    filter: dict[str, str] = Field(default_factory=dict)
    expand: str | None = None
    top: int | None = None
    skip: int | None = None
    cross_company: bool | None = None


class CompiledQuery(BaseModel):
    """Resource path plus ordered query parameters."""

    model_config = {"frozen": True}

    path: str
    params: tuple[tuple[str, str], ...] = ()
    cross_company_escalated: bool = False

    @property
    def cross_company(self) -> bool:
        return ("cross-company", "true") in self.params

    def param(self, name: str) -> str | None:
        """Value of the first parameter called *name*, if emitted."""
        for key, value in self.params:
            if key == name:
                return value
        return None

    def url(self, base_url: str) -> str:
        """Render ``<base_url>/<path>?<params>`` with form-style encoding."""
        url = f"{base_url.rstrip('/')}/{self.path}"
        if not self.params:
            return url
        return f"{url}?{urlencode(self.params)}"


def build_filter(filter_map: dict[str, str] | None) -> str | None:
    """Join ``key eq 'value'`` clauses with `` and ``; None for an empty map."""
    if not filter_map:
        return None
    return " and ".join(f"{key} eq '{value}'" for key, value in filter_map.items())


def compile_query(
    request: QueryRequest,
    default_page_size: int,
    *,
    entity: str | None = None,
    company_field: str = DEFAULT_COMPANY_FIELD,
) -> CompiledQuery:
    """Compile *request* into a :class:`CompiledQuery`.

    Args:
        request: The structured query.
        default_page_size: ``$top`` used when the request has no valid ``top``.
        entity: Resolved canonical entity name; defaults to ``request.entity``.
        company_field: Filter key that scopes a query to one company. A
            non-empty value for it turns on cross-company mode unless the
            caller explicitly set ``cross_company=False``.
    """
    params: list[tuple[str, str]] = []

    top = request.top if isinstance(request.top, int) and request.top > 0 else default_page_size
    params.append(("$top", str(top)))

    if isinstance(request.skip, int) and request.skip > 0:
        params.append(("$skip", str(request.skip)))

    cross_company = bool(request.cross_company)
    escalated = False
    if request.filter.get(company_field) and request.cross_company is not False:
        escalated = not cross_company
        cross_company = True
    if cross_company:
        params.append(("cross-company", "true"))

    if request.select:
        params.append(("$select", request.select))

    filter_string = build_filter(request.filter)
    if filter_string:
        params.append(("$filter", filter_string))

    if request.expand:
        params.append(("$expand", request.expand))

    return CompiledQuery(
        path=entity or request.entity,
        params=tuple(params),
        cross_company_escalated=escalated,
    )
