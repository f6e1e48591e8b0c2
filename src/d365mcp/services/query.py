"""QueryService — read operations: entity queries, counts, and metadata."""

from __future__ import annotations

from urllib.parse import urlencode

from d365mcp.domain.query import QueryRequest, compile_query
from d365mcp.domain.result import GatewayResult
from d365mcp.services.base import BaseService


def entity_not_found(raw: str) -> GatewayResult:
    return GatewayResult.error(
        f"Could not find a matching entity for '{raw}'. Please provide a more specific name."
    )


class QueryService(BaseService):
    """Entity-set reads. Entity names go through the fuzzy matcher first."""

    async def resolve_entity(self, raw: str) -> str | None:
        """Resolve *raw* to a canonical entity name, announcing corrections."""
        entity = self._backend.matcher.resolve(raw)
        if entity is not None and entity != raw:
            await self._relay.notify(f"Corrected entity name from '{raw}' to '{entity}'.")
        return entity

    async def query(self, request: QueryRequest) -> GatewayResult:
        """Run a paginated GET against the resolved entity set."""
        entity = await self.resolve_entity(request.entity)
        if entity is None:
            return entity_not_found(request.entity)

        config = self._backend.settings.query
        compiled = compile_query(
            request,
            config.default_page_size,
            entity=entity,
            company_field=config.company_field,
        )
        if compiled.cross_company_escalated:
            await self._relay.notify(
                f"Filter on company ('{config.company_field}') detected. "
                "Automatically enabling cross-company search."
            )
        return await self._call_url("GET", compiled.url(self._backend.data_root))

    async def count(self, raw_entity: str, *, cross_company: bool = False) -> GatewayResult:
        """Total record count of an entity set via ``$count``."""
        entity = await self.resolve_entity(raw_entity)
        if entity is None:
            return entity_not_found(raw_entity)

        url = self._backend.data_url(f"{entity}/$count")
        if cross_company:
            url = f"{url}?{urlencode({'cross-company': 'true'})}"
        return await self._call_url("GET", url)

    async def metadata(self) -> GatewayResult:
        """The service's ``$metadata`` document, passed through untouched."""
        return await self._call("GET", "$metadata")
