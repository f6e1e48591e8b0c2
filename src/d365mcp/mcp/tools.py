"""MCP tool definitions — 10 tools across 3 categories.

Categories: Query (3), Records (6), Workflow (1).
Each tool has a ``<name>_impl`` coroutine testable without a running server.
``register_tools()`` wraps them with FastMCP decorators; the pydantic
annotations on those wrappers are the argument-validation layer.

Annotations in this module are evaluated eagerly: FastMCP inspects the
wrapper signatures at registration time.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Annotated, Any, ParamSpec

from mcp.server.fastmcp import Context
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from d365mcp.domain.query import QueryRequest
from d365mcp.domain.result import GatewayResult
from d365mcp.domain.sales import SalesOrderHeader, SalesOrderLine
from d365mcp.infrastructure.backend import Backend
from d365mcp.services.notify import NotificationRelay
from d365mcp.services.query import QueryService
from d365mcp.services.records import RecordService
from d365mcp.services.sales import SalesOrderWorkflow

logger = logging.getLogger(__name__)

_P = ParamSpec("_P")


def operation(name: str) -> Callable[..., Any]:
    """Convert any exception escaping an operation into an error result."""

    def decorator(
        func: Callable[_P, Awaitable[GatewayResult]],
    ) -> Callable[_P, Awaitable[GatewayResult]]:
        @functools.wraps(func)
        async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> GatewayResult:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                logger.exception("Operation %s failed", name)
                return GatewayResult.error(f"{name} failed: {exc}")

        return wrapper

    return decorator


def relay_for(ctx: Context | None) -> NotificationRelay:
    """Relay that forwards to the client as MCP log-message notifications."""
    if ctx is None:
        return NotificationRelay()

    async def send(level: str, message: str) -> None:
        await ctx.log(level, message)  # type: ignore[arg-type]

    return NotificationRelay(send)


def _to_mcp_response(result: GatewayResult) -> str:
    """Return the text of a success; raise ToolError so FastMCP flags isError."""
    if result.is_error:
        raise ToolError(result.text)
    return result.text


# ---------------------------------------------------------------------------
# Query tools (3)
# ---------------------------------------------------------------------------


@operation("odataQuery")
async def odata_query_impl(
    backend: Backend,
    relay: NotificationRelay,
    entity: str,
    *,
    select: str | None = None,
    filter: dict[str, str] | None = None,  # noqa: A002
    expand: str | None = None,
    top: int | None = None,
    skip: int | None = None,
    cross_company: bool | None = None,
) -> GatewayResult:
    """Paginated GET against a fuzzily resolved entity set."""
    request = QueryRequest(
        entity=entity,
        select=select,
        filter=filter or {},
        expand=expand,
        top=top,
        skip=skip,
        cross_company=cross_company,
    )
    return await QueryService(backend, relay).query(request)


@operation("getEntityCount")
async def get_entity_count_impl(
    backend: Backend,
    relay: NotificationRelay,
    entity: str,
    *,
    cross_company: bool = False,
) -> GatewayResult:
    return await QueryService(backend, relay).count(entity, cross_company=cross_company)


@operation("getODataMetadata")
async def get_odata_metadata_impl(backend: Backend, relay: NotificationRelay) -> GatewayResult:
    return await QueryService(backend, relay).metadata()


# ---------------------------------------------------------------------------
# Record tools (6)
# ---------------------------------------------------------------------------


@operation("createCustomer")
async def create_customer_impl(
    backend: Backend, relay: NotificationRelay, customer_data: dict[str, Any]
) -> GatewayResult:
    return await RecordService(backend, relay).create_customer(customer_data)


@operation("updateCustomer")
async def update_customer_impl(
    backend: Backend,
    relay: NotificationRelay,
    data_area_id: str,
    customer_account: str,
    update_data: dict[str, Any],
) -> GatewayResult:
    return await RecordService(backend, relay).update_customer(
        data_area_id, customer_account, update_data
    )


@operation("createSystemUser")
async def create_system_user_impl(
    backend: Backend, relay: NotificationRelay, user_data: dict[str, Any]
) -> GatewayResult:
    return await RecordService(backend, relay).create_system_user(user_data)


@operation("assignUserRole")
async def assign_user_role_impl(
    backend: Backend, relay: NotificationRelay, association_data: dict[str, Any]
) -> GatewayResult:
    return await RecordService(backend, relay).assign_user_role(association_data)


@operation("updatePositionHierarchy")
async def update_position_hierarchy_impl(
    backend: Backend,
    relay: NotificationRelay,
    position_id: str,
    hierarchy_type_name: str,
    valid_from: datetime | str,
    valid_to: datetime | str,
    update_data: dict[str, Any],
) -> GatewayResult:
    return await RecordService(backend, relay).update_position_hierarchy(
        position_id, hierarchy_type_name, valid_from, valid_to, update_data
    )


@operation("action_initializeDataManagement")
async def initialize_data_management_impl(
    backend: Backend, relay: NotificationRelay
) -> GatewayResult:
    return await RecordService(backend, relay).initialize_data_management()


# ---------------------------------------------------------------------------
# Workflow tools (1)
# ---------------------------------------------------------------------------


@operation("createSalesOrder")
async def create_sales_order_impl(
    backend: Backend,
    relay: NotificationRelay,
    header: SalesOrderHeader,
    lines: list[SalesOrderLine],
) -> GatewayResult:
    return await SalesOrderWorkflow(backend, relay).create_sales_order(header, lines)


# ---------------------------------------------------------------------------
# Registration: FastMCP wrappers around the _impl functions
# ---------------------------------------------------------------------------


def register_tools(server: Any, backend: Backend) -> None:
    """Register all 10 MCP tools on the FastMCP server."""
    page_size = backend.settings.query.default_page_size

    @server.tool(
        name="odataQuery",
        description=(
            "Executes a generic GET request against a Dynamics 365 OData entity. "
            "The entity name does not need to be case-perfect. Responses are paginated."
        ),
    )
    async def odata_query(
        ctx: Context,
        entity: Annotated[
            str,
            Field(description="The OData entity set to query (e.g., CustomersV3, ReleasedProductsV2)."),
        ],
        select: Annotated[
            str | None, Field(description="OData $select query parameter to limit the fields returned.")
        ] = None,
        filter: Annotated[  # noqa: A002
            dict[str, str] | None,
            Field(
                description=(
                    "Key-value pairs for filtering. "
                    "e.g., { ProductNumber: 'D0001', dataAreaId: 'usmf' }."
                )
            ),
        ] = None,
        expand: Annotated[str | None, Field(description="OData $expand query parameter.")] = None,
        top: Annotated[
            int | None,
            Field(
                gt=0,
                description=f"The number of records to return per page. Defaults to {page_size}.",
            ),
        ] = None,
        skip: Annotated[
            int | None,
            Field(
                ge=0,
                description=(
                    "The number of records to skip. Used for pagination "
                    "to get the next set of results."
                ),
            ),
        ] = None,
        crossCompany: Annotated[  # noqa: N803
            bool | None, Field(description="Set to true to query across all companies.")
        ] = None,
    ) -> str:
        result = await odata_query_impl(
            backend,
            relay_for(ctx),
            entity,
            select=select,
            filter=filter,
            expand=expand,
            top=top,
            skip=skip,
            cross_company=crossCompany,
        )
        return _to_mcp_response(result)

    @server.tool(name="createCustomer", description="Creates a new customer record in CustomersV3.")
    async def create_customer(
        ctx: Context,
        customerData: Annotated[  # noqa: N803
            dict[str, Any],
            Field(
                description=(
                    "A JSON object for the new customer. "
                    "Must include dataAreaId, CustomerAccount, etc."
                )
            ),
        ],
    ) -> str:
        return _to_mcp_response(await create_customer_impl(backend, relay_for(ctx), customerData))

    @server.tool(
        name="updateCustomer",
        description="Updates an existing customer record in CustomersV3 using a PATCH request.",
    )
    async def update_customer(
        ctx: Context,
        dataAreaId: Annotated[  # noqa: N803
            str, Field(description="The dataAreaId of the customer (e.g., 'usmf').")
        ],
        customerAccount: Annotated[  # noqa: N803
            str, Field(description="The customer account ID to update (e.g., 'PM-001').")
        ],
        updateData: Annotated[  # noqa: N803
            dict[str, Any], Field(description="A JSON object with the fields to update.")
        ],
    ) -> str:
        result = await update_customer_impl(
            backend, relay_for(ctx), dataAreaId, customerAccount, updateData
        )
        return _to_mcp_response(result)

    @server.tool(
        name="getEntityCount",
        description="Gets the total count of records for a given OData entity.",
    )
    async def get_entity_count(
        ctx: Context,
        entity: Annotated[
            str, Field(description="The OData entity set to count (e.g., CustomersV3).")
        ],
        crossCompany: Annotated[  # noqa: N803
            bool | None, Field(description="Set to true to count across all companies.")
        ] = None,
    ) -> str:
        result = await get_entity_count_impl(
            backend, relay_for(ctx), entity, cross_company=bool(crossCompany)
        )
        return _to_mcp_response(result)

    @server.tool(name="createSystemUser", description="Creates a new user in SystemUsers.")
    async def create_system_user(
        ctx: Context,
        userData: Annotated[  # noqa: N803
            dict[str, Any],
            Field(
                description=(
                    "A JSON object for the new system user. Must include UserID, Alias, Company, etc."
                )
            ),
        ],
    ) -> str:
        return _to_mcp_response(await create_system_user_impl(backend, relay_for(ctx), userData))

    @server.tool(
        name="assignUserRole",
        description="Assigns a security role to a user in SecurityUserRoleAssociations.",
    )
    async def assign_user_role(
        ctx: Context,
        associationData: Annotated[  # noqa: N803
            dict[str, Any],
            Field(
                description=(
                    "JSON object for the role association. "
                    "Must include UserId and SecurityRoleIdentifier."
                )
            ),
        ],
    ) -> str:
        result = await assign_user_role_impl(backend, relay_for(ctx), associationData)
        return _to_mcp_response(result)

    @server.tool(
        name="updatePositionHierarchy",
        description="Updates a position in PositionHierarchies.",
    )
    async def update_position_hierarchy(
        ctx: Context,
        positionId: Annotated[str, Field(description="The ID of the position to update.")],  # noqa: N803
        hierarchyTypeName: Annotated[  # noqa: N803
            str, Field(description="The hierarchy type name (e.g., 'Line').")
        ],
        validFrom: Annotated[  # noqa: N803
            datetime, Field(description="The start validity date in ISO 8601 format.")
        ],
        validTo: Annotated[  # noqa: N803
            datetime, Field(description="The end validity date in ISO 8601 format.")
        ],
        updateData: Annotated[  # noqa: N803
            dict[str, Any],
            Field(description="A JSON object with the fields to update (e.g., ParentPositionId)."),
        ],
    ) -> str:
        result = await update_position_hierarchy_impl(
            backend,
            relay_for(ctx),
            positionId,
            hierarchyTypeName,
            validFrom,
            validTo,
            updateData,
        )
        return _to_mcp_response(result)

    @server.tool(
        name="action_initializeDataManagement",
        description=(
            "Executes the InitializeDataManagement action on the "
            "DataManagementDefinitionGroups entity."
        ),
    )
    async def action_initialize_data_management(ctx: Context) -> str:
        return _to_mcp_response(await initialize_data_management_impl(backend, relay_for(ctx)))

    @server.tool(
        name="getODataMetadata",
        description="Retrieves the OData $metadata document for the service.",
    )
    async def get_odata_metadata(ctx: Context) -> str:
        return _to_mcp_response(await get_odata_metadata_impl(backend, relay_for(ctx)))

    @server.tool(
        name="createSalesOrder",
        description=(
            "Creates a sales order header (SalesOrderHeadersV4) and one or more lines "
            "(SalesOrderLinesV3). SalesOrderNumber and SiteId are optional."
        ),
    )
    async def create_sales_order(
        ctx: Context,
        header: SalesOrderHeader,
        lines: Annotated[
            list[SalesOrderLine], Field(min_length=1, description="At least one line.")
        ],
    ) -> str:
        result = await create_sales_order_impl(backend, relay_for(ctx), header, lines)
        return _to_mcp_response(result)
