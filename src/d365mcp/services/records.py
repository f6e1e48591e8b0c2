"""RecordService — direct create, update, and action calls.

Payloads are forwarded as given; the backend validates them. Composite
keys are rendered into the OData key-predicate syntax, string parts
single-quoted and datetime parts bare.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from d365mcp.domain.result import GatewayResult
from d365mcp.services.base import BaseService

INITIALIZE_DATA_MANAGEMENT = (
    "DataManagementDefinitionGroups/Microsoft.Dynamics.DataEntities.InitializeDataManagement"
)


def odata_datetime(value: datetime | str) -> str:
    """Render a key datetime literal (``2024-01-01T00:00:00Z``).

    Naive datetimes are taken as UTC. Strings pass through unchanged.
    """
    if isinstance(value, str):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    timespec = "milliseconds" if value.microsecond else "seconds"
    return value.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"


def key_predicate(**parts: str) -> str:
    """``(A='x',B='y')`` from keyword parts, in argument order."""
    return "(" + ",".join(f"{name}='{value}'" for name, value in parts.items()) + ")"


class RecordService(BaseService):
    """Mutations against fixed entity sets."""

    async def create_customer(self, customer_data: dict[str, Any]) -> GatewayResult:
        return await self._call("POST", "CustomersV3", customer_data)

    async def update_customer(
        self,
        data_area_id: str,
        customer_account: str,
        update_data: dict[str, Any],
    ) -> GatewayResult:
        key = key_predicate(dataAreaId=data_area_id, CustomerAccount=customer_account)
        return await self._call("PATCH", f"CustomersV3{key}", update_data)

    async def create_system_user(self, user_data: dict[str, Any]) -> GatewayResult:
        return await self._call("POST", "SystemUsers", user_data)

    async def assign_user_role(self, association_data: dict[str, Any]) -> GatewayResult:
        return await self._call("POST", "SecurityUserRoleAssociations", association_data)

    async def update_position_hierarchy(
        self,
        position_id: str,
        hierarchy_type_name: str,
        valid_from: datetime | str,
        valid_to: datetime | str,
        update_data: dict[str, Any],
    ) -> GatewayResult:
        key = (
            f"(PositionId='{position_id}',HierarchyTypeName='{hierarchy_type_name}',"
            f"ValidFrom={odata_datetime(valid_from)},ValidTo={odata_datetime(valid_to)})"
        )
        return await self._call("PATCH", f"PositionHierarchies{key}", update_data)

    async def initialize_data_management(self) -> GatewayResult:
        return await self._call("POST", INITIALIZE_DATA_MANAGEMENT, {})
