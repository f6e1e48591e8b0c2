"""Sales order models and payload assembly.

Field names match the backend's OData properties. Optional identifiers
(``SalesOrderNumber``, ``SiteId``) are left out of payloads when absent so
the backend can assign or default them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

AUTO_ASSIGNED = "(auto-assigned)"


class SalesOrderHeader(BaseModel):
    """Header of a sales order to create."""

    model_config = {"frozen": True}

    dataAreaId: str = Field(description="Legal entity (e.g., 'usmf').")
    RequestedShippingDate: str = Field(
        description="Requested shipping date (ISO 8601 recommended, e.g., '2025-10-20')."
    )
    CustomerAccount: str = Field(description="Customer account (e.g., 'US-001').")
    SalesOrderNumber: str | None = Field(
        default=None, description="Optional. If omitted, D365 will auto-assign."
    )

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "dataAreaId": self.dataAreaId,
            "RequestedShippingDate": self.RequestedShippingDate,
            "CustomerAccount": self.CustomerAccount,
        }
        if self.SalesOrderNumber:
            body["SalesOrderNumber"] = self.SalesOrderNumber
        return body


class SalesOrderLine(BaseModel):
    """One line to add to the order."""

    model_config = {"frozen": True}

    ItemNumber: str = Field(description="Item number to add as a line.")
    OrderedSalesQuantity: int | float = Field(description="Ordered quantity for the line.")
    SiteId: str | None = Field(
        default=None,
        description="Optional. If omitted, system defaulting fills it when configured.",
    )

    def payload(self, data_area_id: str, order_number: str | None) -> dict[str, Any]:
        """Line body carrying the shared header context."""
        body: dict[str, Any] = {"dataAreaId": data_area_id}
        if order_number:
            body["SalesOrderNumber"] = order_number
        body["ItemNumber"] = self.ItemNumber
        body["OrderedSalesQuantity"] = self.OrderedSalesQuantity
        if self.SiteId:
            body["SiteId"] = self.SiteId
        return body


class HeaderOutcome(BaseModel):
    SalesOrderNumber: str = AUTO_ASSIGNED
    created: bool = True


class LineOutcome(BaseModel):
    index: int
    ok: bool
    message: str


class WorkflowResult(BaseModel):
    """Aggregate of the header step and every line step, in input order.

    When the header step failed, ``header.created`` is False, ``lines`` is
    empty, and ``header_error`` holds the failure detail.
    """

    header: HeaderOutcome = Field(default_factory=HeaderOutcome)
    lines: list[LineOutcome] = Field(default_factory=list)
    header_error: str | None = Field(default=None, exclude=True)

    @property
    def failed_lines(self) -> list[LineOutcome]:
        return [line for line in self.lines if not line.ok]
