"""SalesOrderWorkflow — create a sales order header, then its lines.

Steps run strictly in sequence::

    CREATE_HEADER --fail--> FAILED (error result, no lines attempted)
         |
         ok
         v
    CREATE_LINES (one awaited call per line, input order, continue-on-error)
         |
         v
    SUMMARIZE (success result; per-line failures live in the lines array)

Nothing is rolled back: a failed line leaves the header and earlier lines
in place, and the summary tells the caller which items to resend.
Cancellation during the line loop stops further line calls and propagates.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence

import structlog

from d365mcp.domain.result import GatewayResult
from d365mcp.domain.sales import (
    AUTO_ASSIGNED,
    HeaderOutcome,
    LineOutcome,
    SalesOrderHeader,
    SalesOrderLine,
    WorkflowResult,
)
from d365mcp.services.base import BaseService

log = structlog.get_logger(__name__)

HEADER_ENTITY = "SalesOrderHeadersV4"
LINE_ENTITY = "SalesOrderLinesV3"


def assigned_order_number(header_text: str) -> str | None:
    """Read ``SalesOrderNumber`` from a created-header response body, if present."""
    try:
        body = json.loads(header_text)
    except ValueError:
        return None
    if isinstance(body, dict):
        number = body.get("SalesOrderNumber")
        if isinstance(number, str) and number:
            return number
    return None


def summary_text(result: WorkflowResult) -> str:
    summary = json.dumps(result.model_dump(), indent=2)
    return (
        f"Sales order creation summary:\n\n{summary}\n\n"
        "Tip: If any line failed, re-run with only failed items."
    )


class SalesOrderWorkflow(BaseService):
    """Composite header + lines creation."""

    async def run(
        self,
        header: SalesOrderHeader,
        lines: Sequence[SalesOrderLine],
    ) -> WorkflowResult:
        """Execute the workflow and return per-step outcomes."""
        suffix = f": {header.SalesOrderNumber}" if header.SalesOrderNumber else ""
        await self._relay.notify(f"Creating sales order header{suffix}")

        header_result = await self._call("POST", HEADER_ENTITY, header.payload())
        if header_result.is_error:
            log.warning("sales_order.header_failed", customer=header.CustomerAccount)
            return WorkflowResult(
                header=HeaderOutcome(
                    SalesOrderNumber=header.SalesOrderNumber or AUTO_ASSIGNED,
                    created=False,
                ),
                header_error=header_result.text,
            )

        order_number = header.SalesOrderNumber
        if not order_number:
            order_number = assigned_order_number(header_result.text)
            if order_number:
                await self._relay.notify(f"Backend assigned sales order number {order_number}.")
            else:
                await self._relay.notify(
                    "Could not read the assigned sales order number from the header "
                    "response; lines will be sent without one.",
                    "warning",
                )

        await self._relay.notify(f"Header created. Creating {len(lines)} line(s)...")
        result = WorkflowResult(
            header=HeaderOutcome(SalesOrderNumber=order_number or AUTO_ASSIGNED, created=True)
        )

        try:
            for index, line in enumerate(lines):
                outcome = await self._create_line(index, line, header.dataAreaId, order_number)
                result.lines.append(outcome)
                await self._relay.notify(outcome.message, "info" if outcome.ok else "error")
        except asyncio.CancelledError:
            log.warning(
                "sales_order.cancelled",
                order=order_number or AUTO_ASSIGNED,
                completed_lines=len(result.lines),
                total_lines=len(lines),
            )
            raise

        log.debug(
            "sales_order.complete",
            order=order_number or AUTO_ASSIGNED,
            failed=len(result.failed_lines),
            total=len(result.lines),
        )
        return result

    async def _create_line(
        self,
        index: int,
        line: SalesOrderLine,
        data_area_id: str,
        order_number: str | None,
    ) -> LineOutcome:
        response = await self._call("POST", LINE_ENTITY, line.payload(data_area_id, order_number))
        ok = not response.is_error
        message = f"Line {index + 1} created." if ok else f"Line {index + 1} failed.\n{response.text}"
        return LineOutcome(index=index, ok=ok, message=message)

    async def create_sales_order(
        self,
        header: SalesOrderHeader,
        lines: Sequence[SalesOrderLine],
    ) -> GatewayResult:
        """Run the workflow and render it as a single result.

        Only a header failure produces an error result.
        """
        if not lines:
            return GatewayResult.error("At least one sales order line is required.")
        result = await self.run(header, lines)
        if not result.header.created:
            return GatewayResult.error(
                f"Failed to create Sales Order header.\n\n{result.header_error}"
            )
        return GatewayResult.ok(summary_text(result))
