"""Text/JSON output helpers.

The CLI prints a GatewayResult for humans (its text content) or machines
(--json, the full ``{isError, content}`` envelope as MCP clients see it).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from d365mcp.domain.result import GatewayResult


def format_result(result: GatewayResult, *, json_output: bool = False) -> str:
    """Format a GatewayResult for display.

    Args:
        result: The result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        payload = {
            "isError": result.is_error,
            "content": [block.model_dump() for block in result.content],
        }
        return _json.dumps(payload, indent=2)
    if result.is_error:
        return f"ERROR: {result.text}"
    return result.text
