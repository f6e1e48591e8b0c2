"""GatewayResult — the universal operation contract.

INVARIANT: Every gateway call and every tool operation returns a
GatewayResult. Failures are carried by ``is_error``, never raised.
The MCP adapter and the CLI both consume this type.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class TextContent(BaseModel):
    """One block of textual content."""

    model_config = {"frozen": True}

    type: Literal["text"] = "text"
    text: str


class GatewayResult(BaseModel):
    """Text-bearing result with an error flag.

    Attributes:
        is_error: Whether the request or operation failed.
        content: Ordered content blocks; the first one carries the message.
    """

    model_config = {"frozen": True}

    is_error: bool = False
    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def ok(cls, text: str) -> GatewayResult:
        return cls(is_error=False, content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> GatewayResult:
        return cls(is_error=True, content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        """Text of the first content block, or a JSON dump when there is none."""
        if self.content:
            return self.content[0].text
        return self.model_dump_json()
