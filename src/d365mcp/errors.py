"""Exception hierarchy for the infrastructure layer.

Raised inside the infrastructure layer. The gateway and the MCP tool
wrappers turn them into error results; the CLI reports them as usage errors.
"""

from __future__ import annotations


class D365Error(Exception):
    """Base class for d365mcp errors."""


class ConfigurationError(D365Error):
    """Required configuration (resource URL, credentials) is missing."""


class AuthenticationError(D365Error):
    """The token endpoint rejected the credentials or returned no token."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
