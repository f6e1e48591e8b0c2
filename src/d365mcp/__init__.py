"""d365mcp: MCP tool server for Dynamics 365 Finance & Operations OData."""

__version__ = "1.0.0"
