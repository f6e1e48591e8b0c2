"""Infrastructure layer — HTTP gateway, token acquisition, backend wiring.

This layer depends on stdlib, domain, and third-party libs (httpx, structlog).
It must never import from services, commands, output, or mcp.
"""
