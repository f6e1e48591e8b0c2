"""NotificationRelay — best-effort progress messages to the caller.

INVARIANT: Notification failures never affect the operation that sent them.
Delivery is attempted once; any exception from the sender is logged at
debug level and dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

Sender = Callable[[str, str], Awaitable[None]]
"""``await sender(level, message)`` — delivers one notification."""

LEVELS = ("debug", "info", "warning", "error")


class NotificationRelay:
    """Forward notifications to *sender* in call order, swallowing failures."""

    def __init__(self, sender: Sender | None = None) -> None:
        self._sender = sender

    async def notify(self, message: str, level: str = "info") -> None:
        if self._sender is None:
            return
        if level not in LEVELS:
            level = "info"
        try:
            await self._sender(level, message)
        except Exception:
            logger.debug("Notification delivery failed: %s", message, exc_info=True)
