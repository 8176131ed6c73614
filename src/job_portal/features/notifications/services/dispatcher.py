"""Fire-and-forget notification dispatch."""

import asyncio
from typing import Optional, Set

from loguru import logger

from ..entities.notification import Notification
from ..entities.protocols import Notifier


class NotificationDispatcher:
    """Sends notifications in background tasks.

    ``dispatch`` returns immediately; delivery failures are logged and never
    reach the caller.
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, notification: Notification) -> None:
        if self.notifier is None:
            return
        try:
            task = asyncio.get_running_loop().create_task(self._send(notification))
        except RuntimeError as e:
            logger.warning(f"Cannot dispatch {notification.event.value} notification: {e}")
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send(self, notification: Notification) -> None:
        try:
            await self.notifier.send(notification)
        except Exception as e:
            logger.error(f"Failed to send {notification.event.value} notification to {notification.recipient_id}: {e}")

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for in-flight notifications to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
