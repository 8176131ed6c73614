"""Notifier that records notifications in the application log."""

from loguru import logger

from ..entities.notification import Notification


class LoggingNotifier:
    """Logs each notification instead of delivering it.

    Stands in for a mail or push gateway in deployments that have none.
    """

    async def send(self, notification: Notification) -> None:
        logger.info(
            f"Notification {notification.event.value} to user {notification.recipient_id}: "
            f"{notification.subject}"
        )
