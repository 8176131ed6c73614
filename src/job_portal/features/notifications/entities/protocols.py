"""Notifier protocol."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from .notification import Notification


@runtime_checkable
class Notifier(Protocol):
    """Delivers a notification to its recipient."""

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        ...
