from .notification import Notification, NotificationEvent
from .protocols import Notifier

__all__ = ["Notification", "NotificationEvent", "Notifier"]
