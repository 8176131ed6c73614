"""Notification entity."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class NotificationEvent(str, Enum):
    APPLICATION_SUBMITTED = "application_submitted"
    NEW_APPLICATION = "new_application"
    STATUS_UPDATED = "status_updated"
    APPLICATION_WITHDRAWN = "application_withdrawn"


SUBJECT_TEMPLATES = {
    NotificationEvent.APPLICATION_SUBMITTED: "Application Submitted - {job_title} at {company}",
    NotificationEvent.NEW_APPLICATION: "New Application Received - {job_title}",
    NotificationEvent.STATUS_UPDATED: "Application Status Update - {job_title}",
    NotificationEvent.APPLICATION_WITHDRAWN: "Application Withdrawn - {job_title}",
}


@dataclass
class Notification:
    event: NotificationEvent
    recipient_id: str
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def subject(self) -> str:
        return SUBJECT_TEMPLATES[self.event].format_map(_Defaulting(self.context))


class _Defaulting(dict):
    def __missing__(self, key):
        return ""
