"""Enumerations for the notifications app."""

from notifications.enums.health_status import HealthStatus
from notifications.enums.notification import (
    CommunityAction,
    EventKind,
    NotificationPriority,
    NotificationType,
)

__all__ = [
    "CommunityAction",
    "EventKind",
    "HealthStatus",
    "NotificationPriority",
    "NotificationType",
]
