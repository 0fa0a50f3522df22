"""Notification schemas."""

from notifications.schemas.notification.notification_draft import NotificationDraft
from notifications.schemas.notification.request import (
    MarkReadRequest,
    NotificationDeleteRequest,
    RegisterTokenRequest,
)
from notifications.schemas.notification.response import (
    NotificationItem,
    NotificationListResponse,
    UnreadCountResponse,
)

__all__ = [
    "MarkReadRequest",
    "NotificationDeleteRequest",
    "NotificationDraft",
    "NotificationItem",
    "NotificationListResponse",
    "RegisterTokenRequest",
    "UnreadCountResponse",
]
