"""Notification response schemas."""

from notifications.schemas.notification.response.notification_item import (
    NotificationItem,
)
from notifications.schemas.notification.response.notification_list_response import (
    NotificationListResponse,
)
from notifications.schemas.notification.response.unread_count_response import (
    UnreadCountResponse,
)

__all__ = ["NotificationItem", "NotificationListResponse", "UnreadCountResponse"]
