"""Notification request schemas."""

from notifications.schemas.notification.request.delete_request import (
    NotificationDeleteRequest,
)
from notifications.schemas.notification.request.mark_read_request import (
    MarkReadRequest,
)
from notifications.schemas.notification.request.register_token_request import (
    RegisterTokenRequest,
)

__all__ = ["MarkReadRequest", "NotificationDeleteRequest", "RegisterTokenRequest"]
