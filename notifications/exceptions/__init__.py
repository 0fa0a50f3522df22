"""Exception types and handlers for the notification service."""

from notifications.exceptions.downstream_exceptions import (
    DownstreamServiceError,
    DownstreamServiceUnavailableError,
)
from notifications.exceptions.notification_exceptions import (
    AuthorizationError,
    DeliveryError,
    NotificationError,
    PermanentDeliveryError,
    PersistenceError,
    TransientDeliveryError,
    ValidationError,
)

__all__ = [
    "AuthorizationError",
    "DeliveryError",
    "DownstreamServiceError",
    "DownstreamServiceUnavailableError",
    "NotificationError",
    "PermanentDeliveryError",
    "PersistenceError",
    "TransientDeliveryError",
    "ValidationError",
]
