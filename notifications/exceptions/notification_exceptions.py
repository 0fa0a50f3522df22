"""Domain exceptions for notification creation, delivery and storage."""

from typing import Any


class NotificationError(Exception):
    """Base exception for the notification domain."""


class ValidationError(NotificationError):
    """Raw event data is incomplete or malformed.

    Raised by the classifier before any notification is built.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        """Initialize validation error.

        Args:
            message: Error message
            errors: Field-level error details, if available
        """
        self.errors = errors or []
        super().__init__(message)


class AuthorizationError(NotificationError):
    """An operation scoped to one user touched another user's records."""

    def __init__(self, owner_id: str, foreign_ids: list[str] | None = None):
        """Initialize authorization error.

        Args:
            owner_id: The requesting user
            foreign_ids: Notification IDs that belong to someone else
        """
        self.owner_id = owner_id
        self.foreign_ids = foreign_ids or []
        super().__init__("You can only modify your own notifications")


class PersistenceError(NotificationError):
    """A repository read or write failed."""


class DeliveryError(NotificationError):
    """Push delivery to a single device token failed."""

    def __init__(self, token: str, message: str, details: Any = None):
        """Initialize delivery error.

        Args:
            token: The device push token the send targeted
            message: Error message
            details: Gateway-provided error details
        """
        self.token = token
        self.details = details
        super().__init__(message)


class TransientDeliveryError(DeliveryError):
    """Send failed for a reason that may succeed later (timeout, 5xx, rate limit)."""


class PermanentDeliveryError(DeliveryError):
    """The gateway reports the token as permanently invalid."""
