"""HTTP middleware for the notification service."""

from notifications.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
