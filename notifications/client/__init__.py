"""Python client for the notification service.

Usage::

    state = NotificationState()
    client = NotificationClient(base_url, token_provider=lambda: token, state=state)
    listeners = NotificationListeners()
    with client.mounted(listeners):
        client.fetch()
"""

from notifications.client.api_client import ApiClient, NetworkError
from notifications.client.facade import NotificationClient
from notifications.client.listeners import (
    RECEIVED,
    TAPPED,
    NotificationListeners,
    Subscription,
)
from notifications.client.optimistic import (
    InvalidTransitionError,
    OperationStatus,
    OptimisticOperation,
)
from notifications.client.state import NotificationState

__all__ = [
    "RECEIVED",
    "TAPPED",
    "ApiClient",
    "InvalidTransitionError",
    "NetworkError",
    "NotificationClient",
    "NotificationListeners",
    "NotificationState",
    "OperationStatus",
    "OptimisticOperation",
    "Subscription",
]
