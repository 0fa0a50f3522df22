"""Registry of push event listeners with explicit unsubscription."""

from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

RECEIVED = "received"
TAPPED = "tapped"

Listener = Callable[[dict[str, Any]], None]


class Subscription:
    """Handle returned by NotificationListeners.subscribe."""

    def __init__(self, registry: "NotificationListeners", event: str, callback: Listener):
        self._registry = registry
        self.event = event
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        """Remove the listener. Calling it again is a no-op."""
        if self.active:
            self._registry._remove(self)
            self.active = False


class NotificationListeners:
    """Push event listeners keyed by event name (``received``, ``tapped``).

    The platform push integration calls ``emit`` when a notification arrives
    or is tapped. A failing listener is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = {}

    def subscribe(self, event: str, callback: Listener) -> Subscription:
        subscription = Subscription(self, event, callback)
        self._subscriptions.setdefault(event, []).append(subscription)
        return subscription

    def emit(self, event: str, data: dict[str, Any]) -> None:
        for subscription in list(self._subscriptions.get(event, [])):
            try:
                subscription.callback(data)
            except Exception as e:
                logger.warning(
                    "notification_listener_failed", event_name=event, error=str(e)
                )

    def count(self, event: str) -> int:
        return len(self._subscriptions.get(event, []))

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscriptions.get(subscription.event, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)
