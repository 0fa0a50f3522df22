"""Client for the Expo push gateway.

Each call sends exactly one message to one device token and classifies any
failure as transient (retry may succeed) or permanent (the token is dead).
"""

from typing import Any

from django.conf import settings

import requests
import structlog

from notifications.enums import NotificationPriority
from notifications.exceptions import PermanentDeliveryError, TransientDeliveryError
from notifications.models import Notification

logger = structlog.get_logger(__name__)

# Gateway error codes meaning the token will never be deliverable again.
PERMANENT_ERROR_CODES = frozenset({"DeviceNotRegistered"})

_GATEWAY_PRIORITY = {
    NotificationPriority.URGENT.value: "high",
    NotificationPriority.HIGH.value: "high",
    NotificationPriority.MEDIUM.value: "default",
    NotificationPriority.LOW.value: "default",
}


def build_push_message(
    token: str, notification: Notification, unread_count: int
) -> dict[str, Any]:
    """Build the gateway message for one device.

    ``data`` carries the notification id, its type and the payload fields so
    the client can navigate on tap; ``badge`` is the owner's unread count.
    """
    return {
        "to": token,
        "title": notification.title,
        "body": notification.message,
        "data": {
            **notification.payload,
            "notificationId": str(notification.notification_id),
            "type": notification.type,
        },
        "priority": _GATEWAY_PRIORITY.get(notification.priority, "default"),
        "badge": unread_count,
        "channelId": notification.type,
        "sound": "default",
    }


class PushGateway:
    """Sends single push messages through the Expo HTTP API."""

    def __init__(self, url: str | None = None, timeout: float | None = None):
        self._url = url
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url or settings.PUSH_GATEWAY_URL

    @property
    def timeout(self) -> float:
        return self._timeout or settings.PUSH_SEND_TIMEOUT

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if settings.PUSH_GATEWAY_ACCESS_TOKEN:
            headers["Authorization"] = f"Bearer {settings.PUSH_GATEWAY_ACCESS_TOKEN}"
        return headers

    def send(self, message: dict[str, Any]) -> str | None:
        """Send one message.

        Args:
            message: Message built by build_push_message

        Returns:
            The gateway ticket id, when the gateway returns one

        Raises:
            TransientDeliveryError: Timeouts, connection errors, 429/5xx, or a
                ticket error not tied to the token
            PermanentDeliveryError: The gateway reports the token as unregistered
        """
        token = message["to"]
        try:
            response = requests.post(
                self.url, json=message, headers=self._headers(), timeout=self.timeout
            )
        except requests.Timeout as e:
            raise TransientDeliveryError(token, "Push gateway timed out") from e
        except requests.RequestException as e:
            raise TransientDeliveryError(token, f"Push gateway unreachable: {e}") from e

        if response.status_code == 429 or response.status_code >= 500:
            raise TransientDeliveryError(
                token, f"Push gateway returned {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransientDeliveryError(
                token, "Push gateway returned a non-JSON response"
            ) from e

        if response.status_code >= 400:
            errors = body.get("errors") or []
            raise TransientDeliveryError(
                token,
                f"Push gateway rejected the request ({response.status_code})",
                details=errors,
            )

        ticket = body.get("data") or {}
        if isinstance(ticket, list):
            ticket = ticket[0] if ticket else {}

        if ticket.get("status") == "error":
            details = ticket.get("details") or {}
            error_code = details.get("error")
            error_message = ticket.get("message", "Push ticket error")
            if error_code in PERMANENT_ERROR_CODES:
                raise PermanentDeliveryError(token, error_message, details=details)
            raise TransientDeliveryError(token, error_message, details=details)

        return ticket.get("id")


push_gateway = PushGateway()
