"""Client notification facade.

NotificationClient keeps a NotificationState in sync with the notification
service. Reads always go to the server; writes are applied locally first
and rolled back if the server rejects them.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import requests
import structlog
from pydantic.alias_generators import to_camel

from notifications.client.api_client import ApiClient, NetworkError, TokenProvider
from notifications.client.listeners import RECEIVED, TAPPED, NotificationListeners
from notifications.client.optimistic import OptimisticOperation
from notifications.client.state import NotificationState
from notifications.schemas.notification import NotificationItem
from notifications.schemas.preferences import NotificationPreferencesSchema

logger = structlog.get_logger(__name__)

BadgeSetter = Callable[[int], None]


class NotificationClient:
    """Facade over the notification API for one signed-in user."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        state: NotificationState | None = None,
        badge_setter: BadgeSetter | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``https://host/api/v1``
            token_provider: Returns the current bearer token
            state: State object to keep in sync; a new one is created if omitted
            badge_setter: Called with the unread count whenever it changes
            session: requests session to reuse
        """
        self.api = ApiClient(base_url, token_provider, session=session)
        self.state = state if state is not None else NotificationState()
        self.badge_setter = badge_setter

    def fetch(self, page: int = 1, limit: int = 20) -> NotificationState:
        """Load a page of notifications from the server.

        On failure the previous list is kept and marked stale.

        Raises:
            NetworkError: If the request fails
        """
        try:
            body = self.api.get("/notifications", params={"page": page, "limit": limit})
        except NetworkError:
            self.state.stale = True
            raise

        self.state.notifications = [
            NotificationItem.model_validate(item) for item in body.get("notifications", [])
        ]
        self.state.unread_count = int(body.get("unreadCount", 0))
        self.state.stale = False
        self._sync_badge()
        return self.state

    def mark_as_read(
        self, notification_ids: list[UUID | str] | None = None, mark_all: bool = False
    ) -> int:
        """Mark notifications read locally, then on the server.

        Returns:
            The server's unread count

        Raises:
            NetworkError: If the server call fails (local state is restored)
        """
        ids = {str(i) for i in notification_ids or []}
        if not mark_all and not ids:
            return self.state.unread_count

        operation = OptimisticOperation(self.state, "mark_as_read")
        now = datetime.now(UTC)
        flipped = 0
        updated = []
        for item in self.state.notifications:
            if not item.is_read and (mark_all or str(item.notification_id) in ids):
                item = item.model_copy(update={"is_read": True, "read_at": now})
                flipped += 1
            updated.append(item)
        self.state.notifications = updated
        self.state.unread_count = (
            0 if mark_all else max(self.state.unread_count - flipped, 0)
        )
        self._sync_badge()

        body = {"markAll": True} if mark_all else {"notificationIds": sorted(ids)}
        response = self._commit_or_rollback(
            operation, lambda: self.api.put("/notifications/mark-read", body)
        )
        return int(response.get("unreadCount", 0))

    def delete_notifications(
        self,
        notification_ids: list[UUID | str] | None = None,
        delete_all: bool = False,
    ) -> int:
        """Remove notifications locally, then on the server.

        Returns:
            The server's unread count

        Raises:
            NetworkError: If the server call fails (local state is restored)
        """
        ids = {str(i) for i in notification_ids or []}
        if not delete_all and not ids:
            return self.state.unread_count

        operation = OptimisticOperation(self.state, "delete_notifications")
        removed_unread = sum(
            1
            for item in self.state.notifications
            if not item.is_read and (delete_all or str(item.notification_id) in ids)
        )
        self.state.notifications = (
            []
            if delete_all
            else [
                item
                for item in self.state.notifications
                if str(item.notification_id) not in ids
            ]
        )
        self.state.unread_count = (
            0 if delete_all else max(self.state.unread_count - removed_unread, 0)
        )
        self._sync_badge()

        body = {"deleteAll": True} if delete_all else {"notificationIds": sorted(ids)}
        response = self._commit_or_rollback(
            operation, lambda: self.api.delete("/notifications", body)
        )
        return int(response.get("unreadCount", 0))

    def fetch_preferences(self) -> NotificationPreferencesSchema:
        body = self.api.get("/notifications/preferences")
        self.state.preferences = NotificationPreferencesSchema.model_validate(
            body["preferences"]
        )
        return self.state.preferences

    def update_preferences(self, **changes: Any) -> NotificationPreferencesSchema:
        """Send only the preference fields that differ from the cached ones.

        Keyword names are the snake_case preference fields. The cached
        preferences are replaced only by the server's response.

        Raises:
            ValueError: If a keyword is not a preference field
            NetworkError: If the server call fails (cache unchanged)
        """
        unknown = set(changes) - set(NotificationPreferencesSchema.model_fields)
        if unknown:
            raise ValueError(f"Unknown preference fields: {sorted(unknown)}")

        current = self.state.preferences or self.fetch_preferences()
        diff = {
            to_camel(name): value
            for name, value in changes.items()
            if getattr(current, name) != value
        }
        if not diff:
            return current

        body = self.api.put("/notifications/preferences", diff)
        self.state.preferences = NotificationPreferencesSchema.model_validate(
            body["preferences"]
        )
        return self.state.preferences

    def register_push_token(self, token: str) -> None:
        self.api.post("/notifications/register-token", {"token": token})

    def unregister_push_token(self, token: str) -> None:
        self.api.delete("/notifications/register-token", {"token": token})

    def send_test_notification(self) -> NotificationItem:
        """Ask the server to send a test notification, then refresh."""
        body = self.api.post("/notifications/test")
        notification = NotificationItem.model_validate(body["notification"])
        self.fetch()
        return notification

    def check_pantry_expiry(self) -> str | None:
        """Queue a pantry expiry recheck; returns the job id."""
        return self.api.post("/notifications/check-pantry").get("jobId")

    def check_grocery_deadlines(self) -> str | None:
        """Queue a grocery deadline recheck; returns the job id."""
        return self.api.post("/notifications/check-grocery").get("jobId")

    @contextmanager
    def mounted(self, listeners: NotificationListeners) -> Iterator["NotificationClient"]:
        """Subscribe push handlers for the lifetime of the block.

        A received push refreshes the list. A tapped push marks its
        notification read (when the data carries ``notificationId``) and
        refreshes. Both subscriptions are removed on exit, even on error.
        """
        received = listeners.subscribe(RECEIVED, self._on_received)
        tapped = listeners.subscribe(TAPPED, self._on_tapped)
        try:
            yield self
        finally:
            received.unsubscribe()
            tapped.unsubscribe()

    def _on_received(self, _data: dict[str, Any]) -> None:
        try:
            self.fetch()
        except NetworkError as e:
            logger.warning("refresh_after_push_failed", error=str(e))

    def _on_tapped(self, data: dict[str, Any]) -> None:
        notification_id = data.get("notificationId")
        try:
            if notification_id:
                self.mark_as_read([notification_id])
            self.fetch()
        except NetworkError as e:
            logger.warning(
                "refresh_after_tap_failed", notification_id=notification_id, error=str(e)
            )

    def _commit_or_rollback(
        self,
        operation: OptimisticOperation,
        send: Callable[[], dict[str, Any]],
    ) -> dict[str, Any]:
        """Confirm an optimistic change with the server.

        On success the server's unread count replaces the local estimate and
        the operation commits; on failure the snapshot is restored.
        """
        try:
            response = send()
        except NetworkError:
            operation.rollback()
            self._sync_badge()
            raise
        self.state.unread_count = int(response.get("unreadCount", 0))
        operation.commit()
        self._sync_badge()
        return response

    def _sync_badge(self) -> None:
        if self.badge_setter is None:
            return
        try:
            self.badge_setter(self.state.unread_count)
        except Exception as e:
            logger.warning("badge_update_failed", error=str(e))
