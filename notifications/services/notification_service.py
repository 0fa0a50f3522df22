"""User-facing notification operations behind the HTTP API.

This module provides the NotificationService class which lists, marks as
read and deletes a user's notifications, manages their preferences and
push tokens, and publishes new domain events through the classifier and
dispatcher.
"""

from typing import Any
from uuid import UUID

import structlog

from notifications.models import Notification
from notifications.repositories import (
    NotificationRepository,
    PreferenceRepository,
    PushTokenRepository,
)
from notifications.schemas.notification import (
    NotificationItem,
    NotificationListResponse,
)
from notifications.schemas.preferences import NotificationPreferencesSchema
from notifications.services.classifier import (
    NotificationClassifier,
    notification_classifier,
)
from notifications.services.dispatcher import DeliveryDispatcher, delivery_dispatcher
from notifications.services.unread_counter import UnreadCounter, unread_counter

logger = structlog.get_logger(__name__)


class NotificationService:
    """Operations a user performs on their own notification state.

    Every mutation recomputes the unread count before returning it, so the
    value in each response always matches the database.
    """

    def __init__(
        self,
        classifier: NotificationClassifier | None = None,
        dispatcher: DeliveryDispatcher | None = None,
        counter: UnreadCounter | None = None,
    ) -> None:
        self._classifier = classifier or notification_classifier
        self._dispatcher = dispatcher or delivery_dispatcher
        self._counter = counter or unread_counter

    def publish(
        self, owner_id: str, kind: str, context: dict[str, Any]
    ) -> Notification | None:
        """Classify a domain event and deliver it.

        Returns:
            The stored notification, or None when suppressed or deduplicated

        Raises:
            ValidationError: If the event is malformed
            PersistenceError: If storing the notification fails
        """
        draft = self._classifier.classify(owner_id, kind, context)
        if draft is None:
            return None
        return self._dispatcher.dispatch(owner_id, draft)

    def list_notifications(
        self,
        owner_id: str,
        page: int,
        limit: int,
        is_read: bool | None = None,
        type: str | None = None,
    ) -> NotificationListResponse:
        """Return one page of notifications, newest first, with the unread count."""
        items, total = NotificationRepository.list_by_owner(
            owner_id, page=page, limit=limit, is_read=is_read, type=type
        )
        logger.info(
            "get_user_notifications",
            owner_id=owner_id,
            page=page,
            limit=limit,
            returned=len(items),
            total=total,
        )
        return NotificationListResponse(
            notifications=[NotificationItem.model_validate(item) for item in items],
            unread_count=self._counter.recompute(owner_id),
            page=page,
            limit=limit,
            total=total,
            has_more=page * limit < total,
        )

    def mark_read(
        self,
        owner_id: str,
        notification_ids: list[UUID] | None = None,
        mark_all: bool = False,
    ) -> int:
        """Mark notifications as read and return the new unread count.

        Raises:
            AuthorizationError: If any id belongs to another user
        """
        NotificationRepository.mark_read(
            owner_id, notification_ids=notification_ids, mark_all=mark_all
        )
        return self._counter.recompute(owner_id)

    def delete(
        self,
        owner_id: str,
        notification_ids: list[UUID] | None = None,
        delete_all: bool = False,
    ) -> int:
        """Delete notifications and return the new unread count.

        Raises:
            AuthorizationError: If any id belongs to another user
        """
        NotificationRepository.delete(
            owner_id, notification_ids=notification_ids, delete_all=delete_all
        )
        return self._counter.recompute(owner_id)

    def get_preferences(self, owner_id: str) -> NotificationPreferencesSchema:
        preferences = PreferenceRepository.get_or_create(owner_id)
        return NotificationPreferencesSchema.model_validate(preferences)

    def update_preferences(
        self, owner_id: str, changes: dict[str, object]
    ) -> NotificationPreferencesSchema:
        """Apply a partial preference update; an empty update is a read."""
        if not changes:
            return self.get_preferences(owner_id)
        preferences = PreferenceRepository.update(owner_id, changes)
        return NotificationPreferencesSchema.model_validate(preferences)

    def register_token(self, owner_id: str, token: str) -> None:
        PushTokenRepository.register(owner_id, token)

    def unregister_token(self, owner_id: str, token: str) -> bool:
        removed = PushTokenRepository.unregister(owner_id, token)
        logger.info("push_token_unregistered", owner_id=owner_id, removed=removed)
        return removed

    def send_test(self, owner_id: str) -> NotificationItem:
        notification = self._dispatcher.dispatch_test(owner_id)
        return NotificationItem.model_validate(notification)


notification_service = NotificationService()
