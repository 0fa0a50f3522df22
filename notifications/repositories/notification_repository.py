"""Repository for notification records.

All mutations are scoped to a single owner. Bulk operations are set
operations: applying them twice, or in either order, leaves the same state.
"""

from datetime import datetime
from uuid import UUID

from django.db import DatabaseError, transaction
from django.utils import timezone

import structlog

from notifications.exceptions import AuthorizationError, PersistenceError
from notifications.models import Notification
from notifications.schemas.notification import NotificationDraft
from notifications.schemas.payload import dump_payload

logger = structlog.get_logger(__name__)


class NotificationRepository:
    """Database access for Notification."""

    @staticmethod
    def create(
        owner_id: str, draft: NotificationDraft, created_at: datetime
    ) -> Notification:
        """Persist a notification built from ``draft``.

        Args:
            owner_id: Owner of the new notification
            draft: Classifier output
            created_at: Creation timestamp assigned by the dispatcher

        Returns:
            The saved Notification

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            return Notification.objects.create(
                owner_id=owner_id,
                type=draft.type,
                priority=draft.priority,
                title=draft.title,
                message=draft.message,
                payload=dump_payload(draft.payload),
                dedup_key=draft.dedup_key,
                created_at=created_at,
            )
        except DatabaseError as e:
            logger.error("notification_create_failed", owner_id=owner_id, error=str(e))
            raise PersistenceError("Failed to store notification") from e

    @staticmethod
    def list_by_owner(
        owner_id: str,
        page: int,
        limit: int,
        is_read: bool | None = None,
        type: str | None = None,
    ) -> tuple[list[Notification], int]:
        """Return one page of the owner's notifications plus the filtered total.

        Ordering is ``created_at`` descending with ``notification_id`` as the
        tie breaker, so pages never overlap or skip rows between requests
        that do not mutate the list.
        """
        queryset = Notification.objects.filter(owner_id=owner_id)
        if is_read is not None:
            queryset = queryset.filter(is_read=is_read)
        if type is not None:
            queryset = queryset.filter(type=type)
        queryset = queryset.order_by("-created_at", "-notification_id")

        offset = (page - 1) * limit
        try:
            total = queryset.count()
            items = list(queryset[offset : offset + limit])
        except DatabaseError as e:
            raise PersistenceError("Failed to load notifications") from e
        return items, total

    @staticmethod
    def count_unread(owner_id: str) -> int:
        try:
            return Notification.objects.filter(owner_id=owner_id, is_read=False).count()
        except DatabaseError as e:
            raise PersistenceError("Failed to count unread notifications") from e

    @staticmethod
    def exists_recent(owner_id: str, dedup_key: str, since: datetime) -> bool:
        """Return True if the owner has a notification with ``dedup_key`` newer than ``since``."""
        try:
            return Notification.objects.filter(
                owner_id=owner_id, dedup_key=dedup_key, created_at__gte=since
            ).exists()
        except DatabaseError as e:
            raise PersistenceError("Failed to check for duplicate notifications") from e

    @staticmethod
    def mark_read(
        owner_id: str,
        notification_ids: list[UUID] | None = None,
        mark_all: bool = False,
        now: datetime | None = None,
    ) -> int:
        """Mark notifications as read.

        Already-read notifications keep their original ``read_at``. Ids that
        do not exist are ignored.

        Args:
            owner_id: Requesting user
            notification_ids: Ids to mark; ignored when ``mark_all`` is set
            mark_all: Mark every unread notification of the owner
            now: Timestamp written to ``read_at``

        Returns:
            Number of notifications that flipped from unread to read

        Raises:
            AuthorizationError: If any id belongs to another owner (nothing changes)
            PersistenceError: If the update fails
        """
        now = now or timezone.now()
        try:
            with transaction.atomic():
                queryset = Notification.objects.filter(owner_id=owner_id, is_read=False)
                if not mark_all:
                    NotificationRepository._ensure_owned(owner_id, notification_ids or [])
                    queryset = queryset.filter(notification_id__in=notification_ids or [])
                changed = queryset.update(is_read=True, read_at=now)
        except DatabaseError as e:
            raise PersistenceError("Failed to mark notifications as read") from e

        logger.info(
            "notifications_marked_read",
            owner_id=owner_id,
            mark_all=mark_all,
            changed=changed,
        )
        return changed

    @staticmethod
    def delete(
        owner_id: str,
        notification_ids: list[UUID] | None = None,
        delete_all: bool = False,
    ) -> int:
        """Hard-delete notifications.

        Returns:
            Number of rows removed

        Raises:
            AuthorizationError: If any id belongs to another owner (nothing changes)
            PersistenceError: If the delete fails
        """
        try:
            with transaction.atomic():
                queryset = Notification.objects.filter(owner_id=owner_id)
                if not delete_all:
                    NotificationRepository._ensure_owned(owner_id, notification_ids or [])
                    queryset = queryset.filter(notification_id__in=notification_ids or [])
                deleted, _ = queryset.delete()
        except DatabaseError as e:
            raise PersistenceError("Failed to delete notifications") from e

        logger.info(
            "notifications_deleted",
            owner_id=owner_id,
            delete_all=delete_all,
            deleted=deleted,
        )
        return deleted

    @staticmethod
    def _ensure_owned(owner_id: str, notification_ids: list[UUID]) -> None:
        foreign_ids = list(
            Notification.objects.filter(notification_id__in=notification_ids)
            .exclude(owner_id=owner_id)
            .values_list("notification_id", flat=True)
        )
        if foreign_ids:
            logger.warning(
                "cross_owner_access_denied",
                owner_id=owner_id,
                foreign_count=len(foreign_ids),
            )
            raise AuthorizationError(owner_id, [str(i) for i in foreign_ids])
