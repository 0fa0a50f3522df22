"""Delivery dispatcher: persists notifications and queues push sends.

In-app delivery (the stored record) always happens for an accepted draft.
Push delivery is best-effort: one independent RQ job per registered token,
so dispatch never waits on the gateway and a failed send never affects the
stored notification or the other sends.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from django.conf import settings
from django.utils import timezone

import structlog
from redis.exceptions import RedisError

from notifications.exceptions import PersistenceError
from notifications.jobs.push_jobs import enqueue_push
from notifications.models import Notification
from notifications.repositories import (
    NotificationRepository,
    PreferenceRepository,
    PushTokenRepository,
)
from notifications.schemas.notification import NotificationDraft
from notifications.services.classifier import build_test_draft
from notifications.services.unread_counter import UnreadCounter, unread_counter

logger = structlog.get_logger(__name__)


@dataclass
class FanOutReport:
    """Tokens a notification was queued for, and tokens that could not be queued."""

    queued: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class DeliveryDispatcher:
    """Turns drafts into stored notifications and push jobs."""

    def __init__(self, counter: UnreadCounter | None = None) -> None:
        self._counter = counter or unread_counter

    def dispatch(
        self, owner_id: str, draft: NotificationDraft, now: datetime | None = None
    ) -> Notification | None:
        """Deliver a classified draft to ``owner_id``.

        Args:
            owner_id: Recipient
            draft: Classifier output
            now: Creation time; defaults to the current time

        Returns:
            The stored notification, or None if it was gated or a duplicate

        Raises:
            PersistenceError: If the notification could not be stored
        """
        now = now or timezone.now()
        preferences = PreferenceRepository.get_or_create(owner_id)

        if not PreferenceRepository.category_enabled(preferences, draft.kind):
            logger.info(
                "notification_dropped_by_preferences",
                owner_id=owner_id,
                kind=draft.kind,
            )
            return None

        if draft.dedup_key and self._is_duplicate(owner_id, draft.dedup_key, now):
            logger.info(
                "notification_dropped_as_duplicate",
                owner_id=owner_id,
                dedup_key=draft.dedup_key,
            )
            return None

        notification = NotificationRepository.create(owner_id, draft, now)
        self._counter.recompute(owner_id)

        logger.info(
            "notification_created",
            owner_id=owner_id,
            notification_id=str(notification.notification_id),
            type=notification.type,
            priority=notification.priority,
        )

        if PreferenceRepository.in_quiet_hours(preferences, now):
            logger.info(
                "push_suppressed_quiet_hours",
                owner_id=owner_id,
                notification_id=str(notification.notification_id),
            )
            return notification

        self.fan_out(owner_id, notification)
        return notification

    def dispatch_test(self, owner_id: str, now: datetime | None = None) -> Notification:
        """Create and push a test notification, bypassing all preference gating."""
        now = now or timezone.now()
        notification = NotificationRepository.create(owner_id, build_test_draft(), now)
        self._counter.recompute(owner_id)
        logger.info(
            "test_notification_created",
            owner_id=owner_id,
            notification_id=str(notification.notification_id),
        )
        self.fan_out(owner_id, notification)
        return notification

    def fan_out(self, owner_id: str, notification: Notification) -> FanOutReport:
        """Queue one push job per registered token of ``owner_id``.

        Failures here are logged and reported; the stored notification is
        never affected.
        """
        report = FanOutReport()
        notification_id = str(notification.notification_id)
        try:
            tokens = PushTokenRepository.tokens_for(owner_id)
        except PersistenceError as e:
            logger.error(
                "push_tokens_unavailable",
                owner_id=owner_id,
                notification_id=notification_id,
                error=str(e),
            )
            return report

        if not tokens:
            logger.info("push_skipped_no_tokens", owner_id=owner_id)
            return report

        for token in tokens:
            try:
                enqueue_push(notification_id, token)
            except RedisError as e:
                logger.error(
                    "push_enqueue_failed",
                    notification_id=notification_id,
                    token_prefix=token[:24],
                    error=str(e),
                )
                report.failed.append(token)
            else:
                report.queued.append(token)

        logger.info(
            "push_fan_out_queued",
            owner_id=owner_id,
            notification_id=notification_id,
            tokens=len(tokens),
            queued=len(report.queued),
            failed=len(report.failed),
        )
        return report

    def _is_duplicate(self, owner_id: str, dedup_key: str, now: datetime) -> bool:
        since = now - timedelta(hours=settings.NOTIFICATION_DEDUP_WINDOW_HOURS)
        return NotificationRepository.exists_recent(owner_id, dedup_key, since)


delivery_dispatcher = DeliveryDispatcher()
