"""Background jobs for push delivery, one job per device token."""

from datetime import timedelta

from django.conf import settings
from django.utils import timezone

import django_rq
import structlog

from notifications.exceptions import (
    PermanentDeliveryError,
    PersistenceError,
    TransientDeliveryError,
)
from notifications.models import Notification
from notifications.repositories import PushTokenRepository
from notifications.services.push_gateway import build_push_message, push_gateway
from notifications.services.unread_counter import unread_counter

logger = structlog.get_logger(__name__)

QUEUE_NAME = "default"


def enqueue_push(notification_id: str, token: str) -> str:
    """Queue one push send and return the RQ job id."""
    job = django_rq.get_queue(QUEUE_NAME).enqueue(send_push_job, notification_id, token)
    return job.id


def send_push_job(notification_id: str, token: str, attempt: int = 1) -> str | None:
    """Send one stored notification to one device token.

    Executed by RQ workers. Transient failures are rescheduled with
    exponential backoff until ``PUSH_MAX_ATTEMPTS`` is reached; a token the
    gateway reports as unregistered is pruned.

    Args:
        notification_id: Stored notification to send
        token: Device push token
        attempt: 1 for the first send, incremented on each retry

    Returns:
        The gateway ticket id, or None if nothing was delivered
    """
    token_prefix = token[:24]
    try:
        notification = Notification.objects.get(notification_id=notification_id)
    except Notification.DoesNotExist:
        logger.info(
            "push_skipped_notification_gone",
            notification_id=notification_id,
            token_prefix=token_prefix,
        )
        return None

    owner_id = notification.owner_id
    if not PushTokenRepository.is_registered(owner_id, token):
        logger.info(
            "push_skipped_token_gone",
            notification_id=notification_id,
            token_prefix=token_prefix,
        )
        return None

    message = build_push_message(token, notification, unread_counter.cached(owner_id))

    try:
        ticket = push_gateway.send(message)
    except PermanentDeliveryError as e:
        logger.warning(
            "push_token_invalid",
            notification_id=notification_id,
            token_prefix=token_prefix,
            error=str(e),
        )
        _prune_token(token)
        return None
    except TransientDeliveryError as e:
        _schedule_retry(notification_id, token, attempt, e)
        return None

    _record_delivery(token)
    logger.info(
        "push_sent",
        notification_id=notification_id,
        token_prefix=token_prefix,
        attempt=attempt,
    )
    return ticket


def _schedule_retry(
    notification_id: str, token: str, attempt: int, error: TransientDeliveryError
) -> None:
    if attempt >= settings.PUSH_MAX_ATTEMPTS:
        logger.error(
            "push_send_failed_permanently",
            notification_id=notification_id,
            token_prefix=token[:24],
            attempts=attempt,
            error=str(error),
        )
        return

    delay_seconds = settings.PUSH_RETRY_BASE_SECONDS * (2 ** (attempt - 1))
    scheduler = django_rq.get_scheduler(QUEUE_NAME)
    scheduler.enqueue_in(
        timedelta(seconds=delay_seconds),
        send_push_job,
        notification_id,
        token,
        attempt + 1,
    )
    logger.warning(
        "push_send_failed_retry_scheduled",
        notification_id=notification_id,
        token_prefix=token[:24],
        attempt=attempt,
        delay_seconds=delay_seconds,
        error=str(error),
    )


def _prune_token(token: str) -> None:
    try:
        PushTokenRepository.remove(token)
    except PersistenceError as e:
        logger.error("push_token_prune_failed", token_prefix=token[:24], error=str(e))


def _record_delivery(token: str) -> None:
    try:
        PushTokenRepository.touch(token, timezone.now())
    except PersistenceError as e:
        logger.warning("push_token_touch_failed", token_prefix=token[:24], error=str(e))
