"""Repository for device push tokens."""

from datetime import datetime

from django.db import DatabaseError, transaction
from django.utils import timezone

import structlog

from notifications.exceptions import PersistenceError
from notifications.models import PushToken

logger = structlog.get_logger(__name__)


class PushTokenRepository:
    """Registry mapping users to the device tokens push is sent to."""

    @staticmethod
    def register(owner_id: str, token: str) -> PushToken:
        """Register ``token`` for ``owner_id``.

        A token already registered to another user is moved to this one, so a
        device that changes hands never receives the previous owner's alerts.

        Raises:
            PersistenceError: If the write fails
        """
        try:
            with transaction.atomic():
                existing = (
                    PushToken.objects.select_for_update().filter(token=token).first()
                )
                if existing is None:
                    push_token = PushToken.objects.create(owner_id=owner_id, token=token)
                    logger.info("push_token_registered", owner_id=owner_id)
                    return push_token

                if existing.owner_id != owner_id:
                    logger.info(
                        "push_token_reassociated",
                        owner_id=owner_id,
                        previous_owner_id=existing.owner_id,
                    )
                    existing.owner_id = owner_id
                    existing.registered_at = timezone.now()
                    existing.save(update_fields=["owner_id", "registered_at"])
                return existing
        except DatabaseError as e:
            raise PersistenceError("Failed to register push token") from e

    @staticmethod
    def unregister(owner_id: str, token: str) -> bool:
        """Remove ``token`` if it belongs to ``owner_id``. Returns whether a row was removed."""
        try:
            deleted, _ = PushToken.objects.filter(owner_id=owner_id, token=token).delete()
        except DatabaseError as e:
            raise PersistenceError("Failed to unregister push token") from e
        return deleted > 0

    @staticmethod
    def tokens_for(owner_id: str) -> list[str]:
        try:
            return list(
                PushToken.objects.filter(owner_id=owner_id).values_list(
                    "token", flat=True
                )
            )
        except DatabaseError as e:
            raise PersistenceError("Failed to load push tokens") from e

    @staticmethod
    def is_registered(owner_id: str, token: str) -> bool:
        try:
            return PushToken.objects.filter(owner_id=owner_id, token=token).exists()
        except DatabaseError as e:
            raise PersistenceError("Failed to load push tokens") from e

    @staticmethod
    def remove(token: str) -> None:
        """Drop a token the push gateway reported as permanently invalid."""
        try:
            PushToken.objects.filter(token=token).delete()
        except DatabaseError as e:
            raise PersistenceError("Failed to remove push token") from e
        logger.info("push_token_pruned", token_prefix=token[:24])

    @staticmethod
    def touch(token: str, when: datetime) -> None:
        try:
            PushToken.objects.filter(token=token).update(last_used_at=when)
        except DatabaseError as e:
            raise PersistenceError("Failed to update push token") from e
