"""Repository for per-user notification preferences."""

from datetime import datetime, time
from zoneinfo import ZoneInfo

from django.db import DatabaseError, transaction

import structlog

from notifications.enums import EventKind
from notifications.exceptions import PersistenceError
from notifications.models import NotificationPreferences

logger = structlog.get_logger(__name__)

# Event kinds without an entry are gated by the master switch only.
PREFERENCE_FIELD_BY_KIND: dict[str, str] = {
    EventKind.PANTRY_EXPIRY.value: "pantry_expiry",
    EventKind.PANTRY_LOW_STOCK.value: "pantry_expiry",
    EventKind.GROCERY_DEADLINE.value: "grocery_deadline",
    EventKind.CHEF_RECIPE.value: "chef_recipes",
    EventKind.CHEF_COURSE.value: "chef_courses",
    EventKind.CHEF_LIVE_SESSION.value: "chef_courses",
    EventKind.COMMUNITY_ACTIVITY.value: "community_activity",
    EventKind.HEALTH_REMINDER.value: "health_reminders",
}


def _parse_hh_mm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


class PreferenceRepository:
    """Database access and policy checks for NotificationPreferences."""

    @staticmethod
    def get_or_create(owner_id: str) -> NotificationPreferences:
        """Return the owner's preferences, creating the defaults on first access."""
        try:
            preferences, created = NotificationPreferences.objects.get_or_create(
                owner_id=owner_id
            )
        except DatabaseError as e:
            raise PersistenceError("Failed to load notification preferences") from e
        if created:
            logger.info("preferences_created", owner_id=owner_id)
        return preferences

    @staticmethod
    def update(owner_id: str, changes: dict[str, object]) -> NotificationPreferences:
        """Apply a partial update atomically.

        Args:
            owner_id: Owner of the preferences
            changes: Model field names mapped to their new values

        Returns:
            The updated preferences

        Raises:
            PersistenceError: If the update fails (no field is changed)
        """
        try:
            with transaction.atomic():
                preferences, _ = (
                    NotificationPreferences.objects.select_for_update().get_or_create(
                        owner_id=owner_id
                    )
                )
                for field, value in changes.items():
                    setattr(preferences, field, value)
                preferences.save()
        except DatabaseError as e:
            raise PersistenceError("Failed to update notification preferences") from e

        logger.info(
            "preferences_updated", owner_id=owner_id, fields=sorted(changes.keys())
        )
        return preferences

    @staticmethod
    def category_enabled(preferences: NotificationPreferences, kind: str) -> bool:
        """Return whether an event of ``kind`` may produce a notification at all."""
        if not preferences.enabled:
            return False
        field = PREFERENCE_FIELD_BY_KIND.get(kind)
        if field is None:
            return True
        return bool(getattr(preferences, field))

    @staticmethod
    def in_quiet_hours(preferences: NotificationPreferences, now: datetime) -> bool:
        """Return whether ``now`` falls inside the owner's quiet window.

        The window is ``[start, end)`` in the owner's local time and wraps
        across midnight when ``start > end`` (e.g. 22:00 to 07:00). A missing
        bound or ``start == end`` means there is no quiet window.
        """
        start_value = preferences.quiet_hours_start
        end_value = preferences.quiet_hours_end
        if not start_value or not end_value or start_value == end_value:
            return False

        start = _parse_hh_mm(start_value)
        end = _parse_hh_mm(end_value)
        local_now = now.astimezone(ZoneInfo(preferences.timezone)).time()

        if start < end:
            return start <= local_now < end
        return local_now >= start or local_now < end
