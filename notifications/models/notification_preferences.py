"""Per-user notification delivery preferences."""

from typing import ClassVar

from django.conf import settings
from django.db import models


def default_timezone() -> str:
    """Return the configured default timezone for new preference records."""
    return settings.NOTIFICATION_DEFAULT_TIMEZONE


class NotificationPreferences(models.Model):
    """Delivery preferences for one user.

    Created with defaults on first fetch and only ever partially updated.
    Quiet hours are wall-clock ``HH:MM`` strings evaluated in ``timezone``;
    the window may wrap across midnight.
    """

    CATEGORY_FIELDS: ClassVar[tuple[str, ...]] = (
        "pantry_expiry",
        "grocery_deadline",
        "chef_recipes",
        "chef_courses",
        "community_activity",
        "health_reminders",
    )

    owner_id = models.CharField(
        max_length=128,
        unique=True,
        help_text="Identity-provider subject of the user",
    )
    enabled = models.BooleanField(default=True, help_text="Master on/off switch")
    pantry_expiry = models.BooleanField(default=True)
    grocery_deadline = models.BooleanField(default=True)
    chef_recipes = models.BooleanField(default=True)
    chef_courses = models.BooleanField(default=True)
    community_activity = models.BooleanField(default=True)
    health_reminders = models.BooleanField(default=True)
    quiet_hours_start = models.CharField(
        max_length=5,
        null=True,
        blank=True,
        help_text="Start of the quiet window (HH:MM, local time)",
    )
    quiet_hours_end = models.CharField(
        max_length=5,
        null=True,
        blank=True,
        help_text="End of the quiet window (HH:MM, local time)",
    )
    timezone = models.CharField(
        max_length=64,
        default=default_timezone,
        help_text="IANA timezone used to evaluate quiet hours",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_preferences"
        verbose_name_plural = "notification preferences"

    def __str__(self) -> str:
        """Return string representation of the preferences."""
        return f"Notification preferences for user {self.owner_id}"
