"""Notification model for user-facing alerts.

A Notification is created once by the delivery dispatcher, mutated only by
mark-read, and removed only by an explicit delete.
"""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from notifications.enums import NotificationPriority, NotificationType


class Notification(models.Model):
    """A persisted, typed, prioritized alert owned by a single user.

    Attributes:
        notification_id: Unique identifier, assigned at creation.
        owner_id: Identity-provider subject of the owning user.
        type: Notification category (pantry, grocery, chef, ...).
        title: Rendered display title.
        message: Rendered display message.
        priority: low, medium, high or urgent.
        payload: Tagged-union payload keyed by ``type`` for client navigation.
        dedup_key: Classifier-computed key used to drop duplicate events.
        is_read: Whether the owner has read this notification.
        read_at: When ``is_read`` flipped to true.
        created_at: When the notification was created.
    """

    notification_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    owner_id = models.CharField(
        max_length=128,
        editable=False,
        help_text="Identity-provider subject of the user owning the notification",
    )
    type = models.CharField(
        max_length=20,
        choices=[(t.value, t.value) for t in NotificationType],
        help_text="Notification category",
    )
    title = models.CharField(max_length=255, help_text="Display title")
    message = models.TextField(help_text="Display message")
    priority = models.CharField(
        max_length=10,
        choices=[(p.value, p.value) for p in NotificationPriority],
        default=NotificationPriority.LOW.value,
        help_text="Delivery and sort priority",
    )
    payload = models.JSONField(
        default=dict,
        blank=True,
        help_text="Structured data interpreted by the client for navigation",
    )
    dedup_key = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Key identifying duplicate events for the same subject",
    )
    is_read = models.BooleanField(
        default=False,
        help_text="Whether the notification has been read by the owner",
    )
    read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the notification was marked as read",
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        help_text="When the notification was created",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        ordering: ClassVar[list[str]] = ["-created_at", "-notification_id"]
        indexes: ClassVar[list] = [
            models.Index(
                fields=["owner_id", "-created_at", "-notification_id"],
                name="notif_owner_created_idx",
            ),
            models.Index(fields=["owner_id", "is_read"], name="notif_owner_unread_idx"),
            models.Index(
                fields=["owner_id", "dedup_key", "-created_at"],
                name="notif_owner_dedup_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.type} for user {self.owner_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.notification_id}, "
            f"type={self.type}, "
            f"owner={self.owner_id}, "
            f"is_read={self.is_read})>"
        )
