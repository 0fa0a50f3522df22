"""Registered device push tokens."""

from typing import ClassVar

from django.db import models
from django.utils import timezone


class PushToken(models.Model):
    """Association between a user and a device's push address.

    A token is unique across the system; a user may own many tokens.
    """

    token = models.CharField(max_length=255, unique=True)
    owner_id = models.CharField(max_length=128, db_index=True)
    registered_at = models.DateTimeField(default=timezone.now)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "push_tokens"
        ordering: ClassVar[list[str]] = ["registered_at"]

    def __str__(self) -> str:
        """Return string representation of the token."""
        return f"{self.token[:24]}... for user {self.owner_id}"
