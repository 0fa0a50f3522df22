"""Repositories encapsulating database access for the notifications app."""

from notifications.repositories.notification_repository import NotificationRepository
from notifications.repositories.preference_repository import (
    PREFERENCE_FIELD_BY_KIND,
    PreferenceRepository,
)
from notifications.repositories.push_token_repository import PushTokenRepository

__all__ = [
    "PREFERENCE_FIELD_BY_KIND",
    "NotificationRepository",
    "PreferenceRepository",
    "PushTokenRepository",
]
