"""Preference schemas."""

from notifications.schemas.preferences.notification_preferences import (
    NotificationPreferencesSchema,
)
from notifications.schemas.preferences.preferences_update_request import (
    PreferencesUpdateRequest,
)

__all__ = ["NotificationPreferencesSchema", "PreferencesUpdateRequest"]
