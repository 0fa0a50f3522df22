"""Database models for the notifications app."""

from notifications.models.notification import Notification
from notifications.models.notification_preferences import NotificationPreferences
from notifications.models.push_token import PushToken

__all__ = ["Notification", "NotificationPreferences", "PushToken"]
