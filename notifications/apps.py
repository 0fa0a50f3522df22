"""Django app configuration for notifications."""

from django.apps import AppConfig
from django.conf import settings


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notifications"

    def ready(self) -> None:
        if not getattr(settings, "TEST_MODE", False):
            from notifications.logging import setup_logging

            setup_logging()
