"""ASGI config for the meal-planning notification service."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mealplan_notifications.settings")

application = get_asgi_application()
