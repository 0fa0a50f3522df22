"""WSGI config for the meal-planning notification service."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mealplan_notifications.settings")

application = get_wsgi_application()
