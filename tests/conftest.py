"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mealplan_notifications.settings_test")
django.setup()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()
