"""Django project package for the meal-planning notification service."""
