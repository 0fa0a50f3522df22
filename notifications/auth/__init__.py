"""Authentication for the notification service API."""

from notifications.auth.oauth2 import OAuth2Authentication, OAuth2User

__all__ = ["OAuth2Authentication", "OAuth2User"]
