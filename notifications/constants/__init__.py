"""Constants package for the notifications app."""

from notifications.constants.http import (
    ADMIN_SCOPE,
    DEFAULT_PAGE_SIZE,
    MAX_BULK_IDS,
    MAX_PAGE_SIZE,
    REQUEST_ID_HEADER,
    USER_SCOPE,
)
from notifications.constants.templates import NOTIFICATION_TEMPLATES, render_template

__all__ = [
    "ADMIN_SCOPE",
    "DEFAULT_PAGE_SIZE",
    "MAX_BULK_IDS",
    "MAX_PAGE_SIZE",
    "NOTIFICATION_TEMPLATES",
    "REQUEST_ID_HEADER",
    "USER_SCOPE",
    "render_template",
]
