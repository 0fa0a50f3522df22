"""Notification-related enumerations.

This module contains enums for notification categories, priorities,
and the raw domain event kinds accepted by the classifier.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Closed set of notification categories.

    The value is also used as the Android channel id on push delivery and as
    the discriminator of the notification payload.
    """

    PANTRY = "pantry"
    GROCERY = "grocery"
    CHEF = "chef"
    COMMUNITY = "community"
    HEALTH = "health"
    PAYMENT = "payment"
    SUBSCRIPTION = "subscription"
    SYSTEM = "system"


class NotificationPriority(str, Enum):
    """Notification priority, lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Return a sortable rank (0 = low, 3 = urgent)."""
        return list(NotificationPriority).index(self)


class EventKind(str, Enum):
    """Raw domain event kinds understood by the classifier."""

    PANTRY_EXPIRY = "pantry_expiry"
    PANTRY_LOW_STOCK = "pantry_low_stock"
    GROCERY_DEADLINE = "grocery_deadline"
    CHEF_RECIPE = "chef_recipe"
    CHEF_COURSE = "chef_course"
    CHEF_LIVE_SESSION = "chef_live_session"
    COMMUNITY_ACTIVITY = "community_activity"
    HEALTH_REMINDER = "health_reminder"
    PAYMENT_CARD_EXPIRY = "payment_card_expiry"
    SUBSCRIPTION_EXPIRY = "subscription_expiry"
    SYSTEM_ALERT = "system_alert"
    TEST = "test"


class CommunityAction(str, Enum):
    """Community interactions that produce a notification."""

    LIKE = "like"
    COMMENT = "comment"
    REPLY = "reply"
