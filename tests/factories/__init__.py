"""Test data builders backed by Faker."""

from datetime import timedelta

from django.utils import timezone

from faker import Faker

from notifications.models import Notification, PushToken

fake = Faker()


def make_notification(owner_id, **overrides):
    """Create a stored Notification with realistic defaults."""
    item_name = fake.word().capitalize()
    fields = {
        "owner_id": owner_id,
        "type": "pantry",
        "priority": "medium",
        "title": "Items Expiring Soon",
        "message": f"{item_name} expires in 3 days",
        "payload": {"type": "pantry", "itemName": item_name, "daysLeft": 3},
    }
    fields.update(overrides)
    return Notification.objects.create(**fields)


def make_notifications(owner_id, count, **overrides):
    """Create ``count`` notifications, one minute apart, oldest first."""
    start = timezone.now() - timedelta(minutes=count)
    return [
        make_notification(
            owner_id, created_at=start + timedelta(minutes=i), **overrides
        )
        for i in range(count)
    ]


def make_push_token(owner_id, token=None):
    return PushToken.objects.create(
        owner_id=owner_id,
        token=token or f"ExponentPushToken[{fake.pystr(min_chars=22, max_chars=22)}]",
    )
