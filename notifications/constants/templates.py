"""Title and message templates for every notification variant.

Keys are ``<event kind>`` or ``<event kind>.<variant>``; the classifier picks
the variant and supplies the format parameters. Rendering is pure string
formatting so the same event always produces the same text.
"""

NOTIFICATION_TEMPLATES: dict[str, dict[str, str]] = {
    # Pantry events
    "pantry_expiry.expired": {
        "title": "Item Expired",
        "message": "{item_name} expired {days} {day_unit} ago",
    },
    "pantry_expiry.today": {
        "title": "Item Expires Today",
        "message": "{item_name} expires today",
    },
    "pantry_expiry.soon": {
        "title": "Items Expiring Soon",
        "message": "{item_name} expires in {days} {day_unit}",
    },
    "pantry_low_stock": {
        "title": "Low Stock Alert",
        "message": "{item_name} is running low",
    },
    "pantry_low_stock.amount": {
        "title": "Low Stock Alert",
        "message": "{item_name} ({amount}) needs to be refilled",
    },
    # Grocery events
    "grocery_deadline.expired": {
        "title": "Grocery List Overdue",
        "message": "{list_name} was due {days} {day_unit} ago",
    },
    "grocery_deadline.today": {
        "title": "Grocery Run Due Today",
        "message": "{list_name} is due today",
    },
    "grocery_deadline.soon": {
        "title": "Grocery Deadline Approaching",
        "message": "{list_name} is due in {days} {day_unit}",
    },
    # Chef events
    "chef_recipe": {
        "title": "New Recipe from {chef_name}",
        "message": "{chef_name} shared a new recipe: {recipe_title}",
    },
    "chef_course": {
        "title": "New Course from {chef_name}",
        "message": "{chef_name} published a new course: {course_title}",
    },
    "chef_live_session": {
        "title": "Chef Live Session",
        "message": "{chef_name} is going live: {event_title}",
    },
    "chef_live_session.start_time": {
        "title": "Chef Live Session",
        "message": "{chef_name} is going live at {start_time}: {event_title}",
    },
    # Community events
    "community_activity.like": {
        "title": "New Like on Your Post",
        "message": "{actor_name} liked your {post_title} post",
    },
    "community_activity.comment": {
        "title": "New Comment",
        "message": "{actor_name} commented on your {post_title} post",
    },
    "community_activity.reply": {
        "title": "Reply to Your Comment",
        "message": "{actor_name} replied to your comment on {post_title}",
    },
    # Health events
    "health_reminder": {
        "title": "Health Reminder",
        "message": "{reminder_title}",
    },
    "health_reminder.detail": {
        "title": "Health Reminder",
        "message": "{reminder_title}: {detail}",
    },
    # Payment and subscription events
    "payment_card_expiry.expired": {
        "title": "Card Expired",
        "message": "Your {card_type} ending in {last4} has expired",
    },
    "payment_card_expiry.today": {
        "title": "Card Expires Today",
        "message": "Your {card_type} ending in {last4} expires today",
    },
    "payment_card_expiry.soon": {
        "title": "Card Expiring Soon",
        "message": "Your {card_type} ending in {last4} expires in {days} {day_unit}",
    },
    "subscription_expiry.expired": {
        "title": "{plan} Membership Ended",
        "message": "Your {plan} membership has expired",
    },
    "subscription_expiry.today": {
        "title": "{plan} Membership Ending",
        "message": "Your {plan} membership expires today",
    },
    "subscription_expiry.soon": {
        "title": "{plan} Membership Ending",
        "message": "Your {plan} membership expires in {days} {day_unit}",
    },
    # System events
    "system_alert": {
        "title": "{title}",
        "message": "{description}",
    },
    "test": {
        "title": "Test Notification",
        "message": "Push notifications are working on this device",
    },
}


def render_template(key: str, **params: object) -> tuple[str, str]:
    """Render the title and message for a template key.

    Args:
        key: Template key from NOTIFICATION_TEMPLATES.
        **params: Format parameters.

    Returns:
        Tuple of (title, message).

    Raises:
        KeyError: If the key is unknown or a parameter is missing.
    """
    template = NOTIFICATION_TEMPLATES[key]
    return template["title"].format(**params), template["message"].format(**params)
