"""Turns raw domain events into notification drafts.

The classifier is deterministic: the same event and preferences always give
the same draft. It never reads the clock; due-based events already carry
``days_left`` relative to the caller's "today".
"""

from typing import Any

import pydantic
import structlog

from notifications.constants import render_template
from notifications.enums import EventKind, NotificationPriority, NotificationType
from notifications.exceptions import ValidationError
from notifications.repositories import PreferenceRepository
from notifications.schemas.event import (
    ChefCourseEvent,
    ChefLiveSessionEvent,
    ChefRecipeEvent,
    CommunityActivityEvent,
    DomainEvent,
    GroceryDeadlineEvent,
    HealthReminderEvent,
    PantryExpiryEvent,
    PantryLowStockEvent,
    PaymentCardExpiryEvent,
    SubscriptionExpiryEvent,
    SystemAlertEvent,
    domain_event_adapter,
)
from notifications.schemas.notification import NotificationDraft
from notifications.schemas.payload import (
    ChefPayload,
    CommunityPayload,
    GroceryPayload,
    HealthPayload,
    PantryPayload,
    PaymentPayload,
    SubscriptionPayload,
    SystemPayload,
)

logger = structlog.get_logger(__name__)


def priority_for_days_left(days_left: int) -> NotificationPriority:
    """Map days until a due date to a priority.

    Today or overdue is urgent, 1-2 days high, 3-7 days medium, later low.
    """
    if days_left <= 0:
        return NotificationPriority.URGENT
    if days_left <= 2:
        return NotificationPriority.HIGH
    if days_left <= 7:
        return NotificationPriority.MEDIUM
    return NotificationPriority.LOW


def _due_params(days_left: int) -> tuple[str, dict[str, Any]]:
    """Return the template variant and day parameters for a due-based event."""
    if days_left < 0:
        variant = "expired"
    elif days_left == 0:
        variant = "today"
    else:
        variant = "soon"
    days = abs(days_left)
    return variant, {"days": days, "day_unit": "day" if days == 1 else "days"}


class NotificationClassifier:
    """Validate events, apply preference gating, and build drafts."""

    def classify(
        self, owner_id: str, kind: str, context: dict[str, Any]
    ) -> NotificationDraft | None:
        """Build a draft for ``owner_id`` from a raw event.

        Args:
            owner_id: Recipient of the notification
            kind: Event kind (see EventKind)
            context: Event fields, camelCase or snake_case

        Returns:
            The draft, or None when the owner's preferences suppress it

        Raises:
            ValidationError: If the kind is unknown or the context is incomplete
        """
        event = self.parse_event(kind, context)

        preferences = PreferenceRepository.get_or_create(owner_id)
        if not PreferenceRepository.category_enabled(preferences, event.kind):
            logger.info("notification_suppressed", owner_id=owner_id, kind=event.kind)
            return None

        return self.build(event)

    def parse_event(self, kind: str, context: dict[str, Any]) -> DomainEvent:
        """Validate ``context`` against the schema registered for ``kind``.

        Raises:
            ValidationError: With the pydantic error list attached
        """
        if kind == EventKind.TEST.value:
            raise ValidationError("Test notifications are built by the dispatcher")
        try:
            return domain_event_adapter.validate_python({**context, "kind": kind})
        except pydantic.ValidationError as e:
            logger.warning(
                "event_validation_failed", kind=kind, error_count=e.error_count()
            )
            raise ValidationError(
                f"Invalid {kind} event",
                errors=e.errors(include_url=False, include_context=False),
            ) from e

    def build(self, event: DomainEvent) -> NotificationDraft:
        """Build the draft for an already validated event."""
        builder = getattr(self, f"_build_{event.kind}")
        return builder(event)

    def _build_pantry_expiry(self, event: PantryExpiryEvent) -> NotificationDraft:
        variant, params = _due_params(event.days_left)
        title, message = render_template(
            f"pantry_expiry.{variant}", item_name=event.item_name, **params
        )
        priority = priority_for_days_left(event.days_left)
        subject = event.item_id or event.item_name.lower()
        return NotificationDraft(
            kind=EventKind.PANTRY_EXPIRY,
            type=NotificationType.PANTRY,
            priority=priority,
            title=title,
            message=message,
            payload=PantryPayload(
                item_name=event.item_name,
                days_left=event.days_left,
                item_id=event.item_id,
                amount=event.amount,
                expiry_date=event.expiry_date,
            ),
            dedup_key=f"pantry_expiry:{subject}:{priority.value}",
        )

    def _build_pantry_low_stock(self, event: PantryLowStockEvent) -> NotificationDraft:
        if event.amount:
            title, message = render_template(
                "pantry_low_stock.amount", item_name=event.item_name, amount=event.amount
            )
        else:
            title, message = render_template("pantry_low_stock", item_name=event.item_name)
        subject = event.item_id or event.item_name.lower()
        return NotificationDraft(
            kind=EventKind.PANTRY_LOW_STOCK,
            type=NotificationType.PANTRY,
            priority=NotificationPriority.MEDIUM,
            title=title,
            message=message,
            payload=PantryPayload(
                item_name=event.item_name,
                item_id=event.item_id,
                amount=event.amount,
                stock_level=event.stock_level,
            ),
            dedup_key=f"pantry_low_stock:{subject}",
        )

    def _build_grocery_deadline(self, event: GroceryDeadlineEvent) -> NotificationDraft:
        variant, params = _due_params(event.days_left)
        title, message = render_template(
            f"grocery_deadline.{variant}", list_name=event.list_name, **params
        )
        priority = priority_for_days_left(event.days_left)
        subject = event.list_id or event.list_name.lower()
        return NotificationDraft(
            kind=EventKind.GROCERY_DEADLINE,
            type=NotificationType.GROCERY,
            priority=priority,
            title=title,
            message=message,
            payload=GroceryPayload(
                list_name=event.list_name,
                days_left=event.days_left,
                list_id=event.list_id,
                deadline=event.deadline,
            ),
            dedup_key=f"grocery_deadline:{subject}:{priority.value}",
        )

    def _build_chef_recipe(self, event: ChefRecipeEvent) -> NotificationDraft:
        title, message = render_template(
            "chef_recipe", chef_name=event.chef_name, recipe_title=event.recipe_title
        )
        return NotificationDraft(
            kind=EventKind.CHEF_RECIPE,
            type=NotificationType.CHEF,
            priority=NotificationPriority.LOW,
            title=title,
            message=message,
            payload=ChefPayload(chef_name=event.chef_name, recipe_title=event.recipe_title),
        )

    def _build_chef_course(self, event: ChefCourseEvent) -> NotificationDraft:
        title, message = render_template(
            "chef_course", chef_name=event.chef_name, course_title=event.course_title
        )
        return NotificationDraft(
            kind=EventKind.CHEF_COURSE,
            type=NotificationType.CHEF,
            priority=NotificationPriority.LOW,
            title=title,
            message=message,
            payload=ChefPayload(chef_name=event.chef_name, course_title=event.course_title),
        )

    def _build_chef_live_session(self, event: ChefLiveSessionEvent) -> NotificationDraft:
        key = "chef_live_session.start_time" if event.start_time else "chef_live_session"
        title, message = render_template(
            key,
            chef_name=event.chef_name,
            event_title=event.event_title,
            start_time=event.start_time,
        )
        return NotificationDraft(
            kind=EventKind.CHEF_LIVE_SESSION,
            type=NotificationType.CHEF,
            priority=NotificationPriority.HIGH,
            title=title,
            message=message,
            payload=ChefPayload(
                chef_name=event.chef_name,
                event_title=event.event_title,
                start_time=event.start_time,
            ),
        )

    def _build_community_activity(
        self, event: CommunityActivityEvent
    ) -> NotificationDraft:
        title, message = render_template(
            f"community_activity.{event.action}",
            actor_name=event.actor_name,
            post_title=event.post_title,
        )
        return NotificationDraft(
            kind=EventKind.COMMUNITY_ACTIVITY,
            type=NotificationType.COMMUNITY,
            priority=NotificationPriority.LOW,
            title=title,
            message=message,
            payload=CommunityPayload(
                actor_name=event.actor_name,
                post_title=event.post_title,
                action=event.action,
            ),
        )

    def _build_health_reminder(self, event: HealthReminderEvent) -> NotificationDraft:
        key = "health_reminder.detail" if event.detail else "health_reminder"
        title, message = render_template(
            key, reminder_title=event.reminder_title, detail=event.detail
        )
        return NotificationDraft(
            kind=EventKind.HEALTH_REMINDER,
            type=NotificationType.HEALTH,
            priority=NotificationPriority.LOW,
            title=title,
            message=message,
            payload=HealthPayload(reminder_title=event.reminder_title, detail=event.detail),
        )

    def _build_payment_card_expiry(
        self, event: PaymentCardExpiryEvent
    ) -> NotificationDraft:
        variant, params = _due_params(event.days_left)
        title, message = render_template(
            f"payment_card_expiry.{variant}",
            card_type=event.card_type,
            last4=event.last4,
            **params,
        )
        priority = priority_for_days_left(event.days_left)
        return NotificationDraft(
            kind=EventKind.PAYMENT_CARD_EXPIRY,
            type=NotificationType.PAYMENT,
            priority=priority,
            title=title,
            message=message,
            payload=PaymentPayload(
                card_type=event.card_type, last4=event.last4, days_left=event.days_left
            ),
            dedup_key=f"payment_card_expiry:{event.last4}:{priority.value}",
        )

    def _build_subscription_expiry(
        self, event: SubscriptionExpiryEvent
    ) -> NotificationDraft:
        variant, params = _due_params(event.days_left)
        title, message = render_template(
            f"subscription_expiry.{variant}", plan=event.plan, **params
        )
        priority = priority_for_days_left(event.days_left)
        return NotificationDraft(
            kind=EventKind.SUBSCRIPTION_EXPIRY,
            type=NotificationType.SUBSCRIPTION,
            priority=priority,
            title=title,
            message=message,
            payload=SubscriptionPayload(plan=event.plan, days_left=event.days_left),
            dedup_key=f"subscription_expiry:{event.plan.lower()}:{priority.value}",
        )

    def _build_system_alert(self, event: SystemAlertEvent) -> NotificationDraft:
        title, message = render_template(
            "system_alert", title=event.title, description=event.description
        )
        return NotificationDraft(
            kind=EventKind.SYSTEM_ALERT,
            type=NotificationType.SYSTEM,
            priority=event.priority or NotificationPriority.LOW,
            title=title,
            message=message,
            payload=SystemPayload(description=event.description),
        )


def build_test_draft() -> NotificationDraft:
    """Draft used by the QA test-notification path."""
    title, message = render_template("test")
    return NotificationDraft(
        kind=EventKind.TEST,
        type=NotificationType.SYSTEM,
        priority=NotificationPriority.LOW,
        title=title,
        message=message,
        payload=SystemPayload(description=message),
    )


notification_classifier = NotificationClassifier()
