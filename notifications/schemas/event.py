"""Raw domain event schemas accepted by the classifier.

Every event is discriminated by ``kind``. Required strings must be non-blank
after whitespace stripping; anything else is rejected before a notification
is built.
"""

from datetime import date
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter

from notifications.enums import CommunityAction, NotificationPriority
from notifications.schemas.base_schema_model import BaseSchemaModel

NonBlankStr = Annotated[str, Field(min_length=1)]


class PantryExpiryEvent(BaseSchemaModel):
    """A pantry item is expired or close to its expiry date."""

    kind: Literal["pantry_expiry"]
    item_name: NonBlankStr
    days_left: int
    item_id: str | None = None
    amount: str | None = None
    expiry_date: date | None = None


class PantryLowStockEvent(BaseSchemaModel):
    kind: Literal["pantry_low_stock"]
    item_name: NonBlankStr
    item_id: str | None = None
    amount: str | None = None
    stock_level: float | None = None


class GroceryDeadlineEvent(BaseSchemaModel):
    """A grocery list is due soon or overdue."""

    kind: Literal["grocery_deadline"]
    list_name: NonBlankStr
    days_left: int
    list_id: str | None = None
    deadline: date | None = None


class ChefRecipeEvent(BaseSchemaModel):
    kind: Literal["chef_recipe"]
    chef_name: NonBlankStr
    recipe_title: NonBlankStr


class ChefCourseEvent(BaseSchemaModel):
    kind: Literal["chef_course"]
    chef_name: NonBlankStr
    course_title: NonBlankStr


class ChefLiveSessionEvent(BaseSchemaModel):
    kind: Literal["chef_live_session"]
    chef_name: NonBlankStr
    event_title: NonBlankStr
    start_time: str | None = None


class CommunityActivityEvent(BaseSchemaModel):
    """Someone liked, commented on, or replied to the owner's post."""

    kind: Literal["community_activity"]
    actor_name: NonBlankStr
    post_title: NonBlankStr
    action: CommunityAction


class HealthReminderEvent(BaseSchemaModel):
    kind: Literal["health_reminder"]
    reminder_title: NonBlankStr
    detail: str | None = None


class PaymentCardExpiryEvent(BaseSchemaModel):
    kind: Literal["payment_card_expiry"]
    card_type: NonBlankStr
    last4: Annotated[str, Field(pattern=r"^\d{4}$")]
    days_left: int


class SubscriptionExpiryEvent(BaseSchemaModel):
    kind: Literal["subscription_expiry"]
    plan: NonBlankStr
    days_left: int


class SystemAlertEvent(BaseSchemaModel):
    """Operator-issued announcement; may carry an explicit priority."""

    kind: Literal["system_alert"]
    title: NonBlankStr
    description: NonBlankStr
    priority: NotificationPriority | None = None


DomainEvent = Annotated[
    PantryExpiryEvent
    | PantryLowStockEvent
    | GroceryDeadlineEvent
    | ChefRecipeEvent
    | ChefCourseEvent
    | ChefLiveSessionEvent
    | CommunityActivityEvent
    | HealthReminderEvent
    | PaymentCardExpiryEvent
    | SubscriptionExpiryEvent
    | SystemAlertEvent,
    Field(discriminator="kind"),
]

domain_event_adapter: TypeAdapter[DomainEvent] = TypeAdapter(DomainEvent)
