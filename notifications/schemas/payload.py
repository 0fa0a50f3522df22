"""Notification payload: a tagged union keyed by ``type``.

The payload tells the client where to navigate when a notification is
tapped. Optional fields are omitted from the wire form when unset.
"""

from datetime import date
from typing import Annotated, Literal

from pydantic import Field

from notifications.enums import CommunityAction
from notifications.schemas.base_schema_model import BaseSchemaModel


class PantryPayload(BaseSchemaModel):
    type: Literal["pantry"] = "pantry"
    item_name: str
    days_left: int | None = None
    item_id: str | None = None
    amount: str | None = None
    expiry_date: date | None = None
    stock_level: float | None = None


class GroceryPayload(BaseSchemaModel):
    type: Literal["grocery"] = "grocery"
    list_name: str
    days_left: int
    list_id: str | None = None
    deadline: date | None = None


class ChefPayload(BaseSchemaModel):
    type: Literal["chef"] = "chef"
    chef_name: str
    recipe_title: str | None = None
    course_title: str | None = None
    event_title: str | None = None
    start_time: str | None = None


class CommunityPayload(BaseSchemaModel):
    type: Literal["community"] = "community"
    actor_name: str
    post_title: str
    action: CommunityAction


class HealthPayload(BaseSchemaModel):
    type: Literal["health"] = "health"
    reminder_title: str
    detail: str | None = None


class PaymentPayload(BaseSchemaModel):
    type: Literal["payment"] = "payment"
    card_type: str
    last4: str
    days_left: int


class SubscriptionPayload(BaseSchemaModel):
    type: Literal["subscription"] = "subscription"
    plan: str
    days_left: int


class SystemPayload(BaseSchemaModel):
    type: Literal["system"] = "system"
    description: str


NotificationPayload = Annotated[
    PantryPayload
    | GroceryPayload
    | ChefPayload
    | CommunityPayload
    | HealthPayload
    | PaymentPayload
    | SubscriptionPayload
    | SystemPayload,
    Field(discriminator="type"),
]


def dump_payload(payload: NotificationPayload) -> dict:
    """Serialize a payload to its JSON wire form (camelCase, unset fields dropped)."""
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
