"""Grocery item as returned by the meal-planning backend."""

from datetime import datetime

from notifications.schemas.base_schema_model import BaseSchemaModel


class GroceryItemDto(BaseSchemaModel):
    id: str
    name: str
    purchase_date: datetime | None = None
    days_until_purchase: int
    is_purchased: bool = False
    purchase_status: str | None = None
