"""Pantry item as returned by the meal-planning backend."""

from datetime import datetime

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class PantryItemDto(BaseSchemaModel):
    id: str
    name: str = Field(..., min_length=1)
    quantity: float | None = None
    unit: str | None = None
    expiry_date: datetime | None = None
    days_until_expiry: int
    expiry_status: str | None = Field(None, description="active, expiring or expired")

    @property
    def amount(self) -> str | None:
        """Human readable quantity, e.g. ``500 ml``."""
        if self.quantity is None:
            return None
        return f"{self.quantity:g} {self.unit}".strip() if self.unit else f"{self.quantity:g}"
