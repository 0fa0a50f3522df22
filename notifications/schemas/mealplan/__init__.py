"""Schemas for data owned by the meal-planning backend."""

from notifications.schemas.mealplan.grocery_item import GroceryItemDto
from notifications.schemas.mealplan.pantry_item import PantryItemDto

__all__ = ["GroceryItemDto", "PantryItemDto"]
