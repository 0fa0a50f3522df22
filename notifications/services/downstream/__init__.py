"""Clients for downstream services."""

from notifications.services.downstream.base_downstream_client import (
    BaseDownstreamClient,
)
from notifications.services.downstream.mealplan_client import MealPlanClient

__all__ = ["BaseDownstreamClient", "MealPlanClient"]
