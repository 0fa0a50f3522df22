"""Client for the meal-planning backend's pantry and grocery APIs."""

from django.conf import settings

import requests
import structlog
from pydantic import ValidationError

from notifications.exceptions import DownstreamServiceError
from notifications.schemas.mealplan import GroceryItemDto, PantryItemDto
from notifications.services.downstream.base_downstream_client import (
    BaseDownstreamClient,
)

logger = structlog.get_logger(__name__)

OWNER_HEADER = "X-User-ID"


class MealPlanClient(BaseDownstreamClient):
    """Reads a user's pantry and grocery items.

    Calls are made with the service credential; the user is identified by
    the ``X-User-ID`` header.
    """

    def __init__(self, base_url: str | None = None, access_token: str | None = None):
        super().__init__(
            service_name="mealplan-api",
            base_url=base_url or settings.MEALPLAN_API_BASE_URL,
            access_token=access_token or settings.MEALPLAN_API_TOKEN,
        )

    def get_pantry_items(self, owner_id: str) -> list[PantryItemDto]:
        """Fetch all pantry items of ``owner_id``.

        Raises:
            DownstreamServiceError: For client errors or an unparseable body
            DownstreamServiceUnavailableError: If the backend is unavailable
        """
        response = self._make_request(
            "GET", "/pantry/items", headers={OWNER_HEADER: owner_id}
        )
        if response.status_code == 404:
            return []
        return self._parse_items(response, PantryItemDto, owner_id)

    def get_grocery_items(self, owner_id: str) -> list[GroceryItemDto]:
        """Fetch the pending grocery items of ``owner_id``."""
        response = self._make_request(
            "GET",
            "/grocery/items",
            params={"status": "pending"},
            headers={OWNER_HEADER: owner_id},
        )
        if response.status_code == 404:
            return []
        return self._parse_items(response, GroceryItemDto, owner_id)

    def _parse_items(
        self, response: requests.Response, model: type, owner_id: str
    ) -> list:
        try:
            body = response.json()
        except ValueError as e:
            raise DownstreamServiceError(
                message=f"{self.service_name} returned a non-JSON body",
                service_name=self.service_name,
                status_code=response.status_code,
            ) from e

        try:
            return [model.model_validate(item) for item in body.get("items", [])]
        except ValidationError as e:
            logger.error(
                "Failed to validate meal-planning response",
                owner_id=owner_id,
                model=model.__name__,
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            raise DownstreamServiceError(
                message=f"{self.service_name} returned malformed {model.__name__} data",
                service_name=self.service_name,
            ) from e
