"""Unit tests for ExpiryCheckService."""

from unittest.mock import MagicMock

from notifications.models import Notification
from notifications.repositories import PreferenceRepository
from notifications.schemas.mealplan import GroceryItemDto, PantryItemDto
from notifications.services.dispatcher import DeliveryDispatcher
from notifications.services.expiry_check_service import ExpiryCheckService
from notifications.services.unread_counter import UnreadCounter
from tests.base import BaseUnitTest


def _pantry_item(item_id, name, days, quantity=None, unit=None):
    return PantryItemDto(
        id=item_id,
        name=name,
        days_until_expiry=days,
        quantity=quantity,
        unit=unit,
    )


class TestExpiryCheckService(BaseUnitTest):
    def setUp(self):
        super().setUp()
        self.client = MagicMock()
        dispatcher = DeliveryDispatcher(counter=UnreadCounter())
        self.service = ExpiryCheckService(client=self.client, dispatcher=dispatcher)

    def test_pantry_check_notifies_items_inside_lookahead(self):
        self.client.get_pantry_items.return_value = [
            _pantry_item("p1", "Milk", 0, quantity=1, unit="l"),
            _pantry_item("p2", "Eggs", 3),
            _pantry_item("p3", "Rice", 40),
        ]

        created = self.service.check_pantry(self.owner_id)

        self.assertEqual(created, 2)
        stored = Notification.objects.filter(owner_id=self.owner_id)
        self.assertEqual(
            sorted(stored.values_list("priority", flat=True)), ["medium", "urgent"]
        )
        milk = stored.get(payload__itemId="p1")
        self.assertEqual(milk.payload["amount"], "1 l")

    def test_repeated_pantry_check_does_not_duplicate(self):
        self.client.get_pantry_items.return_value = [_pantry_item("p1", "Milk", 1)]

        self.assertEqual(self.service.check_pantry(self.owner_id), 1)
        self.assertEqual(self.service.check_pantry(self.owner_id), 0)
        self.assertEqual(Notification.objects.filter(owner_id=self.owner_id).count(), 1)

    def test_pantry_check_respects_preferences(self):
        PreferenceRepository.update(self.owner_id, {"pantry_expiry": False})
        self.client.get_pantry_items.return_value = [_pantry_item("p1", "Milk", 1)]

        self.assertEqual(self.service.check_pantry(self.owner_id), 0)

    def test_grocery_check_skips_purchased_and_far_items(self):
        self.client.get_grocery_items.return_value = [
            GroceryItemDto(id="g1", name="Weekly shop", days_until_purchase=1),
            GroceryItemDto(
                id="g2", name="Party", days_until_purchase=0, is_purchased=True
            ),
            GroceryItemDto(id="g3", name="Holiday", days_until_purchase=20),
        ]

        created = self.service.check_grocery(self.owner_id)

        self.assertEqual(created, 1)
        notification = Notification.objects.get(owner_id=self.owner_id)
        self.assertEqual(notification.type, "grocery")
        self.assertEqual(notification.payload["listId"], "g1")
