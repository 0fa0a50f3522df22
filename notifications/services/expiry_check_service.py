"""Rechecks a user's pantry and grocery items and raises due notifications."""

from django.conf import settings

import structlog

from notifications.enums import EventKind
from notifications.exceptions import ValidationError
from notifications.services.classifier import (
    NotificationClassifier,
    notification_classifier,
)
from notifications.services.dispatcher import DeliveryDispatcher, delivery_dispatcher
from notifications.services.downstream import MealPlanClient

logger = structlog.get_logger(__name__)


class ExpiryCheckService:
    """Turns near-expiry pantry items and due grocery items into notifications.

    Repeated checks are safe: the dispatcher drops an event whose dedup key
    was already notified within the dedup window, so an item only notifies
    again when its priority band changes.
    """

    def __init__(
        self,
        client: MealPlanClient | None = None,
        classifier: NotificationClassifier | None = None,
        dispatcher: DeliveryDispatcher | None = None,
    ) -> None:
        self._client = client
        self._classifier = classifier or notification_classifier
        self._dispatcher = dispatcher or delivery_dispatcher

    @property
    def client(self) -> MealPlanClient:
        if self._client is None:
            self._client = MealPlanClient()
        return self._client

    def check_pantry(self, owner_id: str) -> int:
        """Notify about pantry items expiring within the lookahead window.

        Returns:
            Number of notifications created
        """
        lookahead = settings.PANTRY_EXPIRY_LOOKAHEAD_DAYS
        items = [
            item
            for item in self.client.get_pantry_items(owner_id)
            if item.days_until_expiry <= lookahead
        ]
        created = 0
        for item in items:
            context = {
                "itemName": item.name,
                "itemId": item.id,
                "daysLeft": item.days_until_expiry,
                "amount": item.amount,
                "expiryDate": item.expiry_date.date() if item.expiry_date else None,
            }
            if self._emit(owner_id, EventKind.PANTRY_EXPIRY.value, context):
                created += 1

        logger.info(
            "pantry_check_completed",
            owner_id=owner_id,
            candidates=len(items),
            created=created,
        )
        return created

    def check_grocery(self, owner_id: str) -> int:
        """Notify about unpurchased grocery items due within the lookahead window.

        Returns:
            Number of notifications created
        """
        lookahead = settings.GROCERY_DEADLINE_LOOKAHEAD_DAYS
        items = [
            item
            for item in self.client.get_grocery_items(owner_id)
            if not item.is_purchased and item.days_until_purchase <= lookahead
        ]
        created = 0
        for item in items:
            context = {
                "listName": item.name,
                "listId": item.id,
                "daysLeft": item.days_until_purchase,
                "deadline": item.purchase_date.date() if item.purchase_date else None,
            }
            if self._emit(owner_id, EventKind.GROCERY_DEADLINE.value, context):
                created += 1

        logger.info(
            "grocery_check_completed",
            owner_id=owner_id,
            candidates=len(items),
            created=created,
        )
        return created

    def _emit(self, owner_id: str, kind: str, context: dict) -> bool:
        try:
            draft = self._classifier.classify(owner_id, kind, context)
        except ValidationError as e:
            # One malformed item must not stop the rest of the check.
            logger.warning(
                "expiry_item_skipped", owner_id=owner_id, kind=kind, errors=e.errors
            )
            return False
        if draft is None:
            return False
        return self._dispatcher.dispatch(owner_id, draft) is not None


expiry_check_service = ExpiryCheckService()
