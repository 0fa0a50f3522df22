"""Request schema for deleting notifications."""

from uuid import UUID

from pydantic import Field, model_validator

from notifications.constants import MAX_BULK_IDS
from notifications.schemas.base_schema_model import BaseSchemaModel


class NotificationDeleteRequest(BaseSchemaModel):
    """Body of ``DELETE /notifications``.

    Either ``notificationIds`` (1-100 ids) or ``deleteAll: true``.
    """

    notification_ids: list[UUID] | None = Field(
        None,
        min_length=1,
        max_length=MAX_BULK_IDS,
        description="Notification IDs to delete",
    )
    delete_all: bool = Field(False, description="Delete every notification")

    @model_validator(mode="after")
    def _require_target(self) -> "NotificationDeleteRequest":
        if not self.delete_all and not self.notification_ids:
            raise ValueError("Provide notificationIds or set deleteAll to true")
        return self
