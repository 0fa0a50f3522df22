"""Request schema for marking notifications as read."""

from uuid import UUID

from pydantic import Field, model_validator

from notifications.constants import MAX_BULK_IDS
from notifications.schemas.base_schema_model import BaseSchemaModel


class MarkReadRequest(BaseSchemaModel):
    """Body of ``PUT /notifications/mark-read``.

    Exactly one of ``notificationIds`` (1-100 ids) or ``markAll: true`` must
    be supplied.
    """

    notification_ids: list[UUID] | None = Field(
        None,
        min_length=1,
        max_length=MAX_BULK_IDS,
        description="Notification IDs to mark as read",
    )
    mark_all: bool = Field(False, description="Mark every notification as read")

    @model_validator(mode="after")
    def _require_target(self) -> "MarkReadRequest":
        if not self.mark_all and not self.notification_ids:
            raise ValueError("Provide notificationIds or set markAll to true")
        return self
