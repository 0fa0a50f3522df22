"""Request schema for publishing a domain event."""

from typing import Any

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class PublishEventRequest(BaseSchemaModel):
    """Body of ``POST /notifications/events``.

    ``context`` is validated by the classifier against the schema of ``kind``.
    """

    owner_id: str = Field(..., min_length=1, description="Recipient user id")
    kind: str = Field(..., min_length=1, description="Domain event kind")
    context: dict[str, Any] = Field(default_factory=dict)
