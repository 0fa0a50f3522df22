"""Schema for a single notification as returned to the client."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class NotificationItem(BaseSchemaModel):
    """Wire form of a stored notification."""

    notification_id: UUID = Field(..., description="Unique notification identifier")
    type: str = Field(..., description="Notification category")
    title: str = Field(..., description="Display title")
    message: str = Field(..., description="Display message")
    priority: str = Field(..., description="low, medium, high or urgent")
    payload: dict[str, Any] = Field(..., description="Navigation payload")
    is_read: bool = Field(..., description="Whether the notification has been read")
    read_at: datetime | None = Field(None, description="When it was read")
    created_at: datetime = Field(..., description="When it was created")
