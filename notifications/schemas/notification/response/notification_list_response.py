"""Schema for the paginated notification list."""

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel
from notifications.schemas.notification.response.notification_item import (
    NotificationItem,
)


class NotificationListResponse(BaseSchemaModel):
    """Response of ``GET /notifications``."""

    success: bool = True
    notifications: list[NotificationItem] = Field(
        ..., description="Notifications on this page, newest first"
    )
    unread_count: int = Field(..., ge=0, description="Unread notifications overall")
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0, description="Total notifications matching filters")
    has_more: bool = Field(..., description="Whether a further page exists")
