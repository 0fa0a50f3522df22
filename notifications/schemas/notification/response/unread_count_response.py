"""Schema returned after a mutation that changes the unread count."""

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class UnreadCountResponse(BaseSchemaModel):
    success: bool = True
    unread_count: int = Field(..., ge=0, description="Unread count after the change")
