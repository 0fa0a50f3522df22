"""Classifier output: a fully built notification awaiting dispatch."""

from pydantic import Field

from notifications.enums import EventKind, NotificationPriority, NotificationType
from notifications.schemas.base_schema_model import BaseSchemaModel
from notifications.schemas.payload import NotificationPayload


class NotificationDraft(BaseSchemaModel):
    """Everything needed to persist and push a notification.

    Drafts carry no id or timestamp; the dispatcher assigns both when it
    persists the notification. ``kind`` is kept so the dispatcher can
    re-check the exact preference toggle the event falls under.
    """

    kind: EventKind = Field(..., description="Domain event kind the draft came from")
    type: NotificationType = Field(..., description="Notification category")
    priority: NotificationPriority = Field(..., description="Delivery priority")
    title: str = Field(..., min_length=1, description="Rendered display title")
    message: str = Field(..., min_length=1, description="Rendered display message")
    payload: NotificationPayload = Field(..., description="Navigation payload")
    dedup_key: str | None = Field(
        None, description="Key identifying duplicates of the same event"
    )
