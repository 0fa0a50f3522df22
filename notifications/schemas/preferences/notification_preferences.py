"""Schema for a user's notification preferences."""

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class NotificationPreferencesSchema(BaseSchemaModel):
    """Wire form of NotificationPreferences (camelCase keys)."""

    enabled: bool = Field(..., description="Master switch")
    pantry_expiry: bool
    grocery_deadline: bool
    chef_recipes: bool
    chef_courses: bool
    community_activity: bool
    health_reminders: bool
    quiet_hours_start: str | None = Field(None, description="HH:MM, local time")
    quiet_hours_end: str | None = Field(None, description="HH:MM, local time")
    timezone: str = Field(..., description="IANA timezone for quiet hours")
