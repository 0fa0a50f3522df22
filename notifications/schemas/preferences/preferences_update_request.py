"""Request schema for partial preference updates."""

import re
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from notifications.schemas.base_schema_model import BaseSchemaModel

_HH_MM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class PreferencesUpdateRequest(BaseSchemaModel):
    """Body of ``PUT /notifications/preferences``.

    Every field is optional; only fields present in the body are applied.
    Sending ``null`` for a quiet-hours bound clears it.
    """

    enabled: bool | None = None
    pantry_expiry: bool | None = None
    grocery_deadline: bool | None = None
    chef_recipes: bool | None = None
    chef_courses: bool | None = None
    community_activity: bool | None = None
    health_reminders: bool | None = None
    quiet_hours_start: str | None = Field(None, description="HH:MM or null")
    quiet_hours_end: str | None = Field(None, description="HH:MM or null")
    timezone: str | None = Field(None, description="IANA timezone name")

    @field_validator("quiet_hours_start", "quiet_hours_end")
    @classmethod
    def _validate_hh_mm(cls, value: str | None) -> str | None:
        if value is not None and not _HH_MM.match(value):
            raise ValueError("must be a 24-hour time in HH:MM format")
        return value

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {value}") from e
        return value

    def changes(self) -> dict[str, object]:
        """Return the fields the caller actually sent, keyed by model field name.

        ``None`` is only meaningful for the quiet-hours bounds; for the other
        fields an explicit null is treated as "not sent".
        """
        sent = self.model_dump(exclude_unset=True)
        nullable = {"quiet_hours_start", "quiet_hours_end"}
        return {k: v for k, v in sent.items() if v is not None or k in nullable}
