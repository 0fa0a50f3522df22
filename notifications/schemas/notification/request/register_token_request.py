"""Request schema for push token registration."""

from pydantic import Field

from notifications.schemas.base_schema_model import BaseSchemaModel


class RegisterTokenRequest(BaseSchemaModel):
    """Body of ``POST`` and ``DELETE /notifications/register-token``."""

    token: str = Field(
        ..., min_length=1, max_length=255, description="Device push token"
    )
