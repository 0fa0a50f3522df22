"""Base pydantic model shared by every request, response and event schema."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base model with camelCase wire names.

    Fields are declared in snake_case and serialized with camelCase aliases
    (``model_dump(by_alias=True)``); either spelling is accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
