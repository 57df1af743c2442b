from pydantic import BaseModel, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

# Whitespace is significant in these, so they are never treated as blank
VERBATIM_FIELDS = {"password"}


class CamelModel(BaseModel):
    """Base for API shapes: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class RequestModel(CamelModel):
    """Base for request bodies. Unknown fields are rejected and blank strings count as missing."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value, info: ValidationInfo):
        if info.field_name in VERBATIM_FIELDS:
            return value
        if isinstance(value, str) and not value.strip():
            return None
        return value


class MessageResponse(CamelModel):
    success: bool = True
    message: str
