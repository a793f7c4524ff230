"""Base class for request structs validated at the API boundary."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestSchema(BaseModel):
    """Request struct with camelCase wire names and snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )


class Pagination(RequestSchema):
    """Limit/offset window for list queries."""

    limit: int = Field(50, ge=1, le=200)
    offset: int = Field(0, ge=0)
