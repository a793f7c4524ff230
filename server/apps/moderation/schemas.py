"""Request structs for announcements and administration."""

from pydantic import Field

from server.common.schemas import RequestSchema


class AnnouncementCreate(RequestSchema):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class AnnouncementUpdate(RequestSchema):
    id: int
    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)


class AnnouncementRef(RequestSchema):
    id: int


class AnnouncementPage(RequestSchema):
    limit: int = Field(20, ge=1, le=200)
    offset: int = Field(0, ge=0)


class UserRef(RequestSchema):
    user_id: int
