"""Request structs for circles, files, folders, sharing and categories."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from server.common.schemas import RequestSchema

_EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


class CircleCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    is_public: bool = True


class CircleRef(RequestSchema):
    circle_id: int


class CircleUpdate(RequestSchema):
    circle_id: int
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class InvitationCodeRef(RequestSchema):
    code: str = Field(min_length=1, max_length=64)


class MemberAdd(RequestSchema):
    circle_id: int
    user_email: str = Field(pattern=_EMAIL_PATTERN, max_length=320)


class MemberRemove(RequestSchema):
    circle_id: int
    user_id: int


class FileUpload(RequestSchema):
    """Upload payload; ``file_data`` carries the bytes base64-encoded."""

    circle_id: int
    filename: str = Field(min_length=1, max_length=500)
    file_data: str
    mime_type: str = Field(min_length=1, max_length=100)
    file_size: int = Field(ge=0)
    folder_id: int | None = None
    price: Decimal | None = Field(
        None,
        gt=0,
        max_digits=12,
        decimal_places=2,
    )


class FileRef(RequestSchema):
    file_id: int


class FolderCreate(RequestSchema):
    circle_id: int
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class FolderRename(RequestSchema):
    folder_id: int
    name: str = Field(min_length=1, max_length=255)


class FolderRef(RequestSchema):
    folder_id: int


class SearchQuery(RequestSchema):
    query: str = Field(min_length=1)


class CategoryQuery(RequestSchema):
    category: str = Field(min_length=1)


class ShareLinkCreate(RequestSchema):
    file_id: int
    expires_at: datetime | None = None


class ShareTokenRef(RequestSchema):
    token: str = Field(min_length=1, max_length=64)


class ShareLinkRef(RequestSchema):
    link_id: int


class ActivityQuery(RequestSchema):
    circle_id: int
    limit: int = Field(50, ge=1, le=200)


class CategoryChange(RequestSchema):
    circle_id: int
    category: str = Field(min_length=1, max_length=50)
