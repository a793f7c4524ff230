"""Business logic for file share links."""

import logging
import secrets
import string
from datetime import UTC, datetime
from typing import Final

from django.conf import settings
from django.utils import timezone

from server.apps.accounts.models import User
from server.apps.circles.logic.access import require_membership
from server.apps.circles.models import FileShareLink
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import BadRequestError, ForbiddenError, NotFoundError

_TOKEN_ALPHABET: Final = string.ascii_letters + string.digits + '-_'

logger = logging.getLogger(__name__)


def generate_share_token() -> str:
    """Generate a URL-safe share token.

    Returns:
        Token of ``CIRCLES_SHARE_TOKEN_LENGTH`` characters.
    """
    length = settings.CIRCLES_SHARE_TOKEN_LENGTH
    return ''.join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))


def create_share_link(
    circles: CircleRepository,
    user: User,
    file_id: int,
    expires_at: datetime | None = None,
) -> FileShareLink:
    """Create a share link for a file of one of the caller's circles.

    Args:
        circles: Circle repository.
        user: Caller, must be a member of the file's circle.
        file_id: File ID.
        expires_at: Optional expiry; naive values are taken as UTC.

    Returns:
        Created link.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not a member.
    """
    file_instance = circles.get_file(file_id)
    if file_instance is None:
        raise NotFoundError('File not found')
    require_membership(circles, file_instance.circle_id, user)

    if expires_at is not None and timezone.is_naive(expires_at):
        expires_at = timezone.make_aware(expires_at, UTC)

    link = circles.create_share_link(
        file_id=file_id,
        token=generate_share_token(),
        created_by_id=user.id,
        expires_at=expires_at,
    )
    logger.info('Share link created: ID=%d for file %d', link.id, file_id)
    return link


def resolve_share_link(circles: CircleRepository, token: str) -> FileShareLink:
    """Resolve a token to a live link; the file is preloaded.

    Raises:
        NotFoundError: If the token is unknown.
        BadRequestError: If the link has expired.
    """
    link = circles.get_share_link_by_token(token)
    if link is None:
        raise NotFoundError('Share link not found')
    if link.is_expired():
        raise BadRequestError('Share link has expired')
    return link


def register_download(circles: CircleRepository, token: str) -> FileShareLink:
    """Resolve a link for download and count the download.

    Raises:
        NotFoundError: If the token is unknown.
        BadRequestError: If the link has expired.
    """
    link = resolve_share_link(circles, token)
    circles.increment_download_count(link.id)
    logger.info('Share link download: ID=%d file=%d', link.id, link.file_id)
    return link


def delete_share_link(circles: CircleRepository, user: User, link_id: int) -> None:
    """Delete a link created by the caller or in a circle the caller owns.

    Raises:
        NotFoundError: If the link does not exist.
        ForbiddenError: If the caller is neither creator nor owner.
    """
    link = circles.get_share_link(link_id)
    if link is None:
        raise NotFoundError('Share link not found')

    if link.created_by_id != user.id:
        member = circles.get_member(link.file.circle_id, user.id)
        if member is None or not member.is_owner:
            logger.warning(
                'Denied share link delete: user=%d link=%d',
                user.id,
                link_id,
            )
            raise ForbiddenError('Only link creator or circle owner can delete')

    circles.delete_share_link(link_id)
    logger.info('Share link deleted: ID=%d', link_id)


def find_expired_links(
    circles: CircleRepository,
    batch_size: int,
) -> list[FileShareLink]:
    """Links whose expiry is already in the past, oldest first."""
    return circles.list_expired_share_links(timezone.now(), batch_size)
