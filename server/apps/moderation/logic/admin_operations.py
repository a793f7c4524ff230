"""Business logic for admin-only operations.

Every mutation writes its ``AdminLog`` row in the same transaction as
the change it records.
"""

import logging

from django.utils import timezone

from server.apps.accounts.models import User
from server.apps.accounts.repository import UserRepository
from server.apps.moderation.models import AdminLog, Announcement
from server.apps.moderation.repository import ModerationRepository
from server.common.exceptions import BadRequestError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def require_admin(user: User) -> None:
    """Fail with FORBIDDEN unless the caller has the admin role.

    Raises:
        ForbiddenError: If the caller is not an admin.
    """
    if not user.is_admin:
        logger.warning('Denied admin access: user=%d', user.id)
        raise ForbiddenError('Admin access required')


def _require_announcement(
    moderation: ModerationRepository,
    announcement_id: int,
) -> Announcement:
    announcement = moderation.get_announcement(announcement_id)
    if announcement is None:
        raise NotFoundError('Announcement not found')
    return announcement


def list_announcements(
    moderation: ModerationRepository,
    user: User,
    limit: int = 20,
    offset: int = 0,
) -> list[Announcement]:
    """All announcements including drafts."""
    require_admin(user)
    return moderation.list_announcements(limit, offset)


def list_published_announcements(
    moderation: ModerationRepository,
    limit: int = 20,
) -> list[Announcement]:
    """Published announcements; readable by anyone."""
    return moderation.list_published_announcements(limit)


def create_announcement(
    moderation: ModerationRepository,
    user: User,
    title: str,
    content: str,
) -> Announcement:
    """Create a draft announcement.

    Raises:
        ForbiddenError: If the caller is not an admin.
    """
    require_admin(user)
    with moderation.atomic():
        announcement = moderation.create_announcement(title, content, user.id)
        moderation.log_admin_action(
            user.id,
            AdminLog.Action.ANNOUNCEMENT_CREATED,
            details=f'Created announcement {announcement.id}',
        )
    logger.info('Announcement created: ID=%d by %d', announcement.id, user.id)
    return announcement


def update_announcement(
    moderation: ModerationRepository,
    user: User,
    announcement_id: int,
    changes: dict[str, str | None],
) -> Announcement:
    """Edit title and/or content of an announcement.

    Args:
        moderation: Moderation repository.
        user: Caller, must be an admin.
        announcement_id: Announcement ID.
        changes: Subset of ``title`` and ``content``; None keeps a value.

    Returns:
        Updated announcement.

    Raises:
        ForbiddenError: If the caller is not an admin.
        NotFoundError: If the announcement does not exist.
    """
    require_admin(user)
    announcement = _require_announcement(moderation, announcement_id)
    values: dict[str, object] = {
        field: field_value
        for field, field_value in changes.items()
        if field_value is not None
    }
    if not values:
        return announcement

    with moderation.atomic():
        announcement = moderation.update_announcement(announcement, values)
        moderation.log_admin_action(
            user.id,
            AdminLog.Action.ANNOUNCEMENT_UPDATED,
            details=f'Updated announcement {announcement_id}',
        )
    logger.info('Announcement updated: ID=%d', announcement_id)
    return announcement


def publish_announcement(
    moderation: ModerationRepository,
    user: User,
    announcement_id: int,
) -> Announcement:
    """Publish a draft announcement.

    Raises:
        ForbiddenError: If the caller is not an admin.
        NotFoundError: If the announcement does not exist.
    """
    require_admin(user)
    announcement = _require_announcement(moderation, announcement_id)
    with moderation.atomic():
        announcement = moderation.publish_announcement(
            announcement,
            timezone.now(),
        )
        moderation.log_admin_action(
            user.id,
            AdminLog.Action.ANNOUNCEMENT_PUBLISHED,
            details=f'Published announcement {announcement_id}',
        )
    logger.info('Announcement published: ID=%d', announcement_id)
    return announcement


def delete_announcement(
    moderation: ModerationRepository,
    user: User,
    announcement_id: int,
) -> None:
    """Delete an announcement.

    Raises:
        ForbiddenError: If the caller is not an admin.
        NotFoundError: If the announcement does not exist.
    """
    require_admin(user)
    with moderation.atomic():
        if not moderation.delete_announcement(announcement_id):
            raise NotFoundError('Announcement not found')
        moderation.log_admin_action(
            user.id,
            AdminLog.Action.ANNOUNCEMENT_DELETED,
            details=f'Deleted announcement {announcement_id}',
        )
    logger.info('Announcement deleted: ID=%d', announcement_id)


def list_users(
    users: UserRepository,
    user: User,
    limit: int = 50,
    offset: int = 0,
) -> list[User]:
    """Page through all users."""
    require_admin(user)
    return users.list_users(limit, offset)


def _set_user_active(  # noqa: WPS211
    moderation: ModerationRepository,
    users: UserRepository,
    user: User,
    target_user_id: int,
    is_active: bool,
    action: str,
) -> None:
    with moderation.atomic():
        if not users.set_active(target_user_id, is_active):
            raise NotFoundError('User not found')
        moderation.log_admin_action(
            user.id,
            action,
            target_user_id=target_user_id,
        )
    logger.info(
        'User %d set active=%s by admin %d',
        target_user_id,
        is_active,
        user.id,
    )


def disable_user(
    moderation: ModerationRepository,
    users: UserRepository,
    user: User,
    target_user_id: int,
) -> None:
    """Disable another user's account.

    Raises:
        ForbiddenError: If the caller is not an admin.
        BadRequestError: If the caller targets themselves.
        NotFoundError: If the user does not exist.
    """
    require_admin(user)
    if target_user_id == user.id:
        raise BadRequestError('Cannot disable yourself')
    _set_user_active(
        moderation,
        users,
        user,
        target_user_id,
        is_active=False,
        action=AdminLog.Action.USER_DISABLED,
    )


def enable_user(
    moderation: ModerationRepository,
    users: UserRepository,
    user: User,
    target_user_id: int,
) -> None:
    """Re-enable a disabled account.

    Raises:
        ForbiddenError: If the caller is not an admin.
        NotFoundError: If the user does not exist.
    """
    require_admin(user)
    _set_user_active(
        moderation,
        users,
        user,
        target_user_id,
        is_active=True,
        action=AdminLog.Action.USER_ENABLED,
    )


def list_admin_logs(
    moderation: ModerationRepository,
    user: User,
    limit: int = 50,
    offset: int = 0,
) -> list[AdminLog]:
    """Page through the audit log."""
    require_admin(user)
    return moderation.list_admin_logs(limit, offset)
