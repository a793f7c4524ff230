"""Business logic for folders inside circles."""

import logging

from server.apps.accounts.models import User
from server.apps.circles.logic.access import require_membership
from server.apps.circles.models import CircleActivityLog, Folder
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def _require_folder(circles: CircleRepository, folder_id: int) -> Folder:
    folder = circles.get_folder(folder_id)
    if folder is None:
        raise NotFoundError('Folder not found')
    return folder


def create_folder(
    circles: CircleRepository,
    user: User,
    circle_id: int,
    name: str,
    description: str | None = None,
) -> Folder:
    """Create a folder in a circle the caller belongs to.

    Args:
        circles: Circle repository.
        user: Caller.
        circle_id: Circle ID.
        name: Folder name.
        description: Optional description, empty means none.

    Returns:
        Created folder.

    Raises:
        ForbiddenError: If the caller is not a member.
    """
    require_membership(circles, circle_id, user)
    with circles.atomic():
        folder = circles.create_folder(
            circle_id=circle_id,
            name=name,
            description=description or None,
            created_by_id=user.id,
        )
        circles.log_activity(
            circle_id,
            user.id,
            CircleActivityLog.Action.FOLDER_CREATED,
            target_id=folder.id,
            target_type='folder',
            details=name,
        )
    logger.info('Folder created: %s (ID: %d)', name, folder.id)
    return folder


def list_folders(
    circles: CircleRepository,
    user: User,
    circle_id: int,
) -> list[Folder]:
    """Folders of a circle for one of its members."""
    require_membership(circles, circle_id, user)
    return circles.list_folders(circle_id)


def rename_folder(
    circles: CircleRepository,
    user: User,
    folder_id: int,
    name: str,
) -> Folder:
    """Rename a folder.

    Raises:
        NotFoundError: If the folder does not exist.
        ForbiddenError: If the caller is not a member of its circle.
    """
    folder = _require_folder(circles, folder_id)
    require_membership(circles, folder.circle_id, user)
    folder = circles.rename_folder(folder, name)
    logger.info('Folder renamed: ID=%d to %s', folder_id, name)
    return folder


def delete_folder(circles: CircleRepository, user: User, folder_id: int) -> None:
    """Delete a folder and keep its files at the circle root.

    Contained files are detached and the folder removed in one
    transaction.

    Raises:
        NotFoundError: If the folder does not exist.
        ForbiddenError: If the caller is not a member of its circle.
    """
    folder = _require_folder(circles, folder_id)
    require_membership(circles, folder.circle_id, user)

    with circles.atomic():
        detached = circles.detach_folder_files(folder_id)
        circles.delete_folder(folder_id)
        circles.log_activity(
            folder.circle_id,
            user.id,
            CircleActivityLog.Action.FOLDER_DELETED,
            target_id=folder_id,
            target_type='folder',
            details=folder.name,
        )
    logger.info(
        'Folder deleted: ID=%d, %d files moved to circle root',
        folder_id,
        detached,
    )
