"""Business logic for file operations."""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from django.core.files.storage import default_storage

from server.apps.accounts.models import User
from server.apps.circles.infrastructure.metadata import (
    build_file_key,
    classify_file_type,
    decode_file_data,
)
from server.apps.circles.logic.access import require_membership
from server.apps.circles.models import CircleActivityLog, File
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import ForbiddenError, NotFoundError

if TYPE_CHECKING:
    from server.apps.circles.infrastructure.storage import FileStorage

logger = logging.getLogger(__name__)


def _get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def upload_file(  # noqa: WPS211
    circles: CircleRepository,
    user: User,
    circle_id: int,
    filename: str,
    file_data: str,
    mime_type: str,
    file_size: int,
    folder_id: int | None = None,
    price: Decimal | None = None,
) -> File:
    """Upload file to storage and create database record.

    Transaction safety: Upload to storage first, then create DB record.
    If DB transaction fails, the uploaded object is deleted from storage
    (rollback). ``file_size`` is stored as reported; it is not enforced.

    Args:
        circles: Circle repository.
        user: Uploader, must be a circle member.
        circle_id: Target circle ID.
        filename: Client filename.
        file_data: Base64-encoded bytes.
        mime_type: MIME type declared by the client.
        file_size: Size in bytes declared by the client.
        folder_id: Optional folder of the same circle.
        price: Sale price; files with a price are for sale.

    Returns:
        Created File instance.

    Raises:
        ForbiddenError: If the caller is not a member.
        UnsupportedFileTypeError: If the MIME type is not media.
        BadRequestError: If ``file_data`` is not valid base64.
        NotFoundError: If the folder is not in this circle.
    """
    require_membership(circles, circle_id, user)
    file_type = classify_file_type(mime_type)
    content = decode_file_data(file_data)

    if folder_id is not None:
        folder = circles.get_folder(folder_id)
        if folder is None or folder.circle_id != circle_id:
            raise NotFoundError('Folder not found')

    storage = _get_storage()

    # Step 1: Upload to storage first
    saved_name, file_url = storage.save_media(
        build_file_key(circle_id, user.id, filename),
        content,
        mime_type,
    )

    # Step 2: Create database record (in transaction)
    try:
        with circles.atomic():
            file_instance = circles.create_file(
                circle_id=circle_id,
                folder_id=folder_id,
                uploader_id=user.id,
                filename=filename,
                file_key=saved_name,
                file_url=file_url,
                mime_type=mime_type,
                file_size=file_size,
                file_type=file_type,
                price=price,
            )
            circles.log_activity(
                circle_id,
                user.id,
                CircleActivityLog.Action.FILE_UPLOADED,
                target_id=file_instance.id,
                target_type='file',
                details=filename,
            )
    except Exception:
        # Rollback: Delete object from storage since DB transaction failed
        logger.exception(
            'Database transaction failed, rolling back storage upload: %s',
            saved_name,
        )
        storage.rollback_upload(saved_name)
        raise

    logger.info(
        'File uploaded: %s (ID: %d, circle: %d)',
        saved_name,
        file_instance.id,
        circle_id,
    )
    return file_instance


def list_circle_files(
    circles: CircleRepository,
    user: User,
    circle_id: int,
) -> list[File]:
    """Files of a circle for one of its members, newest first.

    Raises:
        ForbiddenError: If the caller is not a member.
    """
    require_membership(circles, circle_id, user)
    return circles.list_files_by_circle(circle_id)


def list_user_uploads(circles: CircleRepository, user: User) -> list[File]:
    """Files the caller uploaded, with their circles."""
    return circles.list_files_by_uploader(user.id)


def delete_file(circles: CircleRepository, user: User, file_id: int) -> None:
    """Delete a file record; the stored object goes with it.

    Storage deletion is handled by the ``post_delete`` signal handler.

    Args:
        circles: Circle repository.
        user: Caller, must be the uploader or the circle owner.
        file_id: ID of file to delete.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not a member, or neither the
            uploader nor the owner.
    """
    file_instance = circles.get_file(file_id)
    if file_instance is None:
        raise NotFoundError('File not found')

    circle_id = file_instance.circle_id
    member = require_membership(circles, circle_id, user)
    if file_instance.uploader_id != user.id and not member.is_owner:
        logger.warning(
            'Denied file delete: user=%d file=%d',
            user.id,
            file_id,
        )
        raise ForbiddenError('Only uploader or circle owner can delete')

    logger.info(
        'Deleting file: ID=%d, key=%s',
        file_id,
        file_instance.file_key,
    )
    with circles.atomic():
        circles.delete_file(file_instance)
        circles.log_activity(
            circle_id,
            user.id,
            CircleActivityLog.Action.FILE_DELETED,
            target_id=file_id,
            target_type='file',
            details=file_instance.filename,
        )
    logger.info('File record deleted from database: ID=%d', file_id)
