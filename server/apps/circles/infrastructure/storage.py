"""S3-compatible storage for circle media."""

import logging
from typing import final

from django.core.files.base import ContentFile
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """Bucket holding the bytes of circle files.

    Rows only keep the object key and URL. Writes happen before the row
    is inserted, so a failed insert has to be undone with
    ``rollback_upload``; deleted rows release their object with
    ``discard``.
    """

    def save_media(
        self,
        key: str,
        content: bytes,
        content_type: str,
    ) -> tuple[str, str]:
        """Write decoded upload bytes under ``key``.

        Args:
            key: Object key, ``circles/{circle}/{uploader}-{random}.{ext}``.
            content: Raw file bytes.
            content_type: MIME type stored as the object's Content-Type.

        Returns:
            Tuple of the saved key and its public URL.

        Raises:
            Exception: If the bucket rejects the write.
        """
        upload = ContentFile(content, name=key.rsplit('/', 1)[-1])
        upload.content_type = content_type  # type: ignore[attr-defined]
        try:
            saved_key = self.save(key, upload)
        except Exception:
            logger.exception('Failed to store object: %s', key)
            raise
        logger.info('Stored object %s (%d bytes)', saved_key, len(content))
        return saved_key, self.url(saved_key)

    def discard(self, key: str) -> bool:
        """Remove the object of a deleted row if it is still there.

        Args:
            key: Object key.

        Returns:
            True if an object was deleted.
        """
        if not self.exists(key):
            logger.warning('Object already gone: %s', key)
            return False
        self.delete(key)
        logger.info('Deleted object: %s', key)
        return True

    def rollback_upload(self, key: str) -> None:
        """Delete an object whose database row was never committed.

        Failures are logged and swallowed: the transaction has already
        been rolled back and the caller re-raises the original error.

        Args:
            key: Object key.
        """
        logger.warning('Rolling back upload: %s', key)
        try:
            self.delete(key)
        except Exception:
            logger.exception('Rollback failed, orphaned object: %s', key)
