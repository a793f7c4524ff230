"""Signal handlers for circles app."""

import logging

from django.core.files.storage import default_storage
from django.db.models.signals import post_delete
from django.dispatch import receiver

from server.apps.circles.models import File

logger = logging.getLogger(__name__)


@receiver(post_delete, sender=File)
def release_stored_object(
    sender: type[File],
    instance: File,
    **kwargs: object,
) -> None:
    """Delete the stored object of a deleted File row.

    Runs for direct deletes and for rows removed by cascade when the
    circle is deleted.

    Args:
        sender: The File model class.
        instance: The File instance being deleted.
        **kwargs: Additional signal arguments.
    """
    if not instance.file_key:
        return
    try:
        default_storage.discard(instance.file_key)  # type: ignore[attr-defined]
    except Exception:
        # Row is gone already; the object stays behind
        logger.exception('Failed to release object: %s', instance.file_key)
