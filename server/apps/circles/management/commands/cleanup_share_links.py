"""Management command to delete expired share links."""

import logging
from typing import Any, Final

from django.core.management.base import BaseCommand

from server.apps.circles.logic.share_operations import find_expired_links
from server.apps.circles.repository import CircleRepository

_DEFAULT_BATCH_SIZE: Final = 1000

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete share links whose expiry has passed."""

    help = 'Clean up expired file share links'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max links to process (default: {_DEFAULT_BATCH_SIZE})',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the cleanup command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        circles = CircleRepository()

        expired = find_expired_links(circles, options['batch_size'])
        self.stdout.write(f'Found {len(expired)} expired share links')

        count = 0
        for link in expired:
            if dry_run:
                self.stdout.write(
                    f'Would delete: link {link.id} '
                    f'(file: {link.file_id}, expired: {link.expires_at})',
                )
                count += 1
                continue

            circles.delete_share_link(link.id)
            logger.info('Purged expired share link: ID=%d', link.id)
            count += 1

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would purge {count} share links'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(f'Purged {count} expired share links'),
            )
