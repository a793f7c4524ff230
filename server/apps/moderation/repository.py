"""Data access for announcements and the admin audit log."""

from datetime import datetime

from server.apps.moderation.models import AdminLog, Announcement
from server.common.repository import Repository


class ModerationRepository(Repository):
    """Queries and mutations on moderation tables."""

    def create_announcement(
        self,
        title: str,
        content: str,
        created_by_id: int,
    ) -> Announcement:
        """Insert an unpublished announcement."""
        return self.query(Announcement).create(
            title=title,
            content=content,
            created_by_id=created_by_id,
        )

    def get_announcement(self, announcement_id: int) -> Announcement | None:
        """Get announcement by ID."""
        return self.query(Announcement).filter(id=announcement_id).first()

    def list_announcements(self, limit: int, offset: int) -> list[Announcement]:
        """All announcements, drafts included, newest first."""
        return list(
            self.query(Announcement)
            .order_by('-created_at', '-id')[offset:offset + limit],
        )

    def list_published_announcements(self, limit: int) -> list[Announcement]:
        """Published announcements, most recently published first."""
        return list(
            self.query(Announcement)
            .filter(is_published=True)
            .order_by('-published_at', '-id')[:limit],
        )

    def update_announcement(
        self,
        announcement: Announcement,
        changes: dict[str, object],
    ) -> Announcement:
        """Apply column changes to an announcement."""
        for field, field_value in changes.items():
            setattr(announcement, field, field_value)
        announcement.save(
            using=self.alias,
            update_fields=[*changes, 'updated_at'],
        )
        return announcement

    def publish_announcement(
        self,
        announcement: Announcement,
        published_at: datetime,
    ) -> Announcement:
        """Mark an announcement as published."""
        return self.update_announcement(
            announcement,
            {'is_published': True, 'published_at': published_at},
        )

    def delete_announcement(self, announcement_id: int) -> int:
        """Delete an announcement.

        Returns:
            Number of rows deleted.
        """
        deleted, _ = self.query(Announcement).filter(
            id=announcement_id,
        ).delete()
        return deleted

    def log_admin_action(
        self,
        admin_id: int,
        action: str,
        target_user_id: int | None = None,
        details: str = '',
    ) -> AdminLog:
        """Append an audit row."""
        return self.query(AdminLog).create(
            admin_id=admin_id,
            action=action,
            target_user_id=target_user_id,
            details=details,
        )

    def list_admin_logs(self, limit: int, offset: int) -> list[AdminLog]:
        """Audit rows with their admins, newest first."""
        return list(
            self.query(AdminLog)
            .select_related('admin')
            .order_by('-created_at', '-id')[offset:offset + limit],
        )
