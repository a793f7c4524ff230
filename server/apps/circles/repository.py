"""Data access for circles, members, folders, files, links and activity.

One method per query or mutation. No business rules live here; joins
and annotations exist for display convenience only.
"""

from datetime import datetime
from decimal import Decimal

from django.db import models
from django.db.models import Count, F, OuterRef, Subquery, Value
from django.db.models.functions import Coalesce

from server.apps.circles.models import (
    Circle,
    CircleActivityLog,
    CircleCategory,
    CircleMember,
    File,
    FileShareLink,
    Folder,
)
from server.common.repository import Repository


def _member_count() -> Coalesce:
    """Correlated member count for circle querysets."""
    per_circle = (
        CircleMember.objects.filter(circle=OuterRef('pk'))
        .order_by()
        .values('circle')
        .annotate(total=Count('id'))
        .values('total')
    )
    return Coalesce(
        Subquery(per_circle, output_field=models.IntegerField()),
        Value(0),
    )


class CircleRepository(Repository):  # noqa: WPS214
    """Queries and mutations on the circles schema."""

    # Circles

    def create_circle(
        self,
        name: str,
        description: str | None,
        creator_id: int,
        invitation_code: str | None,
    ) -> Circle:
        """Insert a circle; public iff it has no invitation code.

        Args:
            name: Circle name.
            description: Optional description.
            creator_id: Creating user ID.
            invitation_code: Code for private circles, None for public.

        Returns:
            Created circle.
        """
        return self.query(Circle).create(
            name=name,
            description=description,
            creator_id=creator_id,
            is_public=invitation_code is None,
            invitation_code=invitation_code,
        )

    def get_circle(self, circle_id: int) -> Circle | None:
        """Get circle by ID."""
        return self.query(Circle).filter(id=circle_id).first()

    def get_circle_by_invitation_code(self, code: str) -> Circle | None:
        """Get private circle by its invitation code."""
        return self.query(Circle).filter(invitation_code=code).first()

    def invitation_code_exists(self, code: str) -> bool:
        """Check whether a code is already taken."""
        return self.query(Circle).filter(invitation_code=code).exists()

    def list_circles_for_user(self, user_id: int) -> list[Circle]:
        """List circles the user belongs to.

        Each circle is annotated with ``role`` (the user's role) and
        ``member_count``.

        Args:
            user_id: Member user ID.

        Returns:
            Circles, most recently updated first.
        """
        role = CircleMember.objects.filter(
            circle=OuterRef('pk'),
            user_id=user_id,
        ).values('role')[:1]
        return list(
            self.query(Circle)
            .filter(members__user_id=user_id)
            .annotate(role=Subquery(role), member_count=_member_count())
            .order_by('-updated_at', '-id'),
        )

    def list_public_circles(self) -> list[Circle]:
        """List public circles annotated with ``member_count``."""
        return list(
            self.query(Circle)
            .filter(is_public=True)
            .annotate(member_count=_member_count())
            .order_by('-updated_at', '-id'),
        )

    def search_public_circles(self, query: str) -> list[Circle]:
        """Public circles whose name contains ``query`` (case-insensitive)."""
        return list(
            self.query(Circle)
            .filter(is_public=True, name__icontains=query)
            .annotate(member_count=_member_count())
            .order_by('-updated_at', '-id'),
        )

    def list_public_circles_by_category(self, category: str) -> list[Circle]:
        """Public circles tagged with exactly ``category``."""
        return list(
            self.query(Circle)
            .filter(is_public=True, categories__category=category)
            .annotate(member_count=_member_count())
            .distinct()
            .order_by('-updated_at', '-id'),
        )

    def update_circle(self, circle: Circle, changes: dict[str, object]) -> Circle:
        """Apply column changes to a circle.

        Args:
            circle: Circle to update.
            changes: Field name to new value.

        Returns:
            Updated circle.
        """
        for field, field_value in changes.items():
            setattr(circle, field, field_value)
        circle.save(using=self.alias, update_fields=[*changes, 'updated_at'])
        return circle

    def delete_circle(self, circle_id: int) -> None:
        """Delete circle; members, files, folders and tags cascade."""
        self.query(Circle).filter(id=circle_id).delete()

    # Members

    def add_member(self, circle_id: int, user_id: int, role: str) -> CircleMember:
        """Insert a membership row."""
        return self.query(CircleMember).create(
            circle_id=circle_id,
            user_id=user_id,
            role=role,
        )

    def get_member(self, circle_id: int, user_id: int) -> CircleMember | None:
        """Get the membership of a user in a circle."""
        return self.query(CircleMember).filter(
            circle_id=circle_id,
            user_id=user_id,
        ).first()

    def list_members(self, circle_id: int) -> list[CircleMember]:
        """List members with their users, newest first."""
        return list(
            self.query(CircleMember)
            .filter(circle_id=circle_id)
            .select_related('user')
            .order_by('-joined_at', '-id'),
        )

    def count_owners(self, circle_id: int) -> int:
        """Count owner rows of a circle."""
        return self.query(CircleMember).filter(
            circle_id=circle_id,
            role=CircleMember.Role.OWNER,
        ).count()

    def remove_member(self, circle_id: int, user_id: int) -> int:
        """Delete a membership row.

        Returns:
            Number of rows deleted.
        """
        deleted, _ = self.query(CircleMember).filter(
            circle_id=circle_id,
            user_id=user_id,
        ).delete()
        return deleted

    # Files

    def create_file(  # noqa: WPS211
        self,
        circle_id: int,
        folder_id: int | None,
        uploader_id: int,
        filename: str,
        file_key: str,
        file_url: str,
        mime_type: str,
        file_size: int,
        file_type: str,
        price: Decimal | None = None,
    ) -> File:
        """Insert file metadata for an object already in storage."""
        return self.query(File).create(
            circle_id=circle_id,
            folder_id=folder_id,
            uploader_id=uploader_id,
            filename=filename,
            file_key=file_key,
            file_url=file_url,
            mime_type=mime_type,
            file_size=file_size,
            file_type=file_type,
            is_paid=price is not None,
            price=price,
        )

    def get_file(self, file_id: int) -> File | None:
        """Get file by ID."""
        return self.query(File).filter(id=file_id).first()

    def list_files_by_circle(self, circle_id: int) -> list[File]:
        """List circle files with uploaders, newest first."""
        return list(
            self.query(File)
            .filter(circle_id=circle_id)
            .select_related('uploader')
            .order_by('-uploaded_at', '-id'),
        )

    def list_files_by_uploader(self, user_id: int) -> list[File]:
        """List a user's uploads with their circles, newest first."""
        return list(
            self.query(File)
            .filter(uploader_id=user_id)
            .select_related('circle')
            .order_by('-uploaded_at', '-id'),
        )

    def list_files_by_folder(self, folder_id: int) -> list[File]:
        """List folder files with uploaders, newest first."""
        return list(
            self.query(File)
            .filter(folder_id=folder_id)
            .select_related('uploader')
            .order_by('-uploaded_at', '-id'),
        )

    def delete_file(self, file_instance: File) -> None:
        """Delete file row; the stored object is removed by signal."""
        file_instance.delete(using=self.alias)

    # Folders

    def create_folder(
        self,
        circle_id: int,
        name: str,
        description: str | None,
        created_by_id: int,
    ) -> Folder:
        """Insert a folder."""
        return self.query(Folder).create(
            circle_id=circle_id,
            name=name,
            description=description,
            created_by_id=created_by_id,
        )

    def get_folder(self, folder_id: int) -> Folder | None:
        """Get folder by ID."""
        return self.query(Folder).filter(id=folder_id).first()

    def list_folders(self, circle_id: int) -> list[Folder]:
        """List circle folders with creators, newest first."""
        return list(
            self.query(Folder)
            .filter(circle_id=circle_id)
            .select_related('created_by')
            .order_by('-created_at', '-id'),
        )

    def rename_folder(self, folder: Folder, name: str) -> Folder:
        """Set a new folder name."""
        folder.name = name
        folder.save(using=self.alias, update_fields=['name', 'updated_at'])
        return folder

    def detach_folder_files(self, folder_id: int) -> int:
        """Null out ``folder`` on every file of a folder.

        Returns:
            Number of files detached.
        """
        return self.query(File).filter(folder_id=folder_id).update(folder=None)

    def delete_folder(self, folder_id: int) -> None:
        """Delete a folder row."""
        self.query(Folder).filter(id=folder_id).delete()

    # Share links

    def create_share_link(
        self,
        file_id: int,
        token: str,
        created_by_id: int,
        expires_at: datetime | None,
    ) -> FileShareLink:
        """Insert a share link."""
        return self.query(FileShareLink).create(
            file_id=file_id,
            token=token,
            created_by_id=created_by_id,
            expires_at=expires_at,
        )

    def get_share_link(self, link_id: int) -> FileShareLink | None:
        """Get share link by ID with its file."""
        return self.query(FileShareLink).select_related('file').filter(
            id=link_id,
        ).first()

    def get_share_link_by_token(self, token: str) -> FileShareLink | None:
        """Get share link by token with its file."""
        return self.query(FileShareLink).select_related('file').filter(
            token=token,
        ).first()

    def increment_download_count(self, link_id: int) -> None:
        """Atomically add one to a link's download counter."""
        self.query(FileShareLink).filter(id=link_id).update(
            download_count=F('download_count') + 1,
        )

    def delete_share_link(self, link_id: int) -> None:
        """Delete a share link."""
        self.query(FileShareLink).filter(id=link_id).delete()

    def list_expired_share_links(
        self,
        now: datetime,
        limit: int,
    ) -> list[FileShareLink]:
        """List links whose expiry is before ``now``, oldest first."""
        return list(
            self.query(FileShareLink)
            .filter(expires_at__lt=now)
            .order_by('expires_at')[:limit],
        )

    # Activity

    def log_activity(  # noqa: WPS211
        self,
        circle_id: int,
        user_id: int | None,
        action: str,
        target_id: int | None = None,
        target_type: str = '',
        details: str = '',
    ) -> CircleActivityLog:
        """Append an activity row."""
        return self.query(CircleActivityLog).create(
            circle_id=circle_id,
            user_id=user_id,
            action=action,
            target_id=target_id,
            target_type=target_type,
            details=details,
        )

    def list_activity(self, circle_id: int, limit: int) -> list[CircleActivityLog]:
        """List latest activity of a circle with users."""
        return list(
            self.query(CircleActivityLog)
            .filter(circle_id=circle_id)
            .select_related('user')
            .order_by('-created_at', '-id')[:limit],
        )

    # Categories

    def add_category(self, circle_id: int, category: str) -> CircleCategory:
        """Attach a category tag."""
        return self.query(CircleCategory).create(
            circle_id=circle_id,
            category=category,
        )

    def category_exists(self, circle_id: int, category: str) -> bool:
        """Check whether a circle already carries a tag."""
        return self.query(CircleCategory).filter(
            circle_id=circle_id,
            category=category,
        ).exists()

    def list_categories(self, circle_id: int) -> list[CircleCategory]:
        """List category tags of a circle."""
        return list(
            self.query(CircleCategory)
            .filter(circle_id=circle_id)
            .order_by('category'),
        )

    def remove_category(self, circle_id: int, category: str) -> int:
        """Detach a category tag.

        Returns:
            Number of rows deleted.
        """
        deleted, _ = self.query(CircleCategory).filter(
            circle_id=circle_id,
            category=category,
        ).delete()
        return deleted
