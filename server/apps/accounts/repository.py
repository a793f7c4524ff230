"""Data access for users."""

from django.utils import timezone

from server.apps.accounts.models import User
from server.common.repository import Repository


class UserRepository(Repository):
    """Queries and mutations on the user table."""

    def get_by_id(self, user_id: int) -> User | None:
        """Get user by primary key.

        Args:
            user_id: User ID.

        Returns:
            User if found, None otherwise.
        """
        return self.query(User).filter(id=user_id).first()

    def get_by_open_id(self, open_id: str) -> User | None:
        """Get user by login-provider identity.

        Args:
            open_id: Identity issued by the login provider.

        Returns:
            User if found, None otherwise.
        """
        return self.query(User).filter(open_id=open_id).first()

    def upsert(self, open_id: str, fields: dict[str, object]) -> User:
        """Insert user or update the given fields of an existing one.

        ``last_signed_in`` is always refreshed.

        Args:
            open_id: Identity issued by the login provider.
            fields: Column values to set.

        Returns:
            Inserted or updated user.
        """
        defaults = {**fields, 'last_signed_in': timezone.now()}
        user, _ = self.query(User).update_or_create(
            open_id=open_id,
            defaults=defaults,
            create_defaults={**defaults, 'username': open_id},
        )
        return user

    def list_users(self, limit: int, offset: int) -> list[User]:
        """List users, newest first.

        Args:
            limit: Page size.
            offset: Rows to skip.

        Returns:
            Page of users.
        """
        return list(
            self.query(User).order_by('-date_joined', '-id')[offset:offset + limit],
        )

    def set_active(self, user_id: int, is_active: bool) -> int:
        """Enable or disable a user.

        Args:
            user_id: User ID.
            is_active: New flag value.

        Returns:
            Number of rows updated.
        """
        return self.query(User).filter(id=user_id).update(
            is_active=is_active,
            updated_at=timezone.now(),
        )
