"""Process-wide set of data-access objects."""

from dataclasses import dataclass, fields
from typing import final

from django.db import DEFAULT_DB_ALIAS

from server.apps.accounts.repository import UserRepository
from server.apps.circles.repository import CircleRepository
from server.apps.moderation.repository import ModerationRepository
from server.apps.payments.repository import PaymentRepository
from server.common.repository import Repository


@final
@dataclass(frozen=True)
class Repositories:
    """Repositories injected into every procedure call."""

    users: UserRepository
    circles: CircleRepository
    payments: PaymentRepository
    moderation: ModerationRepository

    def _all(self) -> list[Repository]:
        return [getattr(self, field.name) for field in fields(self)]

    def open(self) -> None:
        """Open every repository."""
        for repository in self._all():
            repository.open()

    def close(self) -> None:
        """Close every repository."""
        for repository in self._all():
            repository.close()


def build_repositories(alias: str = DEFAULT_DB_ALIAS) -> Repositories:
    """Construct all repositories on one database alias.

    Args:
        alias: Database alias from ``settings.DATABASES``.

    Returns:
        Unopened repositories.
    """
    return Repositories(
        users=UserRepository(alias),
        circles=CircleRepository(alias),
        payments=PaymentRepository(alias),
        moderation=ModerationRepository(alias),
    )
