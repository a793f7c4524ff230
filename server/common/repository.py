"""Base class for data-access objects.

A repository is constructed once per process with an explicit database
alias, opened at start-up and closed at shutdown. Request handlers
receive it through their call context instead of reaching for a global
connection.
"""

import logging
from contextlib import AbstractContextManager
from typing import TypeVar

from django.db import DEFAULT_DB_ALIAS, connections, models, transaction
from django.db.backends.base.base import BaseDatabaseWrapper

_ModelT = TypeVar('_ModelT', bound=models.Model)

logger = logging.getLogger(__name__)


class Repository:
    """CRUD access to a group of models bound to one database alias."""

    def __init__(self, alias: str = DEFAULT_DB_ALIAS) -> None:
        """Initialize the repository.

        Args:
            alias: Database alias from ``settings.DATABASES``.
        """
        self.alias = alias

    @property
    def connection(self) -> BaseDatabaseWrapper:
        """Connection for this repository's alias in the current thread."""
        return connections[self.alias]

    def open(self) -> None:
        """Establish the database connection."""
        self.connection.ensure_connection()
        logger.info(
            '%s opened on database alias %s',
            type(self).__name__,
            self.alias,
        )

    def close(self) -> None:
        """Close the database connection held by the current thread."""
        self.connection.close()
        logger.info(
            '%s closed on database alias %s',
            type(self).__name__,
            self.alias,
        )

    def atomic(self) -> AbstractContextManager[None]:
        """Start a transaction (or savepoint) on this alias.

        Returns:
            Context manager wrapping the block in a transaction.
        """
        return transaction.atomic(using=self.alias)

    def query(self, model: type[_ModelT]) -> 'models.QuerySet[_ModelT]':
        """Get a queryset for ``model`` routed to this alias.

        Args:
            model: Django model class.

        Returns:
            QuerySet bound to the repository's database.
        """
        return model._default_manager.using(self.alias)  # noqa: WPS437
