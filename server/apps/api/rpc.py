"""Named-procedure RPC over a single HTTP endpoint.

Procedures are registered on a ``Router`` per resource and merged into
one root router. A call validates its payload with the procedure's
pydantic schema, checks authentication and runs the handler with a
``CallContext`` carrying the caller and the repositories.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final, Literal, final

from django.http import HttpRequest
from pydantic import BaseModel, ValidationError

from server.apps.accounts.models import User
from server.apps.api.container import Repositories
from server.common.exceptions import (
    BadRequestError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)

ProcedureKind = Literal['query', 'mutation']
Handler = Callable[['CallContext', Any], Any]

# Error code -> HTTP status of the error envelope
STATUS_BY_CODE: Final = {
    'BAD_REQUEST': 400,
    'UNAUTHORIZED': 401,
    'FORBIDDEN': 403,
    'NOT_FOUND': 404,
    'METHOD_NOT_SUPPORTED': 405,
    'INTERNAL_SERVER_ERROR': 500,
    'NOT_IMPLEMENTED': 501,
}

logger = logging.getLogger(__name__)


class MethodNotSupportedError(ServiceError):
    """Raised when a mutation is called with GET."""

    code = 'METHOD_NOT_SUPPORTED'
    default_message = 'Method not supported'


@final
@dataclass(frozen=True)
class CallContext:
    """Caller identity and injected dependencies of one call."""

    user: User | None
    repos: Repositories
    request: HttpRequest | None = None

    def require_user(self) -> User:
        """Get the authenticated caller.

        Raises:
            UnauthorizedError: If the call is anonymous.
        """
        if self.user is None:
            raise UnauthorizedError
        return self.user


@final
@dataclass(frozen=True)
class Procedure:
    """Registered handler with its input schema and access rules."""

    name: str
    kind: ProcedureKind
    handler: Handler
    schema: type[BaseModel] | None
    protected: bool


def _first_error_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = '.'.join(str(part) for part in first['loc'])
    if location:
        return f'{location}: {first["msg"]}'
    return first['msg']


class Router:
    """Registry of procedures under a dotted namespace."""

    def __init__(self, namespace: str = '') -> None:
        """Initialize the router.

        Args:
            namespace: Prefix of every procedure name (e.g., 'circles').
        """
        self.namespace = namespace
        self._procedures: dict[str, Procedure] = {}

    def _register(
        self,
        kind: ProcedureKind,
        name: str,
        schema: type[BaseModel] | None,
        protected: bool,
    ) -> Callable[[Handler], Handler]:
        full_name = f'{self.namespace}.{name}' if self.namespace else name

        def decorator(handler: Handler) -> Handler:
            self._procedures[full_name] = Procedure(
                name=full_name,
                kind=kind,
                handler=handler,
                schema=schema,
                protected=protected,
            )
            return handler

        return decorator

    def query(
        self,
        name: str,
        schema: type[BaseModel] | None = None,
        protected: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Register a read-only procedure."""
        return self._register('query', name, schema, protected)

    def mutation(
        self,
        name: str,
        schema: type[BaseModel] | None = None,
        protected: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Register a state-changing procedure."""
        return self._register('mutation', name, schema, protected)

    def include(self, other: 'Router') -> None:
        """Merge another router's procedures into this one.

        Raises:
            ValueError: If a procedure name is registered twice.
        """
        for name, procedure in other.procedures.items():
            if name in self._procedures:
                raise ValueError(f'Duplicate procedure: {name}')
            self._procedures[name] = procedure

    @property
    def procedures(self) -> dict[str, Procedure]:
        """Registered procedures by full name."""
        return dict(self._procedures)

    def get(self, name: str) -> Procedure:
        """Look up a procedure.

        Raises:
            NotFoundError: If no procedure has this name.
        """
        procedure = self._procedures.get(name)
        if procedure is None:
            raise NotFoundError(f'No procedure "{name}"')
        return procedure

    def call(
        self,
        name: str,
        context: CallContext,
        payload: Any = None,
    ) -> Any:
        """Run a procedure in-process.

        Args:
            name: Full procedure name (e.g., 'circles.create').
            context: Caller and repositories.
            payload: Raw input with camelCase or snake_case keys.

        Returns:
            Handler result, JSON-serializable with Django's encoder.

        Raises:
            ServiceError: Any error of the procedure, including
                UNAUTHORIZED for anonymous calls of protected procedures
                and BAD_REQUEST for invalid input.
        """
        procedure = self.get(name)
        if procedure.protected:
            context.require_user()

        validated = None
        if procedure.schema is not None:
            try:
                validated = procedure.schema.model_validate(payload or {})
            except ValidationError as error:
                raise BadRequestError(_first_error_message(error)) from error

        return procedure.handler(context, validated)
