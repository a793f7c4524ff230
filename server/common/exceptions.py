"""Service errors shared by every app.

Business logic raises these; the RPC layer turns ``code`` into the
error envelope and HTTP status returned to the caller.
"""

from typing import ClassVar


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    code: ClassVar[str] = 'INTERNAL_SERVER_ERROR'
    default_message: ClassVar[str] = 'Internal server error'

    def __init__(self, message: str | None = None) -> None:
        """Initialize ServiceError.

        Args:
            message: Human-readable message for the caller.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ServiceError):
    """Raised when the request conflicts with current state or input rules."""

    code = 'BAD_REQUEST'
    default_message = 'Bad request'


class UnauthorizedError(ServiceError):
    """Raised when a protected operation is called anonymously."""

    code = 'UNAUTHORIZED'
    default_message = 'Please login'


class ForbiddenError(ServiceError):
    """Raised when the caller lacks membership, ownership or role."""

    code = 'FORBIDDEN'
    default_message = 'Forbidden'


class NotFoundError(ServiceError):
    """Raised when a referenced row does not exist."""

    code = 'NOT_FOUND'
    default_message = 'Not found'


class NotImplementedFeatureError(ServiceError):
    """Raised by operations that are declared but not available yet."""

    code = 'NOT_IMPLEMENTED'
    default_message = 'Not implemented'
