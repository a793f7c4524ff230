"""Exceptions for circles app."""

from server.common.exceptions import BadRequestError, ServiceError


class UnsupportedFileTypeError(BadRequestError):
    """Raised when an upload is not video, audio or image."""

    def __init__(self, mime_type: str) -> None:
        """Initialize UnsupportedFileTypeError.

        Args:
            mime_type: MIME type declared by the client.
        """
        self.mime_type = mime_type
        super().__init__('Unsupported file type')


class InvitationCodeAllocationError(ServiceError):
    """Raised when every generated invitation code collided."""

    def __init__(self, attempts: int) -> None:
        """Initialize InvitationCodeAllocationError.

        Args:
            attempts: Number of codes tried before giving up.
        """
        self.attempts = attempts
        super().__init__('Could not allocate invitation code')
