"""
Exception hierarchy for storagebox.

Every error carries the HTTP status it maps to and a client-facing message.
Handlers in ``storagebox.main`` turn them into ``{"message": ...}`` responses.
"""
from fastapi import status


class StorageBoxError(Exception):
    """Base exception for API errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An error occurred"

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(StorageBoxError):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"


class NoFileError(ValidationError):
    """Upload request without file content."""
    default_message = "no file provided"


class DuplicateError(StorageBoxError):
    """Email already registered."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "email already exists"


class AuthenticationError(StorageBoxError):
    """Unknown email or wrong password."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class InvalidTokenError(StorageBoxError):
    """Missing, malformed, forged or expired session token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class NotFoundError(StorageBoxError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "File not found"


class DependencyError(StorageBoxError):
    """An external collaborator (blob store) failed."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Service temporarily unavailable"


class UploadError(DependencyError):
    default_message = "Upload failed"


class InternalError(StorageBoxError):
    default_message = "Internal server error"
