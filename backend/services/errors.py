"""Domain error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for errors with a client-facing message and HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or missing input the caller can correct."""

    status_code = 400


class ConflictError(ValidationError):
    """Input collides with an existing unique record."""

    status_code = 409


class UploadTooLargeError(ValidationError):
    """Uploaded payload exceeds the configured size limit."""

    status_code = 413


class AuthError(DomainError):
    """Missing, malformed or expired credentials."""

    status_code = 401


class AuthorizationError(DomainError):
    """Authenticated, but not allowed to act on the resource."""

    status_code = 403


class NotFoundError(DomainError):
    """Referenced aggregate does not exist."""

    status_code = 404


class StorageError(DomainError):
    """Durable store or blob store failure."""

    status_code = 503


__all__ = [
    "DomainError",
    "ValidationError",
    "ConflictError",
    "UploadTooLargeError",
    "AuthError",
    "AuthorizationError",
    "NotFoundError",
    "StorageError",
]
