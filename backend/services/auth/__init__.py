"""Authentication domain services."""

from .credentials import (
    INVALID_CREDENTIALS_DETAIL,
    INVALID_TOKEN_DETAIL,
    MISSING_TOKEN_DETAIL,
    CredentialService,
)
from .identity import Identity

__all__ = [
    "CredentialService",
    "Identity",
    "INVALID_CREDENTIALS_DETAIL",
    "INVALID_TOKEN_DETAIL",
    "MISSING_TOKEN_DETAIL",
]
