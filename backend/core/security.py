"""Password hashing and bearer token helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from .config import Settings

ACCESS_TOKEN_TYPE = "access"

_password_hasher = PasswordHasher()


@dataclass(frozen=True)
class CredentialConfig:
    """Signing material for bearer tokens."""

    secret_key: str
    algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(days=1)

    @classmethod
    def from_settings(cls, source: Settings) -> "CredentialConfig":
        return cls(
            secret_key=source.jwt_secret_key,
            algorithm=source.jwt_algorithm,
            access_token_ttl=timedelta(minutes=source.access_token_expire_minutes),
        )


def hash_password(password: str) -> str:
    """Return a salted argon2 hash of ``password``."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    return _password_hasher.check_needs_rehash(password_hash)


def create_access_token(
    subject: str,
    config: CredentialConfig,
    *,
    now: datetime | None = None,
) -> str:
    """Issue a signed token whose ``sub`` claim is ``subject``."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "type": ACCESS_TOKEN_TYPE,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + config.access_token_ttl).timestamp()),
    }
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_token(token: str, config: CredentialConfig) -> dict[str, Any]:
    """Return the verified token payload.

    Raises ValueError when the token is malformed, wrongly signed or expired.
    """
    try:
        payload = jwt.decode(
            token,
            config.secret_key,
            algorithms=[config.algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ValueError("Token expired") from exc
    except jwt.PyJWTError as exc:
        raise ValueError("Invalid token") from exc
    return payload
