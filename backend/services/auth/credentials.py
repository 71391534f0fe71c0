"""Registration, login and bearer token verification."""

from __future__ import annotations

import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from core import (
    ACCESS_TOKEN_TYPE,
    CredentialConfig,
    create_access_token,
    decode_token,
    hash_password,
    needs_rehash,
    verify_password,
)
from models import User
from .identity import Identity
from ..errors import AuthError, ConflictError, ValidationError
from ..identity_store import DUPLICATE_USER_DETAIL, IdentityStore, normalize_email

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 30
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_DETAIL = "Invalid credentials"
MISSING_TOKEN_DETAIL = "No authentication token, access denied."
INVALID_TOKEN_DETAIL = "Invalid token, please log in again."


def _validate_registration(username: str, email: str, password: str) -> None:
    if not username or not email or not password:
        raise ValidationError("Username, email and password are required")
    if not MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be between {MIN_USERNAME_LENGTH} and {MAX_USERNAME_LENGTH} characters"
        )
    if "@" in username:
        raise ValidationError("Username cannot contain '@'")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError("Email address is invalid") from exc
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


class CredentialService:
    """Issues and checks stateless bearer tokens.

    There is no server-side session table: every issued token stays valid
    until it expires, and logging out is the client discarding its token.
    """

    def __init__(self, session: AsyncSession, config: CredentialConfig) -> None:
        self.identities = IdentityStore(session)
        self.config = config

    def issue_token(self, user: User) -> str:
        return create_access_token(str(user.id), self.config)

    async def register(self, username: str, email: str, password: str) -> tuple[User, str]:
        normalized_username = username.strip()
        normalized_email = normalize_email(email)
        _validate_registration(normalized_username, normalized_email, password)

        if await self.identities.registration_conflict_exists(
            username=normalized_username,
            normalized_email=normalized_email,
        ):
            raise ConflictError(DUPLICATE_USER_DETAIL)

        user = await self.identities.add(
            User(
                username=normalized_username,
                email=normalized_email,
                password_hash=hash_password(password),
            )
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user, self.issue_token(user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self.identities.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError(INVALID_CREDENTIALS_DETAIL)

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            await self.identities.save(user)
        return user, self.issue_token(user)

    def verify(self, token: str | None) -> str:
        """Return the user id encoded in ``token`` or raise AuthError."""
        if not token:
            raise AuthError(MISSING_TOKEN_DETAIL)
        try:
            payload = decode_token(token, self.config)
        except ValueError as exc:
            raise AuthError(INVALID_TOKEN_DETAIL) from exc

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise AuthError(INVALID_TOKEN_DETAIL)
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise AuthError(INVALID_TOKEN_DETAIL)
        return subject

    async def resolve_identity(self, token: str | None) -> Identity:
        user_id = self.verify(token)
        user = await self.identities.get(user_id)
        if user is None:
            raise AuthError(INVALID_TOKEN_DETAIL)
        return Identity.from_user(user)

    async def profile(self, identity: Identity) -> tuple[User, list[int]]:
        """Return the caller's user record and saved post ids in save order."""
        user = await self.identities.get(identity.id)
        if user is None:
            raise AuthError(INVALID_TOKEN_DETAIL)
        return user, await self.identities.saved_post_ids(identity.id)
