"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from api.deps import get_credential_service, get_current_identity
from models import User
from services.auth import CredentialService, Identity
from .post_views import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


class SignupRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def _reject_email_like_username(cls, value: str) -> str:
        normalized = value.strip()
        if "@" in normalized:
            raise ValueError("Username cannot contain '@'")
        return normalized


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


def _user_response(user: User, saved_posts: list[int] | None = None) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at,
        saved_posts=saved_posts or [],
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    payload: SignupRequest,
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthResponse:
    user, token = await credential_service.register(
        payload.username,
        str(payload.email),
        payload.password,
    )
    return AuthResponse(token=token, user=_user_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthResponse:
    user, token = await credential_service.login(payload.email, payload.password)
    _, saved_posts = await credential_service.profile(Identity.from_user(user))
    return AuthResponse(token=token, user=_user_response(user, saved_posts))


@router.get("/me", response_model=UserResponse)
async def read_current_user(
    identity: Identity = Depends(get_current_identity),
    credential_service: CredentialService = Depends(get_credential_service),
) -> UserResponse:
    user, saved_posts = await credential_service.profile(identity)
    return _user_response(user, saved_posts)
