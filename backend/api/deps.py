"""Request-scoped dependencies and the bearer-token guard."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core import CredentialConfig
from db import StoreHandle
from services import PetPostService
from services.auth import CredentialService, Identity

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> StoreHandle:
    return request.app.state.store


def get_credential_config(request: Request) -> CredentialConfig:
    return request.app.state.credential_config


async def get_db(store: StoreHandle = Depends(get_store)) -> AsyncIterator[AsyncSession]:
    async with store.session() as session:
        yield session


def get_credential_service(
    session: AsyncSession = Depends(get_db),
    config: CredentialConfig = Depends(get_credential_config),
) -> CredentialService:
    return CredentialService(session, config)


def get_pet_post_service(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> PetPostService:
    return PetPostService(session, upload_max_bytes=request.app.state.upload_max_bytes)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> Identity:
    """Resolve the caller or fail with 401 before any handler work runs."""
    token = credentials.credentials if credentials is not None else None
    return await credential_service.resolve_identity(token)
