"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routes import api_router, media_router
from core import CredentialConfig, settings
from core.logging_config import configure_logging
from db import StoreHandle

API_PREFIX = "/api"


def create_app(
    *,
    store: StoreHandle | None = None,
    credential_config: CredentialConfig | None = None,
) -> FastAPI:
    """Build the application around an explicit store and signing config."""
    configure_logging(settings.log_level)
    store_handle = store or StoreHandle.from_settings(settings)
    credentials = credential_config or CredentialConfig.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        store_handle.init()
        try:
            yield
        finally:
            await store_handle.dispose()

    application = FastAPI(title="PawPosts API", lifespan=lifespan)
    application.state.store = store_handle
    application.state.credential_config = credentials
    application.state.upload_max_bytes = settings.upload_max_bytes

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)
    application.include_router(api_router, prefix=API_PREFIX)
    application.include_router(media_router)
    return application


app = create_app()
