"""Redirects from recorded image paths to short-lived blob URLs."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from core import settings
from services import PostStore, storage

router = APIRouter(prefix=settings.uploads_path_prefix.rstrip("/"), tags=["media"])

SIGNED_MEDIA_URL_TTL_SECONDS = 120
MAX_OBJECT_KEY_LENGTH = 255
MEDIA_NO_STORE_CACHE_CONTROL = "no-store"


@router.get("/{object_key:path}", response_class=RedirectResponse)
async def redirect_to_media(
    object_key: str,
    session: AsyncSession = Depends(get_db),
) -> RedirectResponse:
    normalized_key = object_key.strip().lstrip("/")
    if not normalized_key or len(normalized_key) > MAX_OBJECT_KEY_LENGTH:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")

    image_url = storage.image_url_for_key(normalized_key)
    if not await PostStore(session).image_in_use(image_url):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")

    signed_url = await asyncio.to_thread(
        storage.create_presigned_get_url,
        normalized_key,
        expires_seconds=SIGNED_MEDIA_URL_TTL_SECONDS,
    )
    response = RedirectResponse(signed_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    response.headers["Cache-Control"] = MEDIA_NO_STORE_CACHE_CONTROL
    return response
