"""API routers."""

from fastapi import APIRouter

from . import auth, pet_posts
from .media import router as media_router

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(pet_posts.router)


@api_router.get("/test", tags=["health"])
async def health_check() -> dict[str, str]:
    return {"message": "Server is running!"}


__all__ = ["api_router", "media_router"]
