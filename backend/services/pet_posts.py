"""Pet post aggregate operations.

Every mutating method takes the acting :class:`Identity` explicitly. Image
blobs are written before the post row and cleaned up best effort: a failed
blob delete is logged and never undoes the database change.
"""

from __future__ import annotations

import asyncio
import logging
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from models import PET_TYPE_VALUES, PetPost, PetType
from . import storage
from .auth.identity import Identity
from .errors import (
    AuthorizationError,
    NotFoundError,
    StorageError,
    UploadTooLargeError,
    ValidationError,
)
from .identity_store import IdentityStore
from .images import process_image_bytes
from .post_store import POST_NOT_FOUND_DETAIL, PostStore, PostView

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_BREED_LENGTH = 100
MAX_COMMENT_LENGTH = 500
ALL_PET_TYPES = "all"
MISSING_FIELDS_DETAIL = "Please fill in all required fields."


def parse_pet_type(value: str) -> PetType:
    """Match ``value`` against the known pet types, ignoring case."""
    lowered = value.strip().lower()
    for pet_type in PetType:
        if pet_type.value.lower() == lowered:
            return pet_type
    raise ValidationError(f"petType must be one of: {', '.join(PET_TYPE_VALUES)}")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _check_length(value: str, *, label: str, limit: int) -> str:
    if len(value) > limit:
        raise ValidationError(f"{label} must be at most {limit} characters")
    return value


class PetPostService:
    def __init__(self, session: AsyncSession, *, upload_max_bytes: int) -> None:
        self.posts = PostStore(session)
        self.identities = IdentityStore(session)
        self.upload_max_bytes = upload_max_bytes

    async def _store_image(self, author_id: str, image_bytes: bytes) -> str:
        """Validate, normalize and upload an image; return its object key."""
        if len(image_bytes) > self.upload_max_bytes:
            raise UploadTooLargeError(
                f"Image must be at most {self.upload_max_bytes // (1024 * 1024)} MiB"
            )
        try:
            processed_bytes, content_type = await asyncio.to_thread(
                process_image_bytes, image_bytes
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        object_key = f"posts/{author_id}/{uuid4().hex}.jpg"
        try:
            await asyncio.to_thread(
                storage.upload_object,
                object_key,
                processed_bytes,
                content_type,
            )
        except Exception as exc:
            raise StorageError("Failed to store image") from exc
        return object_key

    async def _discard_blob(self, object_key: str | None, *, post_id: int | None) -> None:
        if object_key is None:
            return
        try:
            await asyncio.to_thread(storage.delete_object, object_key)
        except Exception as cleanup_error:
            logger.warning(
                "Failed to delete post image",
                extra={"object_key": object_key, "post_id": post_id},
                exc_info=cleanup_error,
            )

    async def _require_owned_post(self, identity: Identity, post_id: int) -> PetPost:
        post = await self.posts.get(post_id)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND_DETAIL)
        if post.author_id != identity.id:
            raise AuthorizationError("Not authorized to modify this post")
        return post

    async def create(
        self,
        identity: Identity,
        *,
        title: str | None,
        description: str | None,
        pet_type: str | None,
        breed: str | None,
        image_bytes: bytes | None = None,
    ) -> PostView:
        clean_title = _clean(title)
        clean_description = _clean(description)
        clean_pet_type = _clean(pet_type)
        clean_breed = _clean(breed)
        if not (clean_title and clean_description and clean_pet_type and clean_breed):
            raise ValidationError(MISSING_FIELDS_DETAIL)

        post = PetPost(
            title=_check_length(clean_title, label="Title", limit=MAX_TITLE_LENGTH),
            description=clean_description,
            pet_type=parse_pet_type(clean_pet_type).value,
            breed=_check_length(clean_breed, label="Breed", limit=MAX_BREED_LENGTH),
            author_id=identity.id,
        )

        object_key: str | None = None
        if image_bytes:
            object_key = await self._store_image(identity.id, image_bytes)
            post.image_url = storage.image_url_for_key(object_key)

        try:
            post = await self.posts.add(post)
        except Exception:
            await self._discard_blob(object_key, post_id=None)
            raise

        if post.id is None:
            raise StorageError("Post record missing identifier")
        logger.info(
            "Pet post created",
            extra={"post_id": post.id, "author_id": identity.id},
        )
        return await self.posts.get_view(post.id)

    async def edit(
        self,
        identity: Identity,
        post_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        pet_type: str | None = None,
        breed: str | None = None,
        image_bytes: bytes | None = None,
    ) -> PostView:
        """Partially update a post owned by ``identity``.

        Omitted or blank fields keep their stored value.
        """
        post = await self._require_owned_post(identity, post_id)

        clean_title = _clean(title)
        clean_description = _clean(description)
        clean_pet_type = _clean(pet_type)
        clean_breed = _clean(breed)
        if clean_title is not None:
            post.title = _check_length(clean_title, label="Title", limit=MAX_TITLE_LENGTH)
        if clean_description is not None:
            post.description = clean_description
        if clean_pet_type is not None:
            post.pet_type = parse_pet_type(clean_pet_type).value
        if clean_breed is not None:
            post.breed = _check_length(clean_breed, label="Breed", limit=MAX_BREED_LENGTH)

        previous_object_key = storage.object_key_for_image_url(post.image_url)
        new_object_key: str | None = None
        if image_bytes:
            new_object_key = await self._store_image(identity.id, image_bytes)
            post.image_url = storage.image_url_for_key(new_object_key)

        try:
            await self.posts.save(post)
        except Exception:
            await self._discard_blob(new_object_key, post_id=post_id)
            raise

        if new_object_key is not None and previous_object_key != new_object_key:
            await self._discard_blob(previous_object_key, post_id=post_id)
        return await self.posts.get_view(post_id)

    async def delete(self, identity: Identity, post_id: int) -> None:
        post = await self._require_owned_post(identity, post_id)
        object_key = storage.object_key_for_image_url(post.image_url)

        await self.posts.delete(post_id)
        logger.info(
            "Pet post deleted",
            extra={"post_id": post_id, "author_id": identity.id},
        )
        await self._discard_blob(object_key, post_id=post_id)

    async def toggle_like(self, identity: Identity, post_id: int) -> PostView:
        await self.posts.toggle_like(post_id, identity.id)
        return await self.posts.get_view(post_id)

    async def add_comment(self, identity: Identity, post_id: int, text: str | None) -> PostView:
        clean_text = _clean(text)
        if clean_text is None:
            raise ValidationError("Comment text cannot be empty")
        _check_length(clean_text, label="Comment", limit=MAX_COMMENT_LENGTH)

        await self.posts.append_comment(post_id, identity.id, clean_text)
        return await self.posts.get_view(post_id)

    async def toggle_save(self, identity: Identity, post_id: int) -> bool:
        if not await self.posts.exists(post_id):
            raise NotFoundError(POST_NOT_FOUND_DETAIL)
        return await self.identities.toggle_saved(identity.id, post_id)

    async def unsave(self, identity: Identity, post_id: int) -> None:
        removed = await self.identities.remove_saved(identity.id, post_id)
        if not removed:
            raise NotFoundError("Post not found in saved list")

    async def list_posts(self, pet_type: str | None = None) -> list[PostView]:
        clean_pet_type = _clean(pet_type)
        if clean_pet_type is None or clean_pet_type.lower() == ALL_PET_TYPES:
            return await self.posts.list_views()
        return await self.posts.list_views(pet_type=parse_pet_type(clean_pet_type).value)

    async def list_by_breed(self, breed: str) -> list[PostView]:
        clean_breed = _clean(breed)
        if clean_breed is None:
            raise ValidationError("Breed must not be empty")
        return await self.posts.list_views(breed=clean_breed)

    async def list_by_author(self, author_id: str) -> list[PostView]:
        return await self.posts.list_views(author_id=author_id)

    async def list_saved(self, identity: Identity) -> list[PostView]:
        return await self.posts.list_saved_views(identity.id)

    async def get(self, post_id: int) -> PostView:
        return await self.posts.get_view(post_id)
