"""Persistence for the pet post aggregate.

Likes, comments and saves are separate rows keyed by post id, so every
interaction is a single INSERT or DELETE against the latest committed state
rather than a load-mutate-store of the whole post.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, cast

from sqlalchemy import Select, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_unique_violation
from models import Comment, Like, PetPost, SavedPost, User
from models.timestamps import utcnow
from .errors import NotFoundError
from .transactions import affected_rows, commit_or_raise

POST_NOT_FOUND_DETAIL = "Post not found"


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _asc(column: Any) -> Any:
    return cast(Any, column).asc()


def _desc(column: Any) -> Any:
    return cast(Any, column).desc()


@dataclass(frozen=True)
class AuthorView:
    id: str
    username: str


@dataclass(frozen=True)
class CommentView:
    id: int
    text: str
    author: AuthorView
    created_at: datetime


@dataclass(frozen=True)
class PostView:
    """A post with its author, like set and comments resolved for display."""

    post: PetPost
    author: AuthorView
    likes: tuple[str, ...]
    comments: tuple[CommentView, ...]


class PostStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, post_id: int) -> PetPost | None:
        result = await self.session.execute(
            select(PetPost)
            .where(_eq(PetPost.id, post_id))
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def exists(self, post_id: int) -> bool:
        post_id_column = cast(ColumnElement[int], PetPost.id)
        result = await self.session.execute(
            select(post_id_column).where(_eq(post_id_column, post_id)).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def image_in_use(self, image_url: str) -> bool:
        post_id_column = cast(ColumnElement[int], PetPost.id)
        result = await self.session.execute(
            select(post_id_column).where(_eq(PetPost.image_url, image_url)).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def add(self, post: PetPost) -> PetPost:
        self.session.add(post)
        await commit_or_raise(self.session, failure_detail="Failed to create post")
        await self.session.refresh(post)
        return post

    async def save(self, post: PetPost) -> PetPost:
        post.updated_at = utcnow()
        self.session.add(post)
        await commit_or_raise(self.session, failure_detail="Failed to update post")
        await self.session.refresh(post)
        return post

    async def delete(self, post_id: int) -> None:
        """Remove the post together with its likes, comments and saved references."""
        await self.session.execute(delete(Like).where(_eq(Like.post_id, post_id)))
        await self.session.execute(delete(Comment).where(_eq(Comment.post_id, post_id)))
        await self.session.execute(delete(SavedPost).where(_eq(SavedPost.post_id, post_id)))
        result = await self.session.execute(delete(PetPost).where(_eq(PetPost.id, post_id)))
        if affected_rows(result) == 0:
            await self.session.rollback()
            raise NotFoundError(POST_NOT_FOUND_DETAIL)
        await commit_or_raise(self.session, failure_detail="Failed to delete post")

    async def _touch(self, post_id: int) -> None:
        # Opening with a write takes the post's row lock for the rest of the
        # transaction and doubles as the existence check.
        result = await self.session.execute(
            update(PetPost)
            .where(_eq(PetPost.id, post_id))
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if affected_rows(result) == 0:
            await self.session.rollback()
            raise NotFoundError(POST_NOT_FOUND_DETAIL)

    async def toggle_like(self, post_id: int, user_id: str) -> bool:
        """Flip ``user_id`` in the like set; return True when it is now liked."""
        await self._touch(post_id)
        result = await self.session.execute(
            delete(Like).where(
                _eq(Like.post_id, post_id),
                _eq(Like.user_id, user_id),
            )
        )
        if affected_rows(result) > 0:
            await commit_or_raise(self.session, failure_detail="Failed to update like")
            return False

        try:
            await self.session.execute(
                insert(Like).values(user_id=user_id, post_id=post_id)
            )
            await commit_or_raise(self.session, failure_detail="Failed to update like")
        except IntegrityError as exc:
            await self.session.rollback()
            if not is_unique_violation(exc):
                raise
        return True

    async def append_comment(self, post_id: int, author_id: str, text: str) -> None:
        await self._touch(post_id)
        await self.session.execute(
            insert(Comment).values(post_id=post_id, author_id=author_id, text=text)
        )
        await commit_or_raise(self.session, failure_detail="Failed to add comment")

    def _post_query(self) -> Select[Any]:
        post_entity = cast(Any, PetPost)
        author_username_column = cast(ColumnElement[str], User.username)
        return (
            select(post_entity, author_username_column)
            .join(User, _eq(User.id, PetPost.author_id))
            .execution_options(populate_existing=True)
        )

    async def get_view(self, post_id: int) -> PostView:
        result = await self.session.execute(
            self._post_query().where(_eq(PetPost.id, post_id)).limit(1)
        )
        rows = result.all()
        if not rows:
            raise NotFoundError(POST_NOT_FOUND_DETAIL)
        views = await self._hydrate(rows)
        return views[0]

    async def list_views(
        self,
        *,
        pet_type: str | None = None,
        author_id: str | None = None,
        breed: str | None = None,
    ) -> list[PostView]:
        """Posts newest first, optionally narrowed by pet type, author or breed."""
        query = self._post_query()
        if pet_type is not None:
            query = query.where(_eq(PetPost.pet_type, pet_type))
        if author_id is not None:
            query = query.where(_eq(PetPost.author_id, author_id))
        if breed is not None:
            lowered_breed_column = cast(Any, func.lower(cast(Any, PetPost.breed)))
            query = query.where(_eq(lowered_breed_column, breed.strip().lower()))
        query = query.order_by(_desc(PetPost.created_at), _desc(PetPost.id))

        result = await self.session.execute(query)
        return await self._hydrate(result.all())

    async def list_saved_views(self, user_id: str) -> list[PostView]:
        """Posts saved by ``user_id`` in save order."""
        query = (
            self._post_query()
            .join(SavedPost, _eq(SavedPost.post_id, PetPost.id))
            .where(_eq(SavedPost.user_id, user_id))
            .order_by(_asc(SavedPost.id))
        )
        result = await self.session.execute(query)
        return await self._hydrate(result.all())

    async def _hydrate(self, rows: Sequence[Any]) -> list[PostView]:
        post_ids = [post.id for post, _username in rows if post.id is not None]
        if not post_ids:
            return []

        like_post_id_column = cast(ColumnElement[int], Like.post_id)
        like_user_id_column = cast(ColumnElement[str], Like.user_id)
        like_result = await self.session.execute(
            select(like_post_id_column, like_user_id_column)
            .where(like_post_id_column.in_(post_ids))
            .order_by(_asc(Like.created_at), _asc(like_user_id_column))
        )
        likes_by_post: dict[int, list[str]] = {post_id: [] for post_id in post_ids}
        for post_id, user_id in like_result.all():
            likes_by_post[post_id].append(user_id)

        comment_entity = cast(Any, Comment)
        comment_post_id_column = cast(ColumnElement[int], Comment.post_id)
        author_username_column = cast(ColumnElement[str], User.username)
        comment_result = await self.session.execute(
            select(comment_entity, author_username_column)
            .join(User, _eq(User.id, Comment.author_id))
            .where(comment_post_id_column.in_(post_ids))
            .order_by(_asc(Comment.id))
        )
        comments_by_post: dict[int, list[CommentView]] = {post_id: [] for post_id in post_ids}
        for comment, username in comment_result.all():
            if comment.id is None:
                continue
            comments_by_post[comment.post_id].append(
                CommentView(
                    id=comment.id,
                    text=comment.text,
                    author=AuthorView(id=comment.author_id, username=username),
                    created_at=comment.created_at,
                )
            )

        views: list[PostView] = []
        for post, username in rows:
            if post.id is None:
                continue
            views.append(
                PostView(
                    post=post,
                    author=AuthorView(id=post.author_id, username=username),
                    likes=tuple(likes_by_post[post.id]),
                    comments=tuple(comments_by_post[post.id]),
                )
            )
        return views
