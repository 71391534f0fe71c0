"""Persistence for users and their saved-post sets."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import delete, func, insert, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_unique_violation
from models import PetPost, SavedPost, User
from .errors import ConflictError
from .transactions import affected_rows, commit_or_raise

DUPLICATE_USER_DETAIL = "User with that username or email already exists"


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _asc(column: Any) -> Any:
    return cast(Any, column).asc()


def normalize_email(value: str) -> str:
    return value.strip().lower()


class IdentityStore:
    """Users plus the ordered, duplicate-free ``saved_posts`` set."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: str) -> User | None:
        result = await self.session.execute(
            select(User).where(_eq(User.id, user_id)).limit(1)
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        lowered_email_column = cast(Any, func.lower(cast(Any, User.email)))
        result = await self.session.execute(
            select(User)
            .where(_eq(lowered_email_column, normalize_email(email)))
            .order_by(_asc(User.created_at), _asc(User.id))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def registration_conflict_exists(
        self,
        *,
        username: str,
        normalized_email: str,
    ) -> bool:
        lowered_email_column = cast(Any, func.lower(cast(Any, User.email)))
        existing = await self.session.execute(
            select(cast(ColumnElement[str], User.id))
            .where(
                or_(
                    _eq(User.username, username),
                    _eq(lowered_email_column, normalized_email),
                )
            )
            .limit(1)
        )
        return existing.scalar_one_or_none() is not None

    async def add(self, user: User) -> User:
        self.session.add(user)
        try:
            await commit_or_raise(self.session, failure_detail="Failed to create user")
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise ConflictError(DUPLICATE_USER_DETAIL) from exc
            raise
        await self.session.refresh(user)
        return user

    async def save(self, user: User) -> User:
        self.session.add(user)
        await commit_or_raise(self.session, failure_detail="Failed to update user")
        return user

    async def saved_post_ids(self, user_id: str) -> list[int]:
        """Saved post ids in save order, skipping posts that no longer exist."""
        saved_post_id_column = cast(ColumnElement[int], SavedPost.post_id)
        result = await self.session.execute(
            select(saved_post_id_column)
            .join(PetPost, _eq(PetPost.id, SavedPost.post_id))
            .where(_eq(SavedPost.user_id, user_id))
            .order_by(_asc(SavedPost.id))
        )
        return [int(post_id) for post_id in result.scalars().all()]

    async def toggle_saved(self, user_id: str, post_id: int) -> bool:
        """Flip membership of ``post_id``; return True when it is now saved."""
        result = await self.session.execute(
            delete(SavedPost).where(
                _eq(SavedPost.user_id, user_id),
                _eq(SavedPost.post_id, post_id),
            )
        )
        if affected_rows(result) > 0:
            await commit_or_raise(self.session, failure_detail="Failed to unsave post")
            return False

        try:
            await self.session.execute(
                insert(SavedPost).values(user_id=user_id, post_id=post_id)
            )
            await commit_or_raise(self.session, failure_detail="Failed to save post")
        except IntegrityError as exc:
            await self.session.rollback()
            # A concurrent toggle by the same user inserted first.
            if not is_unique_violation(exc):
                raise
        return True

    async def remove_saved(self, user_id: str, post_id: int) -> bool:
        """Remove ``post_id`` from the saved set; False when it was not there."""
        result = await self.session.execute(
            delete(SavedPost).where(
                _eq(SavedPost.user_id, user_id),
                _eq(SavedPost.post_id, post_id),
            )
        )
        removed = affected_rows(result) > 0
        if removed:
            await commit_or_raise(self.session, failure_detail="Failed to unsave post")
        else:
            await self.session.rollback()
        return removed
