"""Commit helpers that translate driver failures into domain errors."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import StorageError


async def commit_or_raise(session: AsyncSession, *, failure_detail: str) -> None:
    """Commit the session; roll back and raise StorageError on failure.

    IntegrityError is re-raised untouched so callers can detect unique
    violations.
    """
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StorageError(failure_detail) from exc


def affected_rows(result: Any) -> int:
    return int(cast(Any, result).rowcount or 0)
