"""Authenticated principal passed into service operations."""

from __future__ import annotations

from dataclasses import dataclass

from models import User


@dataclass(frozen=True)
class Identity:
    """The caller resolved from a verified bearer token."""

    id: str
    username: str

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, username=user.username)
