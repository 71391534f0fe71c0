"""Pet post aggregate root."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text, func
from sqlmodel import Field, SQLModel

from .timestamps import utcnow


class PetType(str, Enum):
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    OTHER = "Other"


PET_TYPE_VALUES = tuple(pet_type.value for pet_type in PetType)


class PetPost(SQLModel, table=True):
    """A post about a pet; owns its comments and like set."""

    __tablename__ = "pet_posts"
    __table_args__ = (
        CheckConstraint(
            "pet_type IN ('Dog', 'Cat', 'Bird', 'Other')",
            name="ck_pet_posts_pet_type",
        ),
        Index("ix_pet_posts_created_at_id", "created_at", "id"),
        Index("ix_pet_posts_author_created_at", "author_id", "created_at"),
        Index("ix_pet_posts_pet_type_created_at", "pet_type", "created_at"),
    )

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(sa_column=Column(String(200), nullable=False))
    description: str = Field(sa_column=Column(Text, nullable=False))
    pet_type: str = Field(sa_column=Column(String(16), nullable=False))
    breed: str = Field(sa_column=Column(String(100), nullable=False))
    image_url: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    author_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    created_at: datetime = Field(
        sa_column=Column(
            DateTime(timezone=True),
            default=utcnow,
            server_default=func.now(),
            nullable=False,
        )
    )
    updated_at: datetime = Field(
        sa_column=Column(
            DateTime(timezone=True),
            default=utcnow,
            server_default=func.now(),
            onupdate=utcnow,
            nullable=False,
        )
    )
