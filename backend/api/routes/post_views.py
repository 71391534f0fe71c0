"""Response models for pet posts and users."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from services import CommentView, PostView


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorResponse(CamelModel):
    id: str
    username: str


class CommentResponse(CamelModel):
    id: int
    text: str
    author: AuthorResponse
    created_at: datetime

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        return cls(
            id=view.id,
            text=view.text,
            author=AuthorResponse(id=view.author.id, username=view.author.username),
            created_at=view.created_at,
        )


class PetPostResponse(CamelModel):
    id: int
    title: str
    description: str
    pet_type: str
    breed: str
    image_url: str | None = None
    author: AuthorResponse
    likes: list[str]
    comments: list[CommentResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: PostView) -> "PetPostResponse":
        post = view.post
        if post.id is None:
            raise ValueError("Post record missing identifier")
        return cls(
            id=post.id,
            title=post.title,
            description=post.description,
            pet_type=post.pet_type,
            breed=post.breed,
            image_url=post.image_url or None,
            author=AuthorResponse(id=view.author.id, username=view.author.username),
            likes=list(view.likes),
            comments=[CommentResponse.from_view(comment) for comment in view.comments],
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    created_at: datetime
    saved_posts: list[int] = []


def to_post_responses(views: list[PostView]) -> list[PetPostResponse]:
    return [PetPostResponse.from_view(view) for view in views]
