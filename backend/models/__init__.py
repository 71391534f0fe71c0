"""SQLModel models package."""

from .comment import Comment
from .like import Like
from .pet_post import PET_TYPE_VALUES, PetPost, PetType
from .saved_post import SavedPost
from .user import User

__all__ = [
    "User",
    "PetPost",
    "PetType",
    "PET_TYPE_VALUES",
    "Like",
    "Comment",
    "SavedPost",
]
