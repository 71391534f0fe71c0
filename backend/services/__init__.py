"""Business logic services."""

from .errors import (
    AuthError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    UploadTooLargeError,
    ValidationError,
)
from .images import (
    JPEG_CONTENT_TYPE,
    MAX_IMAGE_DIMENSION,
    process_image_bytes,
    read_upload_file,
)
from .pet_posts import PetPostService
from .post_store import AuthorView, CommentView, PostStore, PostView
from .identity_store import IdentityStore

__all__ = [
    "DomainError",
    "ValidationError",
    "ConflictError",
    "UploadTooLargeError",
    "AuthError",
    "AuthorizationError",
    "NotFoundError",
    "StorageError",
    "process_image_bytes",
    "read_upload_file",
    "MAX_IMAGE_DIMENSION",
    "JPEG_CONTENT_TYPE",
    "PetPostService",
    "PostStore",
    "PostView",
    "AuthorView",
    "CommentView",
    "IdentityStore",
]
