"""Database helpers."""

from .errors import is_unique_violation
from .session import StoreHandle

__all__ = ["StoreHandle", "is_unique_violation"]
