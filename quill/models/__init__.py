"""SQLAlchemy ORM models."""

from quill.models.base import MAX_ID, Base
from quill.models.post import Post
from quill.models.user import ROLES, User

__all__ = ["Base", "MAX_ID", "Post", "ROLES", "User"]
