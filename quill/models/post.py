"""ORM model for blog posts."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from quill.models.base import Base

TITLE_MAX_LENGTH = 200


class Post(Base):
    """
    A text post owned by one user.

    author_id is set at creation and never changed. No ON DELETE rule: removing
    a user can leave posts whose author no longer resolves.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    author = relationship("User", back_populates="posts")
