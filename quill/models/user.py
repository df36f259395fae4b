"""ORM model for blog users (auth and RBAC)."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from quill.models.base import Base

ROLES = ("user", "admin")


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'. Email uniqueness is enforced by the unique index.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # passive_deletes: removing a user leaves its posts orphaned rather than nulled
    posts = relationship("Post", back_populates="author", passive_deletes="all")
