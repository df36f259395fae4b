"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy.orm import DeclarativeBase

# Largest value an Integer primary key can hold (32-bit signed on PostgreSQL).
MAX_ID = 2**31 - 1


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
