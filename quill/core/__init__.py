"""Core app configuration, database and security."""

from quill.core.config import get_settings, settings
from quill.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
