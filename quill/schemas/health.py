"""Health check payload."""

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """
    Liveness plus what the running app was configured with.

    database_backend is the SQLAlchemy dialect name ("postgresql", "sqlite");
    seeding_enabled tells whether the dev-only /test routes are mounted.
    """

    status: Literal["ok"] = "ok"
    version: str
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
    database_backend: str
    seeding_enabled: bool
