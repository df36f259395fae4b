"""Health check: database reachability and the settings this app was built with."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from quill.core.config import Settings
from quill.core.database import check_db_connected, get_db
from quill.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    settings: Settings = request.app.state.settings
    return HealthResponse(
        version=request.app.version,
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        database_backend=db.get_bind().dialect.name,
        seeding_enabled=settings.TEST_ENDPOINTS_ENABLED and settings.APP_ENV == "dev",
    )
