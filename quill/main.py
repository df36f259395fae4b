"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quill.api.v1 import build_router
from quill.core.config import Settings, get_settings
from quill.core.database import SessionLocal, build_engine, build_session_factory
from quill.core.logging_config import configure_logging
from quill.core.security import build_token_service

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTPException as {"error": <detail>}."""
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query params are client errors (400) naming the first bad field."""
    errors = exc.errors()
    if not errors:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid value")
    return _error(status.HTTP_400_BAD_REQUEST, f"{field}: {message}" if field else message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure server-side; the client only sees a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI app from settings (defaults to the cached process settings).

    The settings, the TokenService signing with their JWT secret and the session
    factory bound to their DATABASE_URL live on app.state, where the request
    dependencies read them. Only the bcrypt cost still comes from process settings.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Quill API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_service = build_token_service(settings)
    if settings is get_settings():
        app.state.session_factory = SessionLocal
    else:
        app.state.session_factory = build_session_factory(
            build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        )

    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    include_seeding = settings.TEST_ENDPOINTS_ENABLED and settings.APP_ENV == "dev"
    app.include_router(build_router(include_seeding=include_seeding), prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Quill API"}

    return app


app = create_app()
