"""Database engines and per-request sessions (PostgreSQL, or SQLite for local runs)."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from quill.core.config import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    # SQLite connections are shared across FastAPI's threadpool workers.
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Process-wide session factory for CLI scripts; apps built by create_app carry their own.
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
SessionLocal = build_session_factory(engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a session from the app's factory and closes it when done."""
    factory = getattr(request.app.state, "session_factory", SessionLocal)
    db = factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
