"""Shared fixtures for API tests: in-memory SQLite, the app's own token service, TestClient.

Import this module before any quill module so the environment defaults apply.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from quill.core.config import Settings
from quill.core.database import get_db
from quill.core.security import TokenService
from quill.main import create_app
from quill.models import Base, User
from quill.services.users import create_user

TEST_SECRET = "unit-test-signing-secret"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Base class wiring a TestClient to an isolated database and token service."""

    settings_overrides: dict = {}

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        options = {
            "APP_ENV": "dev",
            "DATABASE_URL": "sqlite://",
            "JWT_SECRET": TEST_SECRET,
            "BCRYPT_ROUNDS": 4,
        }
        options.update(self.settings_overrides)
        settings = Settings(**options)
        self.app = create_app(settings)
        self.tokens: TokenService = self.app.state.token_service

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        self.app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def tearDown(self) -> None:
        self.client.close()
        self.app.dependency_overrides.clear()

    def make_user(
        self,
        name: str = "Test User",
        email: str = "user@example.com",
        password: str = "secret123",
        role: str = "user",
    ) -> User:
        with self.SessionLocal() as db:
            return create_user(db, name, email, password, role=role)

    def token_for(self, user: User) -> str:
        return self.tokens.issue(user)
