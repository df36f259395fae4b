"""Tests for registration and login, including the duplicate-email race."""

from tests.support import ApiTestCase, bearer

import unittest
from unittest.mock import patch

from quill.core.errors import EmailAlreadyRegisteredError
from quill.core.security import TokenClaims
from quill.models import User
from quill.services.users import create_user


class TestRegister(ApiTestCase):
    def _register(self, **body: object):
        payload = {"name": "Ada", "email": "ada@example.com", "password": "secret123"}
        payload.update(body)
        return self.client.post("/api/v1/auth/register", json=payload)

    def test_register_returns_user_and_token(self) -> None:
        response = self._register()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["message"], "User registered successfully")
        self.assertEqual(body["user"]["role"], "user")
        self.assertNotIn("password_hash", body["user"])
        claims = self.tokens.verify(body["token"])
        self.assertIsInstance(claims, TokenClaims)
        self.assertEqual(claims.user_id, str(body["user"]["id"]))
        self.assertEqual(claims.email, "ada@example.com")

    def test_registered_token_opens_gated_route(self) -> None:
        token = self._register().json()["token"]
        response = self.client.get("/api/v1/auth/me", headers=bearer(token))
        self.assertEqual(response.status_code, 200)

    def test_password_is_stored_hashed(self) -> None:
        self._register()
        with self.SessionLocal() as db:
            user = db.query(User).filter(User.email == "ada@example.com").one()
            self.assertNotEqual(user.password_hash, "secret123")
            self.assertTrue(user.password_hash.startswith("$2"))

    def test_register_cannot_choose_role(self) -> None:
        response = self._register(role="admin")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["user"]["role"], "user")

    def test_missing_fields(self) -> None:
        for missing in ("name", "email", "password"):
            with self.subTest(missing=missing):
                response = self._register(**{missing: ""})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.json(), {"error": "Name, email, and password are required"}
                )

    def test_short_password(self) -> None:
        response = self._register(password="12345")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"error": "Password must be at least 6 characters"}
        )

    def test_password_over_72_bytes(self) -> None:
        response = self._register(password="p" * 73)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Password cannot exceed 72 bytes"})
        self.assertEqual(self._register(password="p" * 72).status_code, 201)

    def test_duplicate_email(self) -> None:
        self._register()
        response = self._register(name="Someone Else")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "User with this email already exists"})

    def test_email_is_case_sensitive(self) -> None:
        self._register()
        self.assertEqual(self._register(email="ADA@example.com").status_code, 201)


class TestDuplicateEmailRace(ApiTestCase):
    """
    Two registrations for dup@x.com whose existence checks both pass.

    The pre-check alone cannot prevent this; the unique index on users.email
    does, so exactly one insert commits and the other gets the same error as
    a plain duplicate.
    """

    def test_unique_index_decides_the_race(self) -> None:
        outcomes = []
        with patch("quill.services.users.get_user_by_email", return_value=None):
            for name in ("First", "Second"):
                with self.SessionLocal() as db:
                    try:
                        create_user(db, name, "dup@x.com", "secret123")
                        outcomes.append("created")
                    except EmailAlreadyRegisteredError as e:
                        outcomes.append(e.message)

        self.assertEqual(outcomes, ["created", "User with this email already exists"])
        with self.SessionLocal() as db:
            self.assertEqual(db.query(User).filter(User.email == "dup@x.com").count(), 1)

    def test_race_loser_gets_400_over_http(self) -> None:
        body = {"name": "A", "email": "dup@x.com", "password": "secret123"}
        with patch("quill.services.users.get_user_by_email", return_value=None):
            first = self.client.post("/api/v1/auth/register", json=body)
            second = self.client.post("/api/v1/auth/register", json=body)
        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json(), {"error": "User with this email already exists"})


class TestLogin(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self.make_user(email="ada@example.com", password="secret123")

    def test_login_success(self) -> None:
        response = self.client.post(
            "/api/v1/auth/login",
            json={"email": "ada@example.com", "password": "secret123"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["user"]["id"], self.user.id)
        claims = self.tokens.verify(body["token"])
        self.assertEqual(claims.user_id, str(self.user.id))

    def test_wrong_password(self) -> None:
        response = self.client.post(
            "/api/v1/auth/login",
            json={"email": "ada@example.com", "password": "wrong-pass"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid email or password"})

    def test_unknown_email_same_error(self) -> None:
        response = self.client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "secret123"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid email or password"})

    def test_missing_fields(self) -> None:
        response = self.client.post("/api/v1/auth/login", json={"email": "ada@example.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Email and password are required"})


if __name__ == "__main__":
    unittest.main()
