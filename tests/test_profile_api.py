"""Tests for reading and updating the current user's profile."""

from tests.support import ApiTestCase, bearer

import unittest

from quill.core.security import verify_password
from quill.models import User


class ProfileTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self.make_user(name="Ada", email="ada@example.com", password="secret123")
        self.headers = bearer(self.token_for(self.user))

    def put(self, **body: str):
        return self.client.put("/api/v1/users/profile", json=body, headers=self.headers)

    def stored(self) -> User:
        with self.SessionLocal() as db:
            return db.get(User, self.user.id)


class TestGetProfile(ProfileTestCase):
    def test_returns_user_without_hash(self) -> None:
        response = self.client.get("/api/v1/users/profile", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        user = response.json()["user"]
        self.assertEqual(user["name"], "Ada")
        self.assertEqual(user["role"], "user")
        self.assertNotIn("password_hash", user)

    def test_requires_authentication(self) -> None:
        self.assertEqual(self.client.get("/api/v1/users/profile").status_code, 401)


class TestUpdateProfile(ProfileTestCase):
    def test_update_name_and_email(self) -> None:
        response = self.put(name="Ada L.", email="lovelace@example.com")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Profile updated successfully")
        self.assertEqual(body["user"]["name"], "Ada L.")
        self.assertEqual(body["user"]["email"], "lovelace@example.com")

    def test_empty_values_are_ignored(self) -> None:
        response = self.put(name="", email="")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["email"], "ada@example.com")

    def test_old_token_still_works_after_email_change(self) -> None:
        self.put(email="lovelace@example.com")
        response = self.client.get("/api/v1/auth/me", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["email"], "lovelace@example.com")

    def test_email_taken_by_other_user(self) -> None:
        self.make_user(name="Grace", email="grace@example.com")
        response = self.put(email="grace@example.com")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Email is already taken"})
        self.assertEqual(self.stored().email, "ada@example.com")

    def test_keeping_own_email_is_allowed(self) -> None:
        self.assertEqual(self.put(email="ada@example.com").status_code, 200)

    def test_change_password(self) -> None:
        response = self.put(currentPassword="secret123", newPassword="newsecret")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(verify_password("newsecret", self.stored().password_hash))
        login = self.client.post(
            "/api/v1/auth/login",
            json={"email": "ada@example.com", "password": "newsecret"},
        )
        self.assertEqual(login.status_code, 200)

    def test_new_password_requires_current(self) -> None:
        response = self.put(newPassword="newsecret")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"error": "Current password is required to change password"},
        )

    def test_wrong_current_password(self) -> None:
        response = self.put(currentPassword="nope-nope", newPassword="newsecret")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Current password is incorrect"})

    def test_short_new_password(self) -> None:
        response = self.put(currentPassword="secret123", newPassword="123")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"error": "New password must be at least 6 characters"}
        )

    def test_new_password_over_72_bytes(self) -> None:
        response = self.put(currentPassword="secret123", newPassword="n" * 73)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"error": "New password cannot exceed 72 bytes"}
        )
        self.assertTrue(verify_password("secret123", self.stored().password_hash))

    def test_rejected_update_changes_nothing(self) -> None:
        response = self.put(name="Changed", newPassword="newsecret")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.stored().name, "Ada")


if __name__ == "__main__":
    unittest.main()
