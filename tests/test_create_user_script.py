"""Tests for the create_user CLI."""

from tests.support import make_session_factory

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from quill.core.security import verify_password
from quill.models import User
from quill.scripts.create_user import main


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        patcher = patch("quill.scripts.create_user.SessionLocal", self.SessionLocal)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_creates_admin(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["Site Admin", "admin@example.com", "secret123", "admin"])
        self.assertEqual(code, 0)
        self.assertIn("admin@example.com", out.getvalue())
        with self.SessionLocal() as db:
            user = db.query(User).filter(User.email == "admin@example.com").one()
            self.assertEqual(user.role, "admin")
            self.assertTrue(verify_password("secret123", user.password_hash))

    def test_duplicate_email_fails(self) -> None:
        with redirect_stdout(io.StringIO()):
            main(["A", "a@example.com", "secret123"])
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["B", "a@example.com", "secret123"])
        self.assertEqual(code, 1)
        self.assertIn("already exists", err.getvalue())

    def test_short_password_fails(self) -> None:
        with redirect_stderr(io.StringIO()):
            self.assertEqual(main(["A", "a@example.com", "123"]), 1)


if __name__ == "__main__":
    unittest.main()
