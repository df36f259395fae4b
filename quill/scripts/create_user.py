"""
Create a user (e.g. the first admin). Run from project root:
  python -m quill.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m quill.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import sys

from quill.core.database import SessionLocal
from quill.core.errors import ValidationFailedError
from quill.models.user import ROLES
from quill.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Quill user.")
    parser.add_argument("name", help="Display name (1-100 chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (6 chars to 72 bytes)")
    parser.add_argument("role", nargs="?", default="user", choices=list(ROLES))
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = create_user(db, args.name, args.email, args.password, role=args.role)
    except ValidationFailedError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
