"""
Create a user without going through the API. Run from project root:
  python -m handover.scripts.create_user USERNAME PASSWORD NAME [role]
Example:
  python -m handover.scripts.create_user alice s3cret "Alice Example" user
"""
import argparse
import sys

from handover.core.config import get_settings
from handover.core.database import SessionLocal, engine, init_db
from handover.core.logging import configure_logging
from handover.services.errors import ServiceError
from handover.services.store import SqlStore
from handover.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Handover user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password")
    parser.add_argument("name", help="Display name")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    init_db(engine, settings)

    db = SessionLocal()
    try:
        user = create_user(
            SqlStore(db),
            username=args.username,
            password=args.password,
            name=args.name,
            role=args.role,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
