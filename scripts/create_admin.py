"""
Create an admin account.

Public registration is the only other way to obtain one, so run this once
against a fresh database:

    python scripts/create_admin.py admin@college.edu 's3cret-pass' "Registrar Office"
"""
import argparse
import sys

from nodues.core.config import settings
from nodues.core.database import SessionLocal, engine
from nodues.core.exceptions import ConflictError
from nodues.core.logging_config import setup_logging
from nodues.models.base import Base
from nodues.services.auth import create_admin
import nodues.models  # noqa: F401


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("name")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = create_admin(db, args.email, args.password, args.name)
    except ConflictError:
        print(f"{args.email} is already registered.")
        return 1
    finally:
        db.close()

    print(f"Admin {user.email} created with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
