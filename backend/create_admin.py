# backend/create_admin.py
import argparse
import sys

from config import get_settings
from database import init_db, make_engine, make_session_factory
from services.users import UserService


def create_admin(session, email, password, bcrypt_rounds=12):
    """Create an admin account unless the email is taken. Returns (user, created)."""
    users = UserService(session, bcrypt_rounds=bcrypt_rounds)
    existing = users.get_by_email(email)
    if existing is not None:
        return existing, False
    return users.create_admin(email, password), True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create an admin account.")
    parser.add_argument("email", nargs="?", default="admin@example.com")
    parser.add_argument("password", nargs="?", default="admin123")
    args = parser.parse_args(argv)

    settings = get_settings()
    engine = make_engine(settings.DATABASE_URL)
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        user, created = create_admin(session, args.email, args.password, settings.BCRYPT_ROUNDS)
    finally:
        session.close()

    if not created:
        print("Admin user already exists with this email")
        return 0

    print("Admin user created successfully!")
    print(f"Email: {args.email}")
    print(f"ID: {user.id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
