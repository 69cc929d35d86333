"""CLI commands for Recipe Pal."""

import argparse
import getpass
import sys

import bcrypt
from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.user import User
from app.services.auth import local_auth_provider


def create_user(email: str, name: str | None = None, password: str | None = None) -> None:
    """Create a user account."""
    db: Session = SessionLocal()

    try:
        normalized_email = User.normalize_email(email)
        if not normalized_email:
            print("Error: Email is required.")
            sys.exit(1)

        # Check if email already exists
        existing = db.query(User).filter(User.email == normalized_email).first()
        if existing:
            print(f"Error: User with email '{normalized_email}' already exists.")
            sys.exit(1)

        # Get password if not provided
        if not password:
            password = getpass.getpass("Password: ")
            password_confirm = getpass.getpass("Confirm password: ")
            if password != password_confirm:
                print("Error: Passwords do not match.")
                sys.exit(1)

        if not password:
            print("Error: Password must not be empty.")
            sys.exit(1)

        password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")
        user = User(email=normalized_email, password_hash=password_hash, name=name)
        db.add(user)
        db.commit()

        print(f"User created successfully: {normalized_email}")

    finally:
        db.close()


def purge_sessions() -> None:
    """Delete expired login sessions."""
    db: Session = SessionLocal()

    try:
        count = local_auth_provider.purge_expired_sessions(db)
        print(f"Purged {count} expired session(s).")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Recipe Pal CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # create-user command
    create_user_parser = subparsers.add_parser(
        "create-user", help="Create a user account"
    )
    create_user_parser.add_argument("--email", required=True, help="Email address")
    create_user_parser.add_argument("--name", help="Display name")
    create_user_parser.add_argument(
        "--password", help="Password (will prompt if not provided)"
    )

    # purge-sessions command
    subparsers.add_parser("purge-sessions", help="Delete expired login sessions")

    args = parser.parse_args()

    if args.command == "create-user":
        create_user(args.email, args.name, args.password)
    elif args.command == "purge-sessions":
        purge_sessions()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
