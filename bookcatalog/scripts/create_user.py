"""
Create a user without going through the signup form. Run from project root:
  python -m bookcatalog.scripts.create_user USERNAME PASSWORD
"""
import argparse
import sys

from bookcatalog.core.database import SessionLocal
from bookcatalog.core.errors import ConflictError, StorageError
from bookcatalog.services.credentials import CredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Book Catalog user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password:
        print("Password must not be empty.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = CredentialStore(db).create_user(username, args.password)
    except ConflictError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    except StorageError as e:
        print(f"Could not create user: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' (id={user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
