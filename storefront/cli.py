#!/usr/bin/env python3
"""
Operator command line for Storefront.

Usage:
    # Create tables (without Alembic)
    storefront init-db

    # Load the demo menu into an empty catalog
    storefront seed

    # Find your user, then make it an admin
    storefront list-users
    storefront make-admin --email owner@example.com
    storefront make-admin --external-id user_2abc

    # Create a record for someone who has not signed in yet
    storefront sync-user user_2abc owner@example.com "Jo Owner" --admin

    # Run the API
    storefront serve --port 8000 --reload
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv


def cmd_init_db(args: argparse.Namespace) -> int:
    from .db import init_db

    init_db()
    print("Database tables created.")
    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    from .db import SessionLocal
    from .seed_menu import seed_menu

    db = SessionLocal()
    try:
        seed_menu(db)
        return 0
    finally:
        db.close()


def cmd_make_admin(args: argparse.Namespace) -> int:
    from .db import SessionLocal
    from .services import users

    db = SessionLocal()
    try:
        if args.external_id:
            result = users.mark_user_as_admin(db, args.external_id)
        else:
            result = users.make_admin_by_email(db, args.email)

        if not result.is_ok:
            print(f"Error: {result.error.message}")
            return 1

        grant = result.value
        if grant.already_admin:
            print(f"User {grant.user.name} is already an admin")
        else:
            print(f"Successfully made {grant.user.name} ({grant.user.email}) an admin!")
        return 0
    finally:
        db.close()


def cmd_list_users(args: argparse.Namespace) -> int:
    from .db import SessionLocal
    from .services import users

    db = SessionLocal()
    try:
        all_users = users.list_all_users(db)
        if not all_users:
            print("No users yet. Users are created on first sign-in.")
            return 0

        print(f"\n{'ID':<6}{'Admin':<7}{'External ID':<32}{'Email':<32}Name")
        print("-" * 90)
        for user in all_users:
            admin_marker = "yes" if user.is_admin else ""
            print(f"{user.id:<6}{admin_marker:<7}{user.external_id:<32}{user.email:<32}{user.name}")
        print()
        return 0
    finally:
        db.close()


def cmd_sync_user(args: argparse.Namespace) -> int:
    from .db import SessionLocal
    from .services import users

    db = SessionLocal()
    try:
        sync = users.sync_external_user(
            db, args.external_id, args.email, args.name, make_admin=args.admin,
        ).unwrap()
        action = "Created" if sync.created else "Found existing"
        print(f"{action} user {sync.user.name} (id={sync.user.id}, admin={sync.user.is_admin})")
        return 0
    finally:
        db.close()


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    print(f"\n{'=' * 50}")
    print("Starting Storefront API")
    print(f"Port: {args.port}")
    print(f"{'=' * 50}\n")

    uvicorn.run(
        "storefront.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Storefront operator commands",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    seed_parser = subparsers.add_parser("seed", help="Load the demo menu")
    seed_parser.set_defaults(func=cmd_seed)

    admin_parser = subparsers.add_parser("make-admin", help="Grant admin rights to a user")
    target = admin_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--external-id", help="Identity provider subject")
    target.add_argument("--email", help="Email address on the user record")
    admin_parser.set_defaults(func=cmd_make_admin)

    list_parser = subparsers.add_parser("list-users", help="List every user record")
    list_parser.set_defaults(func=cmd_list_users)

    sync_parser = subparsers.add_parser("sync-user", help="Create a user record ahead of sign-in")
    sync_parser.add_argument("external_id", help="Identity provider subject")
    sync_parser.add_argument("email")
    sync_parser.add_argument("name")
    sync_parser.add_argument("--admin", action="store_true", help="Also grant admin rights")
    sync_parser.set_defaults(func=cmd_sync_user)

    serve_parser = subparsers.add_parser("serve", help="Run the API with uvicorn")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to run on (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    from .logging_config import setup_logging
    setup_logging()

    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
