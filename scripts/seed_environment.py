"""Utility script to create an organization, its environment and a dashboard user."""

from __future__ import annotations

import argparse
import secrets
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import create_user
from app.domain.entities import Branding, Environment, Feed, Organization
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import (
    EnvironmentRepository,
    FeedRepository,
    OrganizationRepository,
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the seed."""

    parser = argparse.ArgumentParser(
        description="Create an organization with a widget environment and an admin user.",
    )
    parser.add_argument("--organization", default="Acme", help="Organization name (default: Acme)")
    parser.add_argument(
        "--environment", default="Development", help="Environment name (default: Development)"
    )
    parser.add_argument(
        "--identifier",
        default=None,
        help="Application identifier used by the widget. Generated when omitted.",
    )
    parser.add_argument(
        "--hmac",
        action="store_true",
        help="Require an HMAC of the subscriber id when initializing widget sessions.",
    )
    parser.add_argument(
        "--feed",
        action="append",
        default=[],
        help="Feed identifier to create; can be repeated.",
    )
    parser.add_argument("--email", default="admin@acme.io", help="Dashboard user email")
    parser.add_argument(
        "--password",
        default=None,
        help="Dashboard user password. Prompted for when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed the database using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the dashboard user: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        organization = OrganizationRepository(session).create(
            Organization(id=None, name=args.organization, branding=Branding())
        )
        environment = EnvironmentRepository(session).create(
            Environment(
                id=None,
                organization_id=organization.id,
                name=args.environment,
                identifier=args.identifier or secrets.token_urlsafe(9),
                api_key=secrets.token_hex(32),
                hmac_enabled=args.hmac,
            )
        )
        feeds = [
            FeedRepository(session).create(
                Feed(
                    id=None,
                    organization_id=organization.id,
                    environment_id=environment.id,
                    name=identifier,
                    identifier=identifier,
                )
            )
            for identifier in args.feed
        ]
        user = create_user(
            session,
            email=args.email,
            password=password,
            organization_id=organization.id,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed the environment: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while seeding: {exc}") from exc
    else:
        print(
            "Environment created:\n"
            f"  Organization: {organization.name} ({organization.id})\n"
            f"  Application identifier: {environment.identifier}\n"
            f"  API key: {environment.api_key}\n"
            f"  Feeds: {', '.join(feed.identifier for feed in feeds) or '-'}\n"
            f"  Dashboard user: {user.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
