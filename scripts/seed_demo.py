"""
Demo data utilities

Usage:
    python scripts/seed_demo.py seed-profiles
    python scripts/seed_demo.py seed-likes --external-id user_123 [--like-count 3]
    python scripts/seed_demo.py clear-demo
    python scripts/seed_demo.py clear-swipes
    python scripts/seed_demo.py clear-picks [--external-id user_123]
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from matchmaker.core.config import settings
from matchmaker.core.container import container
from matchmaker.core.database import SessionLocal, init_db
from matchmaker.core.exception import AppException
from matchmaker.core.logging_config import setup_logging
from matchmaker.services.admin_service import AdminService


def _resolve_user_id(service: AdminService, external_id: str):
    user = service.user_service.get_user_by_external_id(external_id)
    if user is None:
        print(f"No user with external id {external_id!r}")
        sys.exit(1)
    return user.id


async def _run(args: argparse.Namespace) -> None:
    db = SessionLocal()
    service = AdminService(db, container.embedding_service())
    try:
        if args.command == "seed-profiles":
            created, skipped = await service.seed_demo_profiles()
            print(f"Created {created} demo profiles, skipped {skipped}")

        elif args.command == "seed-likes":
            user_id = _resolve_user_id(service, args.external_id)
            likes = service.seed_likes_for_user(user_id, args.like_count)
            print(f"{likes} demo users liked {args.external_id}")

        elif args.command == "clear-demo":
            print(f"Deleted {service.clear_demo_profiles()} demo profiles")

        elif args.command == "clear-swipes":
            print(f"Deleted {service.clear_swipes()} swipes")

        elif args.command == "clear-picks":
            user_id = _resolve_user_id(service, args.external_id) if args.external_id else None
            print(f"Deleted {service.clear_daily_picks(user_id)} daily pick sets")

    finally:
        db.close()
        await container.http_client().close()


def main():
    parser = argparse.ArgumentParser(description="Seed or reset demo data")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed-profiles", help="Create demo profiles with embeddings")

    seed_likes = subparsers.add_parser("seed-likes", help="Make demo users like a user")
    seed_likes.add_argument("--external-id", required=True, help="Target user's external id")
    seed_likes.add_argument("--like-count", type=int, default=None, help="Maximum likes (default: all compatible)")

    subparsers.add_parser("clear-demo", help="Delete demo profiles and their data")
    subparsers.add_parser("clear-swipes", help="Delete every swipe")

    clear_picks = subparsers.add_parser("clear-picks", help="Delete daily picks")
    clear_picks.add_argument("--external-id", default=None, help="Only this user's picks")

    args = parser.parse_args()

    setup_logging(level=settings.LOG_LEVEL, json_format=False)
    init_db()

    try:
        asyncio.run(_run(args))
    except AppException as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
