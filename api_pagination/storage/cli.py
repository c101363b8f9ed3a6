"""CLI entrypoint for creating and seeding the items database."""

from __future__ import annotations

import argparse
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from api_pagination.config.logging_config import setup_logging
from api_pagination.config.settings import get_settings
from api_pagination.storage.item_store import ItemStore
from api_pagination.storage.models import Item
from api_pagination.storage.schema import get_schema_version, initialize_database


def generate_items(
    count: int,
    days: int,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
    disabled_ratio: float = 0.2,
) -> list[Item]:
    """
    Build `count` items spread over the last `days` days.

    Roughly `disabled_ratio` of them are disabled so the filtered feed has
    something to skip.
    """
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    span = timedelta(days=days).total_seconds()

    items = []
    for i in range(count):
        created = now - timedelta(seconds=rng.uniform(0, span))
        items.append(
            Item(
                user_id=rng.randint(1, 10),
                title=f"item {i + 1}",
                active=rng.random() < 0.5,
                disabled=rng.random() < disabled_ratio,
                created_at=created,
                updated_at=created,
            )
        )
    return items


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(description="Manage the api_pagination demo database.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create tables and indexes.")

    seed = sub.add_parser("seed", help="Insert generated items.")
    seed.add_argument("--count", type=int, default=200, help="Number of items to insert.")
    seed.add_argument("--days", type=int, default=None, help="Spread items over this many days.")
    seed.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data.")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run the storage CLI and print a short summary."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    settings.ensure_dirs()
    setup_logging(log_dir=settings.logs_dir)
    initialize_database(settings.db_path)

    logger = logging.getLogger(__name__)

    if args.command == "init":
        print(f"db={settings.db_path} schema_version={get_schema_version(settings.db_path)}")
        return 0

    days = args.days if args.days is not None else settings.api.seed_days
    store = ItemStore(settings.db_path)
    try:
        inserted = store.insert_many(generate_items(args.count, days, seed=args.seed))
    except Exception as exc:
        logger.exception("Seeding failed: %s", exc)
        return 1

    print(f"inserted={inserted} total={store.count()} disabled={store.count_disabled()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
