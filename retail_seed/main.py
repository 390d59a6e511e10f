"""
Seeding Entry Point

Populates the retail datastore with reference data.
Usage:
    Full demo data:    retail-seed
    Bootstrap only:    retail-seed --profile minimal
    Fresh database:    retail-seed --create-schema

Re-running is safe: existing rows are left untouched.
"""

import argparse
import asyncio
import random
import sys
from typing import List, Optional

import structlog

from retail_seed.config import Settings, get_settings
from retail_seed.config.logging import configure_logging
from retail_seed.database.connection import close_database, create_schema, get_db, init_database
from retail_seed.database.gateway import PersistenceGateway
from retail_seed.seeding.hashing import CredentialHasher
from retail_seed.seeding.loader import SeedLoader
from retail_seed.seeding.profiles import ProfileName, get_profile
from retail_seed.seeding.summary import SeedSummary

logger = structlog.get_logger(__name__)


async def seed_database(
    profile: Optional[str] = None,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    database_url: Optional[str] = None,
    ensure_schema: bool = False,
) -> SeedSummary:
    """
    Run the seeding pipeline once against the configured datastore.

    The engine and session are acquired here and released on every path.
    """
    settings = settings or get_settings()
    dataset = get_profile(profile or settings.seed.profile)
    if rng is None:
        rng = random.Random(settings.seed.random_seed)

    await init_database(database_url)
    try:
        if ensure_schema:
            await create_schema()
        async with get_db() as session:
            loader = SeedLoader(
                PersistenceGateway(session),
                dataset,
                hasher=CredentialHasher(rounds=settings.seed.bcrypt_rounds),
                rng=rng,
                inventory_range=(settings.seed.inventory_min, settings.seed.inventory_max),
            )
            return await loader.run()
    finally:
        await close_database()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the retail management database")
    parser.add_argument(
        "--profile",
        choices=[p.value for p in ProfileName],
        default=None,
        help="Dataset profile (default: SEED_PROFILE or full)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Async SQLAlchemy URL (default: DATABASE_URL or POSTGRES_* settings)",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for inventory quantities",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging_ready = False

    try:
        configure_logging(args.log_level)
        logging_ready = True

        settings = get_settings()
        seed = args.seed if args.seed is not None else settings.seed.random_seed
        summary = asyncio.run(
            seed_database(
                profile=args.profile,
                settings=settings,
                rng=random.Random(seed),
                database_url=args.database_url,
                ensure_schema=args.create_schema,
            )
        )
    except Exception as e:
        if not logging_ready:
            # Settings failed validation; log with defaults that don't read them
            configure_logging(args.log_level or "INFO", "text")
        logger.exception("Database seeding failed", error=str(e), error_type=type(e).__name__)
        return 1

    print(summary.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
