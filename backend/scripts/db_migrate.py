"""Run Hatchbot database migrations.

Usage:
    python db_migrate.py          # Apply all pending migrations
    python db_migrate.py --dry    # List pending migrations without applying
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from hatchbot.core.logging import setup_logging
from shared.database import DatabaseManager, PoolConfig
from shared.migrations.runner import MigrationRunner

load_dotenv(Path(__file__).resolve().parent.parent / "hatchbot" / ".env")

logger = logging.getLogger("hatchbot.db_migrate")


async def main(dry_run: bool) -> int:
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        logger.error("DATABASE_URL not set. Check backend/hatchbot/.env or the environment.")
        return 1

    db = DatabaseManager(
        database_url,
        PoolConfig(min_size=1, max_size=2, ssl=os.getenv("DATABASE_SSL", "require") or None),
    )
    await db.connect()
    try:
        runner = MigrationRunner(db.pool)
        if dry_run:
            pending = await runner.pending()
            logger.info(f"Pending: {len(pending)}")
            for path in pending:
                logger.info(f"  -> {path.stem}")
        else:
            await runner.run_pending()
    finally:
        await db.disconnect()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Apply Hatchbot SQL migrations")
    parser.add_argument("--dry", action="store_true", help="list pending migrations only")
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(main(args.dry)))
