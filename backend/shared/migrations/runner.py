"""Plain-SQL migration runner with a tracking table."""

from __future__ import annotations

import logging
from pathlib import Path

import asyncpg

logger = logging.getLogger(__name__)

VERSIONS_DIR = Path(__file__).resolve().parent / "versions"


class MigrationRunner:
    """Apply ``versions/NNN_description.sql`` files in filename order.

    Each applied file stem is recorded in ``schema_migrations`` so that the
    bot can run :meth:`run_pending` on every start without re-applying.
    """

    TRACKING_TABLE = "schema_migrations"

    def __init__(self, pool: asyncpg.Pool, migrations_dir: Path | None = None) -> None:
        self.pool = pool
        self.migrations_dir = migrations_dir or VERSIONS_DIR

    async def ensure_table(self) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.TRACKING_TABLE} (
                    version    TEXT PRIMARY KEY,
                    name       TEXT NOT NULL,
                    applied_at TIMESTAMPTZ DEFAULT NOW()
                )
                """
            )

    async def get_applied(self) -> set[str]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT version FROM {self.TRACKING_TABLE}"  # noqa: S608
            )
            return {row["version"] for row in rows}

    async def pending(self) -> list[Path]:
        """SQL files not yet recorded as applied, in apply order."""
        await self.ensure_table()
        applied = await self.get_applied()
        return [p for p in sorted(self.migrations_dir.glob("*.sql")) if p.stem not in applied]

    async def run_pending(self) -> list[str]:
        """Apply every pending migration. Returns the newly applied versions."""
        newly_applied: list[str] = []
        for sql_path in await self.pending():
            await self._apply_one(sql_path.stem, sql_path.name, sql_path.read_text(encoding="utf-8"))
            newly_applied.append(sql_path.stem)

        if newly_applied:
            logger.info(
                "Applied %d migration(s): %s", len(newly_applied), ", ".join(newly_applied)
            )
        else:
            logger.info("Database schema is up to date")
        return newly_applied

    async def _apply_one(self, version: str, name: str, sql: str) -> None:
        """Execute one migration and record it in the same transaction."""
        logger.info("Applying migration: %s", version)
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql)
                await conn.execute(
                    f"INSERT INTO {self.TRACKING_TABLE} (version, name) VALUES ($1, $2)",
                    version,
                    name,
                )
