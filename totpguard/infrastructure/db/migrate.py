from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import psycopg

from totpguard.logging import setup_logging
from totpguard.settings import get_settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(os.environ.get("MIGRATIONS_DIR", "migrations"))
SCHEMA_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  version    text PRIMARY KEY,
  applied_at timestamptz NOT NULL DEFAULT now()
);
"""
USAGE = "usage: python -m totpguard.infrastructure.db.migrate [up|status|new <name>]"


def pending(applied: set[str], directory: Path = MIGRATIONS_DIR) -> list[Path]:
    """SQL files in the directory not yet recorded as applied, oldest first."""
    if not directory.is_dir():
        raise FileNotFoundError(f"migrations dir not found: {directory}")
    return [p for p in sorted(directory.glob("*.sql")) if p.stem not in applied]


def applied_versions(conn: psycopg.Connection) -> set[str]:
    with conn.cursor() as cur:
        cur.execute(SCHEMA_TABLE_SQL)
        cur.execute("SELECT version FROM schema_migrations ORDER BY version;")
        return {row[0] for row in cur.fetchall()}


def cmd_up() -> int:
    with psycopg.connect(get_settings().database_url, autocommit=False) as conn:
        to_run = pending(applied_versions(conn))
        if not to_run:
            logger.info("no pending migrations")
            return 0
        for path in to_run:
            try:
                with conn.cursor() as cur:
                    cur.execute(path.read_text(encoding="utf-8"))
                    cur.execute(
                        "INSERT INTO schema_migrations (version) VALUES (%s);",
                        (path.stem,),
                    )
                conn.commit()
            except psycopg.Error:
                conn.rollback()
                logger.exception("migration failed", extra={"version": path.stem})
                return 1
            logger.info("migration applied", extra={"version": path.stem})
    return 0


def cmd_status() -> int:
    with psycopg.connect(get_settings().database_url) as conn:
        done = applied_versions(conn)
    for version in sorted(done):
        print(f"applied  {version}")
    for path in pending(done):
        print(f"pending  {path.stem}")
    return 0


def cmd_new(name: str) -> int:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M")
    path = MIGRATIONS_DIR / f"{stamp}_{name}.sql"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("-- write your SQL here\n", encoding="utf-8")
    print(path)
    return 0


def main(argv: list[str]) -> int:
    setup_logging(get_settings().log_level)
    args = argv[1:]
    if args == ["up"]:
        return cmd_up()
    if args == ["status"]:
        return cmd_status()
    if len(args) == 2 and args[0] == "new":
        return cmd_new(args[1])
    print(USAGE, file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
