#!/usr/bin/env python3
"""Create a PostgreSQL database for tests and seed listing reference data.

Usage:
  python scripts/create_test_db.py
  python scripts/create_test_db.py --database news_events_test
  python scripts/create_test_db.py --database news_events_test --seed
"""

from __future__ import annotations

import argparse
import os
import sys
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import psycopg
import structlog
from psycopg import errors, sql

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from src.core.config import Settings  # noqa: E402

logger = structlog.get_logger(__name__)

# 内容类型与图片样式的默认参考数据
DEFAULT_CONTENT_KINDS: list[tuple[str, str]] = [
    ("news", "News"),
    ("events", "Events"),
]
DEFAULT_IMAGE_STYLES: list[tuple[str, str]] = [
    ("thumbnail", "Thumbnail (100×100)"),
    ("medium", "Medium (220×220)"),
    ("large", "Large (480×480)"),
]


def _connect(settings: Settings, database: str) -> psycopg.Connection[Any]:
    return psycopg.connect(
        dbname=database,
        user=settings.POSTGRES_USER,
        password=settings.POSTGRES_PASSWORD,
        host=settings.POSTGRES_SERVER,
        port=settings.POSTGRES_PORT,
        autocommit=True,
    )


def create_database(settings: Settings, target_db: str, maintenance_db: str) -> None:
    if not target_db:
        raise ValueError("Target database name is empty.")
    if not maintenance_db:
        raise ValueError("Maintenance database name is empty.")

    logger.info(
        "create_test_db.start",
        target_db=target_db,
        maintenance_db=maintenance_db,
    )

    try:
        with _connect(settings, maintenance_db) as conn:
            conn.execute(
                sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db))
            )
        logger.info("create_test_db.created", target_db=target_db)
    except errors.DuplicateDatabase:
        logger.info("create_test_db.exists", target_db=target_db)
    except Exception:
        logger.exception("create_test_db.failed", target_db=target_db)
        raise


def _upsert_rows(
    conn: psycopg.Connection[Any],
    table: str,
    key_column: str,
    rows: list[tuple[str, str]],
) -> int:
    """Insert (key, label) rows that are not there yet; returns inserted count."""
    now = datetime.now(UTC)
    query = sql.SQL(
        "INSERT INTO {table} (id, created_at, updated_at, is_deleted, {key}, label) "
        "VALUES (%s, %s, %s, false, %s, %s) "
        "ON CONFLICT ({key}) DO NOTHING"
    ).format(table=sql.Identifier(table), key=sql.Identifier(key_column))

    inserted = 0
    for key, label in rows:
        cursor = conn.execute(query, (str(uuid.uuid4()), now, now, key, label))
        inserted += cursor.rowcount
    return inserted


def seed_reference_data(settings: Settings, target_db: str) -> None:
    """Seed content kinds and image styles; tables come from the alembic migration."""
    logger.info("create_test_db.seed.start", target_db=target_db)
    try:
        with _connect(settings, target_db) as conn:
            kinds = _upsert_rows(
                conn, "content_kinds", "machine_name", DEFAULT_CONTENT_KINDS
            )
            styles = _upsert_rows(
                conn, "image_styles", "name", DEFAULT_IMAGE_STYLES
            )
        logger.info(
            "create_test_db.seed.done",
            target_db=target_db,
            content_kinds=kinds,
            image_styles=styles,
        )
    except errors.UndefinedTable:
        logger.error(
            "create_test_db.seed.missing_tables",
            target_db=target_db,
            hint="run alembic upgrade head first",
        )
        raise
    except Exception:
        logger.exception("create_test_db.seed.failed", target_db=target_db)
        raise


def _parse_args(settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a PostgreSQL database")
    parser.add_argument(
        "--database",
        default=settings.POSTGRES_DB,
        help="Target database name (defaults to POSTGRES_DB).",
    )
    parser.add_argument(
        "--maintenance-db",
        default=os.getenv("POSTGRES_MAINTENANCE_DB", "postgres"),
        help="Maintenance database used to run CREATE DATABASE.",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed default content kinds and image styles.",
    )
    return parser.parse_args()


def main() -> None:
    settings = Settings()
    args = _parse_args(settings)
    create_database(settings, args.database, args.maintenance_db)
    if args.seed:
        seed_reference_data(settings, args.database)


if __name__ == "__main__":
    main()
