"""Apply the SQL migration files to the database."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pymysql

from payment_service.database import DatabaseError, connect

logger = logging.getLogger(__name__)

DEFAULT_FILES = ("cmd/db/migrations/sql/000_create_payment_table.sql",)


def execute_sql_file(connection: Any, path: str | Path) -> None:
    """Run the SQL statement held in the file at ``path``."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise DatabaseError(f"could not read file {path}: {exc}") from exc
    try:
        with connection.cursor() as cursor:
            cursor.execute(content)
    except pymysql.MySQLError as exc:
        raise DatabaseError(f"error executing SQL file {path}: {exc}") from exc


def migrate(connection: Any, files: Iterable[str | Path] = DEFAULT_FILES) -> None:
    """Execute each migration file in order, stopping at the first failure."""
    for path in files:
        execute_sql_file(connection, path)
    logger.info("Migrations applied successfully")


def main(argv: list[str] | None = None) -> int:
    """Connect to the database and apply the migrations."""
    parser = argparse.ArgumentParser(description="Apply SQL migrations.")
    parser.add_argument("files", nargs="*", default=list(DEFAULT_FILES))
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        connection = connect()
    except DatabaseError as exc:
        logger.error("Could not connect to the database: %s", exc)
        return 1
    try:
        migrate(connection, args.files)
    except DatabaseError as exc:
        logger.error("Error running migrations: %s", exc)
        return 1
    return 0