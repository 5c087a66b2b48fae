"""Shared MySQL connection configured from the environment and a .env file."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pymysql
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3306

_lock = threading.Lock()
_instance: Any = None


class DatabaseError(Exception):
    """The database could not be configured, reached or used."""


def connection_settings(env: Mapping[str, str]) -> dict[str, Any]:
    """Build connection keyword arguments from DB_* variables in ``env``."""
    port_text = (env.get("DB_PORT") or "").strip()
    if port_text:
        try:
            port = int(port_text)
        except ValueError:
            raise DatabaseError(f"invalid DB_PORT: {port_text!r}") from None
    else:
        port = DEFAULT_PORT
    return {
        "host": env.get("DB_HOST") or "localhost",
        "port": port,
        "user": env.get("DB_USER", ""),
        "password": env.get("DB_PASSWORD", ""),
        "database": env.get("DB_NAME", ""),
        "charset": "utf8mb4",
    }


def connect() -> Any:
    """Return the process-wide connection, opening it on first use."""
    global _instance
    with _lock:
        if _instance is None:
            env_file = Path.cwd() / ".env"
            if not env_file.is_file():
                raise DatabaseError(f"Error loading .env file: {env_file} not found")
            load_dotenv(env_file)
            settings = connection_settings(os.environ)
            try:
                connection = pymysql.connect(**settings, autocommit=True)
                connection.ping(reconnect=True)
            except pymysql.MySQLError as exc:
                raise DatabaseError(f"Error connecting to database: {exc}") from exc
            _instance = connection
            logger.info("Connected to database successfully")
        return _instance