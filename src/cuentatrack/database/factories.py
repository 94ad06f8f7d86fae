"""Database factory functions for creating boundary instances."""

import os
from pathlib import Path
from typing import Optional

from cuentatrack.database.base import Database
from cuentatrack.database.http_api import DEFAULT_TIMEOUT, HttpApiDatabase
from cuentatrack.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CUENTATRACK_DB_PATH
            environment variable, then defaults to ~/.cuentatrack/cuentatrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("CUENTATRACK_DB_PATH")

    if database_path is None:
        # Default to ~/.cuentatrack/cuentatrack.db
        home = Path.home()
        db_dir = home / ".cuentatrack"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "cuentatrack.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_api_database(
    api_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> HttpApiDatabase:
    """Create a REST API boundary instance.

    Args:
        api_url: API root. If None, read from CUENTATRACK_API_URL.
        token: Bearer token. If None, read from CUENTATRACK_API_TOKEN.
        timeout: Request timeout in seconds. If None, read from
            CUENTATRACK_API_TIMEOUT, then defaults to 10.

    Raises:
        ValueError: If no API URL is configured or the timeout is not a number
    """
    if api_url is None:
        api_url = os.environ.get("CUENTATRACK_API_URL")
    if not api_url:
        raise ValueError("No API URL configured (set CUENTATRACK_API_URL or --api-url)")

    if token is None:
        token = os.environ.get("CUENTATRACK_API_TOKEN")

    if timeout is None:
        raw_timeout = os.environ.get("CUENTATRACK_API_TIMEOUT")
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

    return HttpApiDatabase(api_url, token=token, timeout=timeout)


def create_database(
    database_path: Optional[str] = None, api_url: Optional[str] = None
) -> Database:
    """Create the configured boundary: REST API when a URL is set, else SQLite."""
    if api_url is None:
        api_url = os.environ.get("CUENTATRACK_API_URL")
    if api_url:
        return create_api_database(api_url=api_url)
    return create_sqlite_database(database_path=database_path)
