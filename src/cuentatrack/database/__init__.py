"""Data-access layer for cuentatrack application."""

from cuentatrack.database.base import Database
from cuentatrack.database.factories import (
    create_api_database,
    create_database,
    create_sqlite_database,
)

__all__ = ["Database", "create_api_database", "create_database", "create_sqlite_database"]
