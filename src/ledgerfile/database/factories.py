"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerfile.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "LEDGERFILE_DB_PATH"
DEFAULT_DB_DIR = ".ledgerfile"
DEFAULT_DB_FILE = "ledgerfile.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file to use and make sure its folder exists.

    Precedence is the explicit path, then LEDGERFILE_DB_PATH, then
    ~/.ledgerfile/ledgerfile.db. A leading ``~`` is expanded, since paths
    from the environment are not expanded by a shell.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    if chosen:
        path = Path(chosen).expanduser()
    else:
        path = Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_FILE

    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, see ``resolve_database_path``

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
