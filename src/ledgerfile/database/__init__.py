"""Database layer for ledgerfile application."""

from ledgerfile.database.base import Database
from ledgerfile.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
