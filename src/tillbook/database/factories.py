"""Database factory functions for creating database instances."""

from typing import Optional

from tillbook.config import DEFAULT_DATA_DIR, Settings
from tillbook.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks TILLBOOK_DB_PATH
            environment variable, then defaults to ~/.tillbook/tillbook.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = Settings.from_env().database_path

    if database_path is None:
        DEFAULT_DATA_DIR.mkdir(exist_ok=True)
        database_path = str(DEFAULT_DATA_DIR / "tillbook.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
