"""Build the SQLite-backed database used by the CLI."""

import logging
import os
from pathlib import Path
from typing import Optional

from ledgerport.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV_VAR = "LEDGERPORT_DB_PATH"
DEFAULT_DB_DIR = ".ledgerport"
DEFAULT_DB_NAME = "ledgerport.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file and make sure its directory exists.

    Order: explicit path, then $LEDGERPORT_DB_PATH, then
    ~/.ledgerport/ledgerport.db. A leading ``~`` is expanded.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV_VAR)
    path = Path(raw).expanduser() if raw else Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to the SQLite file; see resolve_database_path

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    logger.debug("Using SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
