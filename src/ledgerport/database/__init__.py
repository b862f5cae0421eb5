"""Persistence for accounts, saved CSV formats and imported transactions."""

from ledgerport.database.base import Database
from ledgerport.database.factories import create_sqlite_database
from ledgerport.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_sqlite_database"]
