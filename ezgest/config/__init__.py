# ezgest/config/__init__.py
from .setting import settings, validate_settings
from .database import db_connection, get_database, get_db

__all__ = [
    "settings",
    "validate_settings",
    "db_connection",
    "get_database",
    "get_db"
]
