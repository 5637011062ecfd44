"""Storage layer: SQLite connections and hierarchy queries."""

from hadith_export.storage.database import (
    get_connection,
    initialize_database,
    open_readonly,
)
from hadith_export.storage.repository import HadithRepository, HadithSource

__all__ = [
    "HadithRepository",
    "HadithSource",
    "get_connection",
    "initialize_database",
    "open_readonly",
]
