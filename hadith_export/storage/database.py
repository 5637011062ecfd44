"""SQLite connection management for the hadith store."""

import logging
import sqlite3
from pathlib import Path

from hadith_export.errors import StoreConnectionError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    title_ar TEXT,
    author TEXT DEFAULT '',
    hadith_count INTEGER DEFAULT 0
);

CREATE TABLE IF NOT EXISTS chapter (
    book_id INTEGER NOT NULL REFERENCES books(id),
    chapter_id INTEGER NOT NULL,
    number INTEGER NOT NULL,
    title TEXT DEFAULT '',
    PRIMARY KEY (book_id, chapter_id)
);

CREATE TABLE IF NOT EXISTS section (
    book_id INTEGER NOT NULL,
    chapter_id INTEGER NOT NULL,
    section_id INTEGER NOT NULL,
    number INTEGER NOT NULL,
    title TEXT DEFAULT '',
    preface TEXT,
    PRIMARY KEY (book_id, chapter_id, section_id),
    FOREIGN KEY (book_id, chapter_id) REFERENCES chapter(book_id, chapter_id)
);

CREATE TABLE IF NOT EXISTS hadith (
    hadith_id INTEGER NOT NULL,
    book_id INTEGER NOT NULL,
    chapter_id INTEGER NOT NULL,
    section_id INTEGER,
    narrator TEXT,
    ar TEXT,
    en TEXT,
    grade TEXT,
    PRIMARY KEY (book_id, hadith_id),
    FOREIGN KEY (book_id, chapter_id) REFERENCES chapter(book_id, chapter_id)
);

CREATE INDEX IF NOT EXISTS idx_hadith_location
    ON hadith(book_id, chapter_id, section_id, hadith_id);
"""


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Create a read-write connection to the SQLite database.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A sqlite3 Connection with row_factory set to Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def open_readonly(db_path: str | Path) -> sqlite3.Connection:
    """Open an existing database for the export run without write access.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A read-only sqlite3 Connection with row_factory set to Row.

    Raises:
        StoreConnectionError: If the file is missing or is not a database.
    """
    path = Path(db_path)
    if not path.is_file():
        raise StoreConnectionError(f"Database not found: {path}")

    uri = f"{path.resolve().as_uri()}?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise StoreConnectionError(f"Cannot open database {path}: {exc}") from exc

    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA query_only=ON")
        conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
    except sqlite3.Error as exc:
        conn.close()
        raise StoreConnectionError(f"Cannot read database {path}: {exc}") from exc

    logger.info("Opened %s read-only", path)
    return conn


def initialize_database(db_path: str | Path) -> None:
    """Create an empty hadith store if it doesn't exist.

    Used to build fixtures and local development databases; the export
    itself never writes to the store.

    Args:
        db_path: Path to the SQLite database file.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()
