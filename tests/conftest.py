"""Shared fixtures: a sample SQLite store and an in-memory source."""

import sqlite3
from pathlib import Path
from typing import Any

import pytest

from hadith_export.models import Book, Chapter, Hadith, Section
from hadith_export.storage.database import get_connection, initialize_database

# Book 1: chapter 1 has no sections and three hadiths, chapter 2 has two
# sections holding two and one hadiths. Rows are inserted out of order.
# Book 2 has no chapters. Book 3 orders chapters by number, not id, and
# its chapter 4 is empty.
BOOKS = [
    {"id": 1, "title": "Sahih al-Bukhari", "title_ar": "صحيح البخاري", "author": "al-Bukhari", "hadith_count": 6},
    {"id": 2, "title": "Empty Collection", "title_ar": None, "author": "", "hadith_count": 0},
    {"id": 3, "title": "Riyad as-Salihin", "title_ar": "رياض الصالحين", "author": "an-Nawawi", "hadith_count": 1},
]

CHAPTERS = [
    {"book_id": 1, "chapter_id": 2, "number": 2, "title": "Belief"},
    {"book_id": 1, "chapter_id": 1, "number": 1, "title": "Revelation"},
    {"book_id": 3, "chapter_id": 4, "number": 2, "title": "Sincerity"},
    {"book_id": 3, "chapter_id": 5, "number": 1, "title": "Repentance"},
]

SECTIONS = [
    {"book_id": 1, "chapter_id": 2, "section_id": 11, "number": 2, "title": "Faith and deeds", "preface": None},
    {"book_id": 1, "chapter_id": 2, "section_id": 10, "number": 1, "title": "Pillars of Islam", "preface": "باب"},
]

HADITHS = [
    {"hadith_id": 3, "book_id": 1, "chapter_id": 1, "section_id": None, "narrator": "Aisha", "ar": "ثالث", "en": "third", "grade": "Sahih"},
    {"hadith_id": 1, "book_id": 1, "chapter_id": 1, "section_id": None, "narrator": "Umar", "ar": "إنما الأعمال بالنيات", "en": "Actions are by intentions", "grade": "Sahih"},
    {"hadith_id": 2, "book_id": 1, "chapter_id": 1, "section_id": None, "narrator": "Aisha", "ar": "ثاني", "en": "second", "grade": "Sahih"},
    {"hadith_id": 6, "book_id": 1, "chapter_id": 2, "section_id": 11, "narrator": "Abu Hurairah", "ar": "سادس", "en": "sixth", "grade": None},
    {"hadith_id": 5, "book_id": 1, "chapter_id": 2, "section_id": 10, "narrator": "Ibn Umar", "ar": "خامس", "en": "fifth", "grade": "Sahih"},
    {"hadith_id": 4, "book_id": 1, "chapter_id": 2, "section_id": 10, "narrator": "Ibn Umar", "ar": "بني الإسلام على خمس", "en": "Islam is built on five", "grade": "Sahih"},
    {"hadith_id": 7, "book_id": 3, "chapter_id": 5, "section_id": None, "narrator": "al-Agharr", "ar": "توبوا", "en": "Repent", "grade": None},
]


def insert_rows(conn: sqlite3.Connection, table: str, rows: list[dict[str, Any]]) -> None:
    for row in rows:
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            list(row.values()),
        )


def build_sample_db(db_path: Path) -> Path:
    initialize_database(db_path)
    conn = get_connection(db_path)
    try:
        insert_rows(conn, "books", BOOKS)
        insert_rows(conn, "chapter", CHAPTERS)
        insert_rows(conn, "section", SECTIONS)
        insert_rows(conn, "hadith", HADITHS)
        conn.commit()
    finally:
        conn.close()
    return db_path


class InMemorySource:
    """HadithSource over plain lists, ordering like the SQL queries do."""

    def __init__(
        self,
        books: list[Book],
        chapters: list[Chapter],
        sections: list[Section],
        hadiths: list[Hadith],
    ) -> None:
        self.books = books
        self.chapters = chapters
        self.sections = sections
        self.hadiths = hadiths
        self.calls: list[tuple[Any, ...]] = []

    def list_books(self) -> list[Book]:
        self.calls.append(("books",))
        return list(self.books)

    def list_chapters(self, book_id: int) -> list[Chapter]:
        self.calls.append(("chapters", book_id))
        found = [c for c in self.chapters if c.book_id == book_id]
        return sorted(found, key=lambda c: (c.number, c.chapter_id))

    def list_sections(self, book_id: int, chapter_id: int) -> list[Section]:
        self.calls.append(("sections", book_id, chapter_id))
        found = [
            s for s in self.sections
            if s.book_id == book_id and s.chapter_id == chapter_id
        ]
        return sorted(found, key=lambda s: (s.number, s.section_id))

    def list_hadiths(
        self, book_id: int, chapter_id: int, section_id: int | None = None
    ) -> list[Hadith]:
        self.calls.append(("hadiths", book_id, chapter_id, section_id))
        found = [
            h for h in self.hadiths
            if h.book_id == book_id
            and h.chapter_id == chapter_id
            and (section_id is None or h.section_id == section_id)
        ]
        return sorted(found, key=lambda h: h.hadith_id)


@pytest.fixture
def sample_db(tmp_path: Path) -> Path:
    return build_sample_db(tmp_path / "hadith.db")


@pytest.fixture
def memory_source() -> InMemorySource:
    return InMemorySource(
        books=[Book(**row) for row in BOOKS],
        chapters=[Chapter(**row) for row in CHAPTERS],
        sections=[Section(**row) for row in SECTIONS],
        hadiths=[Hadith(**row) for row in HADITHS],
    )
