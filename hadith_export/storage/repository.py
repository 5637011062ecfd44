"""Read-only, ordered queries over the hadith store."""

import logging
import sqlite3
from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from hadith_export.errors import QueryError
from hadith_export.models import Book, Chapter, Hadith, Section

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class HadithSource(Protocol):
    """Anything that can answer the four hierarchy queries."""

    def list_books(self) -> list[Book]: ...

    def list_chapters(self, book_id: int) -> list[Chapter]: ...

    def list_sections(self, book_id: int, chapter_id: int) -> list[Section]: ...

    def list_hadiths(
        self, book_id: int, chapter_id: int, section_id: int | None = None
    ) -> list[Hadith]: ...


class HadithRepository:
    """SQLite-backed HadithSource.

    Rows leave this class as validated models; a row that cannot be
    coerced into its model is reported as a QueryError rather than
    passed through.

    Args:
        conn: An open connection, typically from ``open_readonly``.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def list_books(self) -> list[Book]:
        return self._fetch(Book, "SELECT * FROM books ORDER BY rowid", (), "books")

    def list_chapters(self, book_id: int) -> list[Chapter]:
        return self._fetch(
            Chapter,
            "SELECT * FROM chapter WHERE book_id = ? ORDER BY number, chapter_id",
            (book_id,),
            f"chapters of book {book_id}",
        )

    def list_sections(self, book_id: int, chapter_id: int) -> list[Section]:
        return self._fetch(
            Section,
            "SELECT * FROM section WHERE book_id = ? AND chapter_id = ? "
            "ORDER BY number, section_id",
            (book_id, chapter_id),
            f"sections of book {book_id} chapter {chapter_id}",
        )

    def list_hadiths(
        self, book_id: int, chapter_id: int, section_id: int | None = None
    ) -> list[Hadith]:
        """Return hadiths of a chapter, narrowed to one section when given.

        Args:
            book_id: Book identifier.
            chapter_id: Chapter identifier within the book.
            section_id: Section identifier; None means every hadith of the
                chapter regardless of section.

        Returns:
            Hadiths ordered by ``hadith_id``.
        """
        if section_id is None:
            return self._fetch(
                Hadith,
                "SELECT * FROM hadith WHERE book_id = ? AND chapter_id = ? "
                "ORDER BY hadith_id",
                (book_id, chapter_id),
                f"hadiths of book {book_id} chapter {chapter_id}",
            )
        return self._fetch(
            Hadith,
            "SELECT * FROM hadith WHERE book_id = ? AND chapter_id = ? "
            "AND section_id = ? ORDER BY hadith_id",
            (book_id, chapter_id, section_id),
            f"hadiths of book {book_id} chapter {chapter_id} section {section_id}",
        )

    def _fetch(
        self,
        model: type[ModelT],
        sql: str,
        params: Sequence[Any],
        what: str,
    ) -> list[ModelT]:
        try:
            rows = self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise QueryError(f"Failed to read {what}: {exc}") from exc

        try:
            return [model.model_validate(dict(row)) for row in rows]
        except ValidationError as exc:
            raise QueryError(
                f"Unexpected row shape in {what}: {exc.error_count()} error(s)\n{exc}"
            ) from exc
