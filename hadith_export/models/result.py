"""Per-book export result model."""

from typing import Any, Literal

from pydantic import BaseModel

from hadith_export.models.book import Book


class BookExportResult(BaseModel):
    """Outcome of exporting one book.

    Created only after the book's archive has been fully written, so a
    result with ``archive_size`` set always refers to a finished file.
    The input ``Book`` is never modified.
    """

    book: Book
    status: Literal["exported", "failed"] = "exported"
    archive_path: str | None = None
    archive_size: int | None = None
    size_human: str | None = None
    error: str | None = None

    def manifest_entry(self) -> dict[str, Any]:
        """Return the book's fields merged with its computed size."""
        entry = self.book.model_dump(mode="json")
        entry["size"] = self.archive_size
        entry["size_human"] = self.size_human
        if self.status == "failed":
            entry["status"] = self.status
            entry["error"] = self.error
        return entry
