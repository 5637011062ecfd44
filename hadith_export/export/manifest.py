"""Drive the per-book export and write the top-level manifest."""

import json
import logging
from pathlib import Path

from hadith_export.config import ExportConfig
from hadith_export.errors import ExportError, FilesystemError
from hadith_export.export.aggregator import HierarchyAggregator
from hadith_export.export.archive import ArchiveBuilder, BuiltArchive, write_directory
from hadith_export.models import Book, BookExportResult
from hadith_export.storage.repository import HadithSource

logger = logging.getLogger(__name__)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(num_bytes: int) -> str:
    """Render a byte count for humans, e.g. ``"1.4 KB"``.

    Args:
        num_bytes: Non-negative size in bytes.

    Returns:
        Size with one decimal (whole bytes below 1 KB), 1024-based units.
    """
    if num_bytes < 1024:
        return f"{num_bytes} B"
    size = float(num_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.1f} {_SIZE_UNITS[unit]}"


def write_manifest(results: list[BookExportResult], path: Path, indent: int | None = 2) -> None:
    """Persist every book's manifest entry as one JSON list.

    Overwrites any previous manifest at ``path``.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    payload = [result.manifest_entry() for result in results]
    text = json.dumps(payload, ensure_ascii=False, indent=indent)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Cannot write manifest ({exc})", path) from exc


class ManifestWriter:
    """Exports every book, one at a time, then writes the manifest.

    A book's archive is fully written and its result created before the
    next book is read. The manifest is written last, once.

    With ``failure_mode="fail_fast"`` the first error aborts the run and no
    manifest is written. With ``"best_effort"`` a failing book is logged,
    recorded as failed, and the run continues.

    Args:
        source: Data access layer for the hierarchy queries.
        output_dir: Directory receiving archives and the manifest.
        config: Export settings.
    """

    def __init__(
        self,
        source: HadithSource,
        output_dir: str | Path,
        config: ExportConfig | None = None,
    ) -> None:
        self.source = source
        self.output_dir = Path(output_dir)
        self.config = config or ExportConfig()
        self.aggregator = HierarchyAggregator(source)
        self.builder = ArchiveBuilder(indent=self.config.json_indent)

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / self.config.manifest_name

    def archive_path(self, book_id: int) -> Path:
        return self.output_dir / self.config.archive_name.format(book_id=book_id)

    def run(self) -> list[BookExportResult]:
        """Export all books and write the manifest.

        Returns:
            One result per book, in book-list order.

        Raises:
            ExportError: In fail-fast mode, the first failure encountered.
                Listing the books always aborts the run.
        """
        books = self.source.list_books()
        logger.info("Exporting %d books to %s", len(books), self.output_dir)

        results: list[BookExportResult] = []
        for book in books:
            try:
                result = self.export_book(book)
            except ExportError as exc:
                if self.config.failure_mode == "fail_fast":
                    logger.error("Export of book %s failed, aborting run", book.id)
                    raise
                logger.exception("Export of book %s failed, continuing", book.id)
                result = BookExportResult(book=book, status="failed", error=str(exc))
            results.append(result)

        write_manifest(results, self.manifest_path, indent=self.config.json_indent)
        failed = sum(1 for r in results if r.status == "failed")
        logger.info(
            "Wrote manifest %s (%d books, %d failed)",
            self.manifest_path,
            len(results),
            failed,
        )
        return results

    def export_book(self, book: Book) -> BookExportResult:
        """Aggregate, archive, and persist a single book.

        Returns:
            The book's result, with the size of what was written to disk.
        """
        logger.info("Processing book %s (%s)", book.id, book.title)
        chapters = self.aggregator.aggregate(book.id)
        archive = self.builder.build(book.id, chapters)

        archive_path: Path | None = None
        size = 0
        if self.config.layout in ("archive", "both"):
            archive_path = self._persist(archive)
            size = archive.size
        if self.config.layout in ("directory", "both"):
            written = write_directory(archive.entries, self.output_dir)
            if archive_path is None:
                size = written

        logger.info(
            "Book %s: %d chapters, %s", book.id, len(chapters), format_size(size)
        )
        return BookExportResult(
            book=book,
            archive_path=str(archive_path) if archive_path else None,
            archive_size=size,
            size_human=format_size(size),
        )

    def _persist(self, archive: BuiltArchive) -> Path:
        path = self.archive_path(archive.book_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(archive.data)
        except OSError as exc:
            raise FilesystemError(f"Cannot write archive ({exc})", path) from exc
        return path
