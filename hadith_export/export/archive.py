"""Deterministic per-book ZIP archives of the aggregated documents.

Each archive holds one ``chapters.json`` listing the book's chapters and
one ``chapter_<id>.json`` per chapter listing its groups, all under a
``book_<id>/`` prefix. Entries carry a fixed timestamp and are written in
chapter order, so an unchanged store always produces identical bytes.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from hadith_export.errors import FilesystemError, SerializationError
from hadith_export.models import Chapter, ChapterGroups, HadithGroup

logger = logging.getLogger(__name__)

# Maximum deflate ratio; fixed, not read from config.
COMPRESSION = zipfile.ZIP_DEFLATED
COMPRESS_LEVEL = 9

# Earliest date a ZIP header can hold; keeps reruns byte-identical.
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)

_chapters_adapter = TypeAdapter(list[Chapter])
_groups_adapter = TypeAdapter(list[HadithGroup])


def book_prefix(book_id: int) -> str:
    return f"book_{book_id}"


def chapters_entry_name(book_id: int) -> str:
    return f"{book_prefix(book_id)}/chapters.json"


def chapter_entry_name(book_id: int, chapter_id: int) -> str:
    return f"{book_prefix(book_id)}/chapter_{chapter_id}.json"


@dataclass
class BuiltArchive:
    """A finished archive and the uncompressed documents inside it."""

    book_id: int
    data: bytes
    entries: dict[str, bytes] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.data)


class ArchiveBuilder:
    """Serializes a book's chapter groupings into a ZIP container.

    Args:
        indent: JSON indentation for every document; None for compact.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def build(self, book_id: int, chapters: list[ChapterGroups]) -> BuiltArchive:
        """Assemble the archive for one book.

        Args:
            book_id: Identifier of the book being archived.
            chapters: Aggregated chapters in reading order.

        Returns:
            The finished archive. Its size is only known once every entry
            has been compressed and the container closed.

        Raises:
            SerializationError: If any document cannot be encoded as JSON.
        """
        entries: dict[str, bytes] = {}
        entries[chapters_entry_name(book_id)] = self._encode(
            [c.chapter for c in chapters],
            f"chapter list of book {book_id}",
        )
        for item in chapters:
            chapter_id = item.chapter.chapter_id
            entries[chapter_entry_name(book_id, chapter_id)] = self._encode(
                item.groups,
                f"groups of book {book_id} chapter {chapter_id}",
            )

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", COMPRESSION, compresslevel=COMPRESS_LEVEL) as zf:
            for name, payload in entries.items():
                info = zipfile.ZipInfo(name, date_time=FIXED_DATE_TIME)
                info.compress_type = COMPRESSION
                info.external_attr = 0o644 << 16
                zf.writestr(info, payload, compresslevel=COMPRESS_LEVEL)

        archive = BuiltArchive(book_id=book_id, data=buffer.getvalue(), entries=entries)
        logger.debug(
            "Built archive for book %s: %d entries, %d bytes",
            book_id,
            len(entries),
            archive.size,
        )
        return archive

    def _encode(self, models: Sequence[BaseModel], what: str) -> bytes:
        try:
            payload = [m.model_dump(mode="json") for m in models]
            text = json.dumps(payload, ensure_ascii=False, indent=self.indent)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationError(f"Cannot serialize {what}: {exc}") from exc
        return text.encode("utf-8")


def read_archive(data: bytes) -> tuple[list[Chapter], dict[int, list[HadithGroup]]]:
    """Parse an archive produced by ArchiveBuilder back into models.

    Args:
        data: Raw archive bytes.

    Returns:
        The chapter list and each chapter's groups keyed by chapter id.

    Raises:
        SerializationError: If the archive or a document inside is malformed.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            names = zf.namelist()
            chapters_name = next(n for n in names if n.endswith("/chapters.json"))
            chapters = _chapters_adapter.validate_json(zf.read(chapters_name))
            groups = {
                chapter.chapter_id: _groups_adapter.validate_json(
                    zf.read(chapter_entry_name(chapter.book_id, chapter.chapter_id))
                )
                for chapter in chapters
            }
    except (zipfile.BadZipFile, KeyError, StopIteration, ValidationError) as exc:
        raise SerializationError(f"Malformed archive: {exc}") from exc
    return chapters, groups


def write_directory(entries: dict[str, bytes], root: str | Path) -> int:
    """Write archive entries uncompressed under ``root``.

    Produces the same tree as the archive's internal layout, for direct
    inspection.

    Args:
        entries: Entry name to document bytes, as in BuiltArchive.entries.
        root: Output directory; entry prefixes become subdirectories.

    Returns:
        Total number of bytes written.

    Raises:
        FilesystemError: If a directory or file cannot be written.
    """
    root = Path(root)
    total = 0
    for name, payload in entries.items():
        dest = root / name
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(payload)
        except OSError as exc:
            raise FilesystemError(f"Cannot write document ({exc})", dest) from exc
        total += len(payload)
    return total
