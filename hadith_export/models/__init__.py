"""Data models for the Hadith Export application."""

from hadith_export.models.book import Book
from hadith_export.models.chapter import Chapter, Section
from hadith_export.models.group import (
    WHOLE_CHAPTER_SECTION_ID,
    ChapterGroups,
    HadithGroup,
)
from hadith_export.models.hadith import Hadith
from hadith_export.models.result import BookExportResult

__all__ = [
    "WHOLE_CHAPTER_SECTION_ID",
    "Book",
    "BookExportResult",
    "Chapter",
    "ChapterGroups",
    "Hadith",
    "HadithGroup",
    "Section",
]
