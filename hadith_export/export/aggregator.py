"""Rebuild the book → chapter → section → hadith nesting from flat queries."""

import logging

from hadith_export.errors import QueryError
from hadith_export.models import Chapter, ChapterGroups, HadithGroup
from hadith_export.storage.repository import HadithSource

logger = logging.getLogger(__name__)


class HierarchyAggregator:
    """Groups a book's hadiths by chapter and section.

    Every chapter yields at least one group: a chapter without sections
    becomes a single whole-chapter group (possibly with no hadiths), a
    chapter with sections yields one group per section in section order.

    Args:
        source: Data access layer answering the hierarchy queries.
    """

    def __init__(self, source: HadithSource) -> None:
        self.source = source

    def aggregate(self, book_id: int) -> list[ChapterGroups]:
        """Build the ordered chapter groupings for one book.

        Args:
            book_id: Identifier of the book to aggregate.

        Returns:
            One ChapterGroups per chapter, in chapter order.

        Raises:
            QueryError: If any underlying query fails.
        """
        try:
            chapters = self.source.list_chapters(book_id)
        except QueryError:
            logger.error("Listing chapters failed for book %s", book_id)
            raise

        result = [self._aggregate_chapter(chapter) for chapter in chapters]
        logger.debug(
            "Aggregated book %s: %d chapters, %d groups, %d hadiths",
            book_id,
            len(result),
            sum(len(c.groups) for c in result),
            sum(c.hadith_count for c in result),
        )
        return result

    def _aggregate_chapter(self, chapter: Chapter) -> ChapterGroups:
        book_id, chapter_id = chapter.book_id, chapter.chapter_id
        try:
            sections = self.source.list_sections(book_id, chapter_id)
        except QueryError:
            logger.error(
                "Listing sections failed for book %s chapter %s", book_id, chapter_id
            )
            raise

        if not sections:
            try:
                hadiths = self.source.list_hadiths(book_id, chapter_id)
            except QueryError:
                logger.error(
                    "Listing hadiths failed for book %s chapter %s",
                    book_id,
                    chapter_id,
                )
                raise
            return ChapterGroups(
                chapter=chapter,
                groups=[HadithGroup.whole_chapter(chapter, hadiths)],
            )

        groups = []
        for section in sections:
            try:
                hadiths = self.source.list_hadiths(
                    book_id, chapter_id, section.section_id
                )
            except QueryError:
                logger.error(
                    "Listing hadiths failed for book %s chapter %s section %s",
                    book_id,
                    chapter_id,
                    section.section_id,
                )
                raise
            groups.append(HadithGroup.from_section(section, hadiths))
        return ChapterGroups(chapter=chapter, groups=groups)
