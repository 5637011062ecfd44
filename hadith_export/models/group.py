"""Aggregated chapter/section groupings ready for serialization."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hadith_export.models.chapter import Chapter, Section
from hadith_export.models.hadith import Hadith

# Section id carried by the single group synthesized for a chapter
# that has no sections of its own.
WHOLE_CHAPTER_SECTION_ID = -1


class HadithGroup(BaseModel):
    """A section's metadata plus its ordered hadiths.

    For a sectionless chapter the group instead carries the chapter's
    metadata under ``WHOLE_CHAPTER_SECTION_ID`` and holds every hadith
    of the chapter.
    """

    model_config = ConfigDict(extra="allow")

    book_id: int
    chapter_id: int
    section_id: int
    number: int
    title: str = ""
    hadiths: list[Hadith] = Field(default_factory=list)

    @property
    def is_whole_chapter(self) -> bool:
        return self.section_id == WHOLE_CHAPTER_SECTION_ID

    @classmethod
    def from_section(cls, section: Section, hadiths: list[Hadith]) -> HadithGroup:
        return cls.model_validate({**section.model_dump(), "hadiths": hadiths})

    @classmethod
    def whole_chapter(cls, chapter: Chapter, hadiths: list[Hadith]) -> HadithGroup:
        return cls.model_validate(
            {
                **chapter.model_dump(),
                "section_id": WHOLE_CHAPTER_SECTION_ID,
                "hadiths": hadiths,
            }
        )


class ChapterGroups(BaseModel):
    """A chapter together with its groups, in reading order."""

    chapter: Chapter
    groups: list[HadithGroup] = Field(default_factory=list)

    @property
    def hadith_count(self) -> int:
        return sum(len(group.hadiths) for group in self.groups)
