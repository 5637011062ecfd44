"""Hadith record data model."""

from pydantic import BaseModel, ConfigDict


class Hadith(BaseModel):
    """The leaf content unit, always tied to a book and chapter."""

    model_config = ConfigDict(extra="allow", frozen=True)

    hadith_id: int
    book_id: int
    chapter_id: int
    section_id: int | None = None
    narrator: str | None = None
    ar: str | None = None
    en: str | None = None
    grade: str | None = None
