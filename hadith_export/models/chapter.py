"""Chapter and section data models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Chapter(BaseModel):
    """An ordered subdivision of a book."""

    model_config = ConfigDict(extra="allow", frozen=True)

    book_id: int
    chapter_id: int
    number: int  # Ordering number within the book
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def null_title_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class Section(BaseModel):
    """An ordered subdivision of a chapter. A chapter may have none.

    Negative ids are reserved for the synthesized whole-chapter group.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    book_id: int
    chapter_id: int
    section_id: int = Field(ge=0)
    number: int  # Ordering number within the chapter
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def null_title_to_empty(cls, value: object) -> object:
        return "" if value is None else value
