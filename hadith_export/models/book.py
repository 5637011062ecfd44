"""Book data model."""

from pydantic import BaseModel, ConfigDict


class Book(BaseModel):
    """A hadith collection as stored in the ``books`` table.

    Only ``id`` and ``title`` are required; any other descriptive columns
    (author, language, hadith counts, ...) are kept as extra fields and
    carried through to the manifest.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    title: str
