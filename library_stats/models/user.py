"""Reader data model."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from library_stats.models.book import Book


class User(BaseModel):
    """A library reader.

    ``read_pages`` is the running total of pages read before the current
    loan. ``current_book`` is the book the reader holds right now, if any.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = ""
    read_pages: int = 0
    current_book: Book | None = None
