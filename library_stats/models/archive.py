"""Lending archive data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from library_stats.models.book import Book
from library_stats.models.user import User


class ArchivedData(BaseModel):
    """One lending record: who took which book and when."""

    model_config = ConfigDict(frozen=True)

    user: User
    book: Book
    taken_at: datetime
    returned_at: datetime | None = None  # None while the book is checked out

    @property
    def is_returned(self) -> bool:
        return self.returned_at is not None


class Library(BaseModel):
    """Snapshot of the catalog and the full lending history, both ordered."""

    books: list[Book] = Field(default_factory=list)
    archive: list[ArchivedData] = Field(default_factory=list)
