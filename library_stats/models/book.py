"""Book data model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Genre(str, Enum):
    """Closed set of literary genres known to the library."""

    CLASSIC = "classic"
    DETECTIVE = "detective"
    FANTASY = "fantasy"
    HISTORY = "history"
    HORROR = "horror"
    MYSTERY = "mystery"
    POETRY = "poetry"
    ROMANCE = "romance"
    SCIENCE_FICTION = "science_fiction"
    THRILLER = "thriller"


class Book(BaseModel):
    """A catalog entry. Two books with equal fields are the same book."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    genre: Genre
    pages: int = Field(default=0, ge=0)
