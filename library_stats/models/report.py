"""Statistics report data model."""

from datetime import datetime

from pydantic import BaseModel, Field

from library_stats.models.book import Genre


class StatisticsReport(BaseModel):
    """All whole-library statistics computed against one evaluation instant.

    Users are referenced by id so the report serializes to plain data.
    """

    generated_at: datetime
    specialists: dict[Genre, dict[str, int]] = Field(default_factory=dict)
    unreliable_user_ids: list[str] = Field(default_factory=list)
    popular_authors: dict[Genre, str] = Field(default_factory=dict)
    favorite_genres: dict[str, Genre] = Field(default_factory=dict)
