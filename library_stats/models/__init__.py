"""Data models for the library lending statistics."""

from library_stats.models.archive import ArchivedData, Library
from library_stats.models.book import Book, Genre
from library_stats.models.report import StatisticsReport
from library_stats.models.user import User

__all__ = [
    "ArchivedData",
    "Book",
    "Genre",
    "Library",
    "StatisticsReport",
    "User",
]
