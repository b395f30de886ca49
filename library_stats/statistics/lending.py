"""Aggregate queries over a library's lending history."""

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from library_stats.config import StatisticsConfig
from library_stats.models.archive import ArchivedData, Library
from library_stats.models.book import Book, Genre
from library_stats.models.report import StatisticsReport
from library_stats.models.user import User
from library_stats.statistics.delinquency import time_delinquency

logger = logging.getLogger(__name__)


class EmptyResultError(LookupError):
    """Raised when a query has no lending history to aggregate."""


def _group_by_user(records: Iterable[ArchivedData]) -> dict[User, list[ArchivedData]]:
    """Group records by reader, keeping archive order inside each group."""
    groups: dict[User, list[ArchivedData]] = {}
    for record in records:
        groups.setdefault(record.user, []).append(record)
    return groups


def _favorite_genre(user: User, records: Iterable[ArchivedData]) -> Genre | None:
    """Pick the most frequent genre among the user's returned records.

    Ties go to the genre of ``user.current_book`` when it is among them,
    otherwise to the first tied genre in record order. Returns None when
    no record was returned.
    """
    counts: Counter[Genre] = Counter(
        record.book.genre for record in records if record.is_returned
    )
    if not counts:
        return None

    best = max(counts.values())
    tied = [genre for genre, count in counts.items() if count == best]

    current_book = user.current_book
    if current_book is not None and current_book.genre in tied:
        return current_book.genre
    return tied[0]


class LendingStatistics:
    """Read-only statistics over a Library snapshot.

    Every query samples the evaluation instant once and never mutates the
    snapshot, so repeated calls with a fixed clock return equal results.

    Args:
        config: Thresholds and labels. Defaults to StatisticsConfig().
        clock: Zero-argument callable returning the evaluation instant.
            If None, ``config.evaluation_time`` is used when set, otherwise
            ``datetime.now``.
    """

    def __init__(
        self,
        config: StatisticsConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or StatisticsConfig()
        if clock is None:
            fixed = self._config.evaluation_time
            clock = (lambda: fixed) if fixed is not None else datetime.now
        self._clock = clock

    @property
    def config(self) -> StatisticsConfig:
        return self._config

    def specialists_in_genre(self, library: Library, genre: Genre) -> dict[User, int]:
        """Return genre specialists with the number of pages they read.

        A specialist has at least ``specialist_min_loans`` loans of the genre,
        each held for ``specialist_min_days`` or longer (books still checked
        out count once that much time has passed). Pages of those loans are
        summed; if the reader currently holds a book of the same genre, their
        ``read_pages`` total is added once, judged from the first record of
        their group.

        Args:
            library: The library snapshot.
            genre: The genre to look for specialists in.

        Returns:
            Mapping of user to total pages read. Unordered.
        """
        now = self._clock()
        threshold = timedelta(days=self._config.specialist_min_days)

        qualifying = [
            record
            for record in library.archive
            if record.book.genre == genre
            and time_delinquency(record, threshold, inclusive=True, now=now)
        ]

        result: dict[User, int] = {}
        for user, records in _group_by_user(qualifying).items():
            if len(records) < self._config.specialist_min_loans:
                continue

            pages = sum(record.book.pages for record in records)
            current_book = records[0].user.current_book
            if current_book is not None and current_book.genre == genre:
                pages += records[0].user.read_pages
            result[user] = pages

        logger.debug(
            "Found %d specialists in %s at %s", len(result), genre.value, now
        )
        return result

    def love_genre(self, library: Library, user: User) -> Genre:
        """Return the genre the user borrowed most often.

        Only returned books are counted. On a tie the genre of the book the
        user is reading now wins; if it is not among the tied genres, the
        first tied genre in archive order is returned.

        Args:
            library: The library snapshot.
            user: The reader.

        Returns:
            The favorite genre.

        Raises:
            EmptyResultError: If the user has no returned books.
        """
        genre = _favorite_genre(
            user, (record for record in library.archive if record.user == user)
        )
        if genre is None:
            logger.warning("No returned books for user %s", user.id)
            raise EmptyResultError(f"No returned books for user {user.id}")
        return genre
    def unreliable_users(self, library: Library) -> set[User]:
        """Return users who held more than half of their books too long.

        A loan is too long when held strictly more than ``unreliable_days``.
        Books still checked out are measured up to the evaluation instant.

        Args:
            library: The library snapshot.

        Returns:
            Set of unreliable users.
        """
        now = self._clock()
        threshold = timedelta(days=self._config.unreliable_days)

        result: set[User] = set()
        for user, records in _group_by_user(library.archive).items():
            late = sum(
                1
                for record in records
                if time_delinquency(record, threshold, inclusive=False, now=now)
            )
            if late > len(records) // 2:
                result.add(user)

        logger.debug("Found %d unreliable users at %s", len(result), now)
        return result

    def books_with_more_count_pages(self, library: Library, min_pages: int) -> list[Book]:
        """Return catalog books with at least ``min_pages`` pages, in catalog order."""
        return [book for book in library.books if book.pages >= min_pages]

    def most_popular_author_in_genre(self, library: Library) -> dict[Genre, str]:
        """Return the most borrowed author of every genre.

        Ties go to the alphabetically first author. Genres without any
        lending history map to ``unknown_author``.

        Args:
            library: The library snapshot.

        Returns:
            Mapping with one entry for every Genre member.
        """
        authors: dict[Genre, Counter[str]] = {genre: Counter() for genre in Genre}
        for record in library.archive:
            authors[record.book.genre][record.book.author] += 1

        result: dict[Genre, str] = {}
        for genre, counts in authors.items():
            if not counts:
                result[genre] = self._config.unknown_author
                continue
            result[genre] = min(counts.items(), key=lambda item: (-item[1], item[0]))[0]
        return result

    def build_report(
        self, library: Library, genres: Iterable[Genre] | None = None
    ) -> StatisticsReport:
        """Compute every whole-library statistic against a single instant.

        Users without returned books are left out of ``favorite_genres``.

        Args:
            library: The library snapshot.
            genres: Genres to list specialists for. Defaults to all genres.

        Returns:
            A StatisticsReport keyed by user id.
        """
        now = self._clock()
        pinned = LendingStatistics(self._config, clock=lambda: now)

        specialists = {
            genre: {
                user.id: pages
                for user, pages in pinned.specialists_in_genre(library, genre).items()
            }
            for genre in (genres if genres is not None else Genre)
        }

        favorite_genres: dict[str, Genre] = {}
        for user, records in _group_by_user(library.archive).items():
            genre = _favorite_genre(user, records)
            if genre is not None:
                favorite_genres[user.id] = genre

        report = StatisticsReport(
            generated_at=now,
            specialists=specialists,
            unreliable_user_ids=sorted(user.id for user in pinned.unreliable_users(library)),
            popular_authors=pinned.most_popular_author_in_genre(library),
            favorite_genres=favorite_genres,
        )
        logger.info(
            "Built statistics report for %d records at %s", len(library.archive), now
        )
        return report
