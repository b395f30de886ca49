"""Time-based delinquency classification of lending records."""

from datetime import datetime, timedelta

from library_stats.models.archive import ArchivedData


def align_timezone(moment: datetime, reference: datetime) -> datetime:
    """Make ``moment`` naive or aware to match ``reference``.

    Naive values are read as local time, like ``datetime.now()``.

    Args:
        moment: The datetime to convert.
        reference: The datetime whose awareness should be matched.

    Returns:
        ``moment`` unchanged if both agree, otherwise the same instant
        expressed in ``reference``'s zone (or as naive local time).
    """
    if (moment.tzinfo is None) == (reference.tzinfo is None):
        return moment
    if reference.tzinfo is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(reference.tzinfo)


def possession_time(record: ArchivedData, now: datetime) -> timedelta:
    """Return how long the reader held (or has been holding) the book.

    Args:
        record: The lending record.
        now: Evaluation instant used for books that are still checked out.
            It may be naive or aware regardless of the record's timestamps.

    Returns:
        ``returned_at - taken_at`` for returned books, ``now - taken_at``
        otherwise.
    """
    if record.returned_at is not None:
        return record.returned_at - record.taken_at
    return align_timezone(now, record.taken_at) - record.taken_at


def time_delinquency(
    record: ArchivedData,
    threshold: timedelta,
    inclusive: bool,
    now: datetime,
) -> bool:
    """Check whether a record was held longer than a threshold.

    Books that are still checked out are measured up to ``now``.

    Args:
        record: The lending record to classify.
        threshold: Maximum possession time before the loan is delinquent.
        inclusive: If True, a loan held exactly ``threshold`` is delinquent
            (``>=``); otherwise it must exceed it (``>``).
        now: Evaluation instant.

    Returns:
        True if the record is delinquent.
    """
    held = possession_time(record, now)
    if inclusive:
        return held >= threshold
    return held > threshold
