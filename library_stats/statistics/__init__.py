"""Lending statistics: delinquency classification and aggregate queries."""

from library_stats.statistics.delinquency import (
    align_timezone,
    possession_time,
    time_delinquency,
)
from library_stats.statistics.lending import EmptyResultError, LendingStatistics

__all__ = [
    "EmptyResultError",
    "LendingStatistics",
    "align_timezone",
    "possession_time",
    "time_delinquency",
]
