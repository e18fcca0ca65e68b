"""
Recurrence expansion.

A schedule's occurrences are fully determined by (start_date, interval,
total_days): ceil(total_days / interval) dates, the first on start_date and
each following one interval calendar days later. The duration bounds the
count; the last occurrence still falls before start_date + total_days, but
need not fall on its final day.
"""
import math
from datetime import date, datetime, timedelta
from typing import Optional, Protocol

from farmplan.core.exceptions import InvalidRecurrenceSpec


class RecurrenceSpec(Protocol):
    start_date: date
    interval: int
    total_days: int


def to_date_key(value: date | datetime | str) -> date:
    """Reduce a date-like value to its calendar day. Time-of-day is dropped, never converted."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise TypeError(f"expected a date, got {type(value).__name__}")


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def validate_recurrence(interval, total_days) -> None:
    if not (_is_positive_int(interval) and _is_positive_int(total_days)):
        raise InvalidRecurrenceSpec(interval, total_days)


def total_tasks_for(total_days: int, interval: int) -> int:
    validate_recurrence(interval, total_days)
    return math.ceil(total_days / interval)


def occurrence_dates(start_date: date, interval: int, total_days: int) -> list[date]:
    count = total_tasks_for(total_days, interval)
    start = to_date_key(start_date)
    step = timedelta(days=interval)
    return [start + step * i for i in range(count)]


def expand(schedule: RecurrenceSpec) -> list[date]:
    """Return every occurrence date of a schedule, in order. A new list on every call."""
    return occurrence_dates(schedule.start_date, schedule.interval, schedule.total_days)


def occurrence_index(schedule: RecurrenceSpec, day: date) -> Optional[int]:
    """Sequence index of `day` in the schedule's expansion, or None if it is not an occurrence."""
    offset = (to_date_key(day) - to_date_key(schedule.start_date)).days
    if offset < 0 or offset % schedule.interval:
        return None
    index = offset // schedule.interval
    if index >= total_tasks_for(schedule.total_days, schedule.interval):
        return None
    return index
