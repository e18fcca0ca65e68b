import logging
from dataclasses import dataclass, field
from datetime import date as date_type
from enum import Enum
from typing import Optional

from farmplan.models.task import Priority, TaskKind, new_id
from farmplan.services.recurrence import (
    occurrence_dates,
    to_date_key,
    total_tasks_for,
    validate_recurrence,
)

logger = logging.getLogger(__name__)

# Rebinding these after construction would bypass validation and ledger pruning.
_GUARDED_FIELDS = ("start_date", "interval", "total_days", "completed_dates")


class ScheduleType(str, Enum):
    daily = "daily"
    every_few_days = "every-few-days"
    custom = "custom"


@dataclass
class ScheduledTask:
    """
    A recurring farm task: one occurrence every `interval` days, `total_tasks` times.

    The recurrence triple is validated on construction, so an invalid schedule
    never exists, and it is read-only afterwards: `redefine` is the one way to
    change it. `completed_dates` is the completion ledger; it only ever holds
    dates produced by the expansion.
    """

    name: str
    start_date: date_type
    interval: int
    total_days: int
    task_kind: TaskKind = TaskKind.custom
    schedule_type: ScheduleType = ScheduleType.daily
    priority: Priority = Priority.medium
    completed_dates: set[date_type] = field(default_factory=set)
    is_active: bool = True
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        validate_recurrence(self.interval, self.total_days)
        self.start_date = to_date_key(self.start_date)
        self.task_kind = TaskKind(self.task_kind)
        self.schedule_type = ScheduleType(self.schedule_type)
        self.priority = Priority(self.priority)

        recorded = {to_date_key(d) for d in self.completed_dates}
        valid = set(occurrence_dates(self.start_date, self.interval, self.total_days))
        stale = recorded - valid
        if stale:
            logger.warning(
                "ScheduledTask: dropping %d completed date(s) outside schedule %s",
                len(stale), self.id,
            )
        self.completed_dates = recorded & valid
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name, value):
        if name in _GUARDED_FIELDS and self.__dict__.get("_sealed", False):
            raise AttributeError(f"{name} is read-only; use redefine() to edit the recurrence")
        object.__setattr__(self, name, value)

    def redefine(
        self,
        start_date: Optional[date_type] = None,
        interval: Optional[int] = None,
        total_days: Optional[int] = None,
    ) -> int:
        """
        Change the recurrence in one step and prune the ledger to the new expansion.

        Arguments left as None keep their current value. The new triple is
        validated before anything is assigned. Returns the number of ledger
        entries dropped.
        """
        start_date = self.start_date if start_date is None else to_date_key(start_date)
        interval = self.interval if interval is None else interval
        total_days = self.total_days if total_days is None else total_days
        validate_recurrence(interval, total_days)

        valid = set(occurrence_dates(start_date, interval, total_days))
        stale = self.completed_dates - valid
        object.__setattr__(self, "start_date", start_date)
        object.__setattr__(self, "interval", interval)
        object.__setattr__(self, "total_days", total_days)
        self.completed_dates.difference_update(stale)
        return len(stale)

    @property
    def total_tasks(self) -> int:
        return total_tasks_for(self.total_days, self.interval)


@dataclass(frozen=True)
class Occurrence:
    """One concrete day of a schedule. Identity is (schedule_id, date)."""

    schedule_id: str
    date: date_type
    sequence_index: int = field(compare=False)
    completed: bool = field(compare=False, default=False)

    @property
    def key(self) -> tuple[str, date_type]:
        return (self.schedule_id, self.date)


@dataclass(frozen=True)
class Progress:
    completed: int
    total: int
    remaining: int
    percentage: int
    next_due_date: Optional[date_type]

    @property
    def is_complete(self) -> bool:
        return self.next_due_date is None
