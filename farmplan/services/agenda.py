"""
Daily agenda.

Merges one-off tasks with the expanded occurrences of active schedules for a
single day. Completion of occurrences is read from each schedule's ledger at
merge time; nothing here mutates state.
"""
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date as date_type, timedelta
from typing import Literal, Optional

from farmplan.models.schedule import Occurrence, ScheduledTask
from farmplan.models.task import PRIORITY_RANK, Priority, Task, TaskKind, normalize_time
from farmplan.services.ledger import CompletionLedger
from farmplan.services.recurrence import expand, to_date_key

SortKey = Literal["insertion", "time", "priority"]


@dataclass(frozen=True)
class AgendaItem:
    source: Literal["task", "schedule"]
    name: str
    task_kind: TaskKind
    date: date_type
    time: str
    priority: Priority
    completed: bool
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None
    task_id: Optional[str] = None
    occurrence: Optional[Occurrence] = None

    @property
    def schedule_id(self) -> Optional[str]:
        return self.occurrence.schedule_id if self.occurrence else None

    @property
    def sequence_index(self) -> Optional[int]:
        return self.occurrence.sequence_index if self.occurrence else None


@dataclass(frozen=True)
class Reminder:
    item: AgendaItem
    message: str


def _from_task(task: Task) -> AgendaItem:
    return AgendaItem(
        source="task",
        name=task.name,
        task_kind=task.task_kind,
        date=task.date,
        time=task.time,
        priority=task.priority,
        completed=task.completed,
        crop=task.crop,
        stage=task.stage,
        quantity=task.quantity,
        notes=task.notes,
        custom_type=task.custom_type,
        task_id=task.id,
    )


def _from_occurrence(schedule: ScheduledTask, occurrence: Occurrence, time: str) -> AgendaItem:
    return AgendaItem(
        source="schedule",
        name=schedule.name,
        task_kind=schedule.task_kind,
        date=occurrence.date,
        time=normalize_time(time),
        priority=schedule.priority,
        completed=occurrence.completed,
        crop=schedule.crop,
        stage=schedule.stage,
        quantity=schedule.quantity,
        notes=schedule.notes,
        custom_type=schedule.custom_type,
        occurrence=occurrence,
    )


def _occurrences_on(schedule: ScheduledTask, day: date_type) -> list[Occurrence]:
    # Scans the whole expansion rather than computing a single index so a
    # repeated date would still surface with its own sequence_index.
    ledger = CompletionLedger(schedule)
    return [
        Occurrence(schedule.id, d, sequence_index=i, completed=ledger.is_complete(d))
        for i, d in enumerate(expand(schedule))
        if d == day
    ]


def _sorted(items: list[AgendaItem], sort_by: SortKey) -> list[AgendaItem]:
    if sort_by == "time":
        return sorted(items, key=lambda item: item.time)
    if sort_by == "priority":
        return sorted(items, key=lambda item: PRIORITY_RANK[item.priority])
    return items


def agenda_for(
    day: date_type,
    tasks: Iterable[Task],
    schedules: Iterable[ScheduledTask],
    sort_by: SortKey = "insertion",
    occurrence_time: str = "09:00",
) -> list[AgendaItem]:
    """One-off tasks dated `day`, then occurrences of active schedules on `day`."""
    day = to_date_key(day)
    items = [_from_task(t) for t in tasks if t.date == day]
    for schedule in schedules:
        if not schedule.is_active:
            continue
        items.extend(
            _from_occurrence(schedule, occ, occurrence_time)
            for occ in _occurrences_on(schedule, day)
        )
    return _sorted(items, sort_by)


def tasks_between(tasks: Iterable[Task], start: date_type, end: date_type) -> list[Task]:
    """One-off tasks dated within [start, end]."""
    start, end = to_date_key(start), to_date_key(end)
    return [t for t in tasks if start <= t.date <= end]


def history(tasks: Iterable[Task], today: date_type) -> list[Task]:
    """Completed one-off tasks dated before today, most recent first."""
    today = to_date_key(today)
    done = [t for t in tasks if t.completed and t.date < today]
    return sorted(done, key=lambda t: t.date, reverse=True)


def due_reminders(
    tasks: Iterable[Task],
    schedules: Iterable[ScheduledTask],
    today: date_type,
    lookahead_days: int = 1,
    occurrence_time: str = "09:00",
) -> list[Reminder]:
    """Pending tasks and occurrences due on or before today + lookahead_days, oldest first."""
    horizon = to_date_key(today) + timedelta(days=max(lookahead_days, 0))

    items = [_from_task(t) for t in tasks if not t.completed and t.date <= horizon]
    for schedule in schedules:
        if not schedule.is_active:
            continue
        for occ in CompletionLedger(schedule).occurrences():
            if occ.date > horizon:
                break
            if not occ.completed:
                items.append(_from_occurrence(schedule, occ, occurrence_time))

    items.sort(key=lambda item: (item.date, item.time))
    return [
        Reminder(
            item=item,
            message=(
                f"Reminder: {item.name} is scheduled for "
                f"{item.date.strftime('%b %d, %Y')} at {item.time}"
            ),
        )
        for item in items
    ]
