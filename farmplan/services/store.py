"""
In-memory store of one-off tasks and recurring schedules.

Records are keyed by id and kept in insertion order. The store is the single
writer for its records: every mutation runs synchronously to completion, and
callers sharing one store serialize through it. Durable persistence belongs to
the caller, which reads `snapshot()` and rebuilds with `from_snapshot()`.
"""
import logging
from collections.abc import Iterable
from dataclasses import fields, replace
from datetime import date
from typing import Any, Optional

from farmplan.core.config import settings
from farmplan.core.exceptions import ScheduleNotFound, TaskNotFound
from farmplan.models.schedule import Occurrence, Progress, ScheduledTask
from farmplan.models.task import Task
from farmplan.schemas.schedule import (
    ScheduledTaskCreate,
    ScheduledTaskRecord,
    ScheduledTaskUpdate,
)
from farmplan.schemas.task import TaskCreate, TaskRead, TaskUpdate
from farmplan.services import agenda as agenda_service
from farmplan.services.agenda import AgendaItem, Reminder, SortKey
from farmplan.services.ledger import CompletionLedger
from farmplan.services.progress import progress as compute_progress
from farmplan.services.recurrence import occurrence_index, to_date_key

logger = logging.getLogger(__name__)

# Fields that may be cleared by an explicit null in an update payload.
_NULLABLE = {"crop", "stage", "quantity", "notes", "custom_type"}

# Changed only through ScheduledTask.redefine, which prunes the ledger.
_RECURRENCE = {"start_date", "interval", "total_days", "completed_dates"}


def _changes(data: TaskUpdate | ScheduledTaskUpdate) -> dict[str, Any]:
    return {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE
    }


class ScheduleStore:
    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._schedules: dict[str, ScheduledTask] = {}

    # ── One-off tasks ─────────────────────────────────────────────────────────

    def add_task(self, task: Task) -> Task:
        if task.id in self._tasks:
            raise ValueError(f"task {task.id} already exists")
        self._tasks[task.id] = task
        logger.info("add_task: %s %r on %s", task.id, task.name, task.date.isoformat())
        return task

    def create_task(self, data: TaskCreate) -> Task:
        fields_ = data.model_dump()
        if fields_["date"] is None:
            fields_["date"] = date.today()
        if fields_["time"] is None:
            fields_["time"] = settings.DEFAULT_TASK_TIME
        return self.add_task(Task(**fields_))

    def get_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def list_tasks(self, start: Optional[date] = None, end: Optional[date] = None) -> list[Task]:
        tasks = list(self._tasks.values())
        if start is None and end is None:
            return tasks
        return agenda_service.tasks_between(
            tasks, start or date.min, end or date.max
        )

    def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        """Edit a task in place. The edited task is validated before any field changes."""
        task = self.get_task(task_id)
        candidate = replace(task, **_changes(data))
        for f in fields(Task):
            setattr(task, f.name, getattr(candidate, f.name))
        return task

    def toggle_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        task.completed = not task.completed
        logger.info(
            "toggle_task: %s -> %s", task_id, "completed" if task.completed else "pending"
        )
        return task

    def delete_task(self, task_id: str) -> None:
        self.get_task(task_id)
        del self._tasks[task_id]
        logger.info("delete_task: %s", task_id)

    def task_history(self, today: Optional[date] = None) -> list[Task]:
        return agenda_service.history(self._tasks.values(), today or date.today())

    # ── Recurring schedules ───────────────────────────────────────────────────

    def add_schedule(self, schedule: ScheduledTask) -> ScheduledTask:
        if schedule.id in self._schedules:
            raise ValueError(f"schedule {schedule.id} already exists")
        self._schedules[schedule.id] = schedule
        logger.info(
            "add_schedule: %s %r, %d task(s) from %s every %d day(s)",
            schedule.id, schedule.name, schedule.total_tasks,
            schedule.start_date.isoformat(), schedule.interval,
        )
        return schedule

    def create_schedule(self, data: ScheduledTaskCreate) -> ScheduledTask:
        fields_ = data.model_dump()
        if fields_["start_date"] is None:
            fields_["start_date"] = date.today()
        if fields_["interval"] is None:
            fields_["interval"] = settings.DEFAULT_INTERVAL_DAYS
        if fields_["total_days"] is None:
            fields_["total_days"] = settings.DEFAULT_TOTAL_DAYS
        return self.add_schedule(ScheduledTask(**fields_))

    def get_schedule(self, schedule_id: str) -> ScheduledTask:
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            raise ScheduleNotFound(schedule_id)
        return schedule

    def list_schedules(self, include_inactive: bool = True) -> list[ScheduledTask]:
        return [s for s in self._schedules.values() if include_inactive or s.is_active]

    def update_schedule(self, schedule_id: str, data: ScheduledTaskUpdate) -> ScheduledTask:
        """
        Edit a schedule's definition in place.

        The edited definition is built and validated before anything changes,
        so an invalid edit leaves the schedule untouched. Ledger entries that
        are no longer occurrences of the new definition are pruned.
        """
        schedule = self.get_schedule(schedule_id)
        candidate = replace(schedule, completed_dates=set(), **_changes(data))

        dropped = schedule.redefine(candidate.start_date, candidate.interval, candidate.total_days)
        if dropped:
            logger.info(
                "update_schedule: pruned %d completed date(s) from %s", dropped, schedule_id
            )

        for f in fields(ScheduledTask):
            if f.name not in _RECURRENCE:
                setattr(schedule, f.name, getattr(candidate, f.name))
        return schedule

    def set_active(self, schedule_id: str, active: bool) -> ScheduledTask:
        return self.update_schedule(schedule_id, ScheduledTaskUpdate(is_active=active))

    def delete_schedule(self, schedule_id: str) -> None:
        self.get_schedule(schedule_id)
        del self._schedules[schedule_id]
        logger.info("delete_schedule: %s", schedule_id)

    # ── Ledger and derived views ──────────────────────────────────────────────

    def toggle(self, schedule_id: str, day: date) -> Occurrence:
        """Flip completion of one occurrence, writing through to the schedule's ledger."""
        schedule = self.get_schedule(schedule_id)
        day = to_date_key(day)
        completed = CompletionLedger(schedule).toggle(day)
        logger.info(
            "toggle: %s %s -> %s", schedule_id, day.isoformat(),
            "completed" if completed else "pending",
        )
        return Occurrence(
            schedule_id=schedule_id,
            date=day,
            sequence_index=occurrence_index(schedule, day),
            completed=completed,
        )

    def is_complete(self, schedule_id: str, day: date) -> bool:
        return CompletionLedger(self.get_schedule(schedule_id)).is_complete(day)

    def occurrences(self, schedule_id: str) -> list[Occurrence]:
        return list(CompletionLedger(self.get_schedule(schedule_id)).occurrences())

    def progress(self, schedule_id: str) -> Progress:
        return compute_progress(self.get_schedule(schedule_id))

    def agenda_for(self, day: date, sort_by: SortKey = "insertion") -> list[AgendaItem]:
        return agenda_service.agenda_for(
            day,
            self._tasks.values(),
            self._schedules.values(),
            sort_by=sort_by,
            occurrence_time=settings.DEFAULT_TASK_TIME,
        )

    def reminders(self, today: Optional[date] = None) -> list[Reminder]:
        return agenda_service.due_reminders(
            self._tasks.values(),
            self._schedules.values(),
            today or date.today(),
            lookahead_days=settings.REMINDER_LOOKAHEAD_DAYS,
            occurrence_time=settings.DEFAULT_TASK_TIME,
        )

    # ── Snapshots ─────────────────────────────────────────────────────────────

    def snapshot(self) -> dict[str, list[dict]]:
        """JSON-ready copy of every record, for the persistence layer to write."""
        return {
            "tasks": [TaskRead.model_validate(t).model_dump(mode="json") for t in self._tasks.values()],
            "schedules": [
                ScheduledTaskRecord.model_validate(s).model_dump(mode="json")
                for s in self._schedules.values()
            ],
        }

    @classmethod
    def from_snapshot(
        cls, tasks: Iterable[dict] = (), schedules: Iterable[dict] = ()
    ) -> "ScheduleStore":
        """Rebuild a store from snapshot records. Every record is validated; stale ledger dates are dropped."""
        store = cls()
        for raw in tasks:
            store.add_task(Task(**TaskRead.model_validate(raw).model_dump()))
        for raw in schedules:
            record = ScheduledTaskRecord.model_validate(raw).model_dump()
            record["completed_dates"] = set(record["completed_dates"])
            store.add_schedule(ScheduledTask(**record))
        logger.info(
            "from_snapshot: loaded %d task(s), %d schedule(s)",
            len(store._tasks), len(store._schedules),
        )
        return store
