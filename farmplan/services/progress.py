from collections.abc import Iterable
from dataclasses import dataclass

from farmplan.models.schedule import Progress, ScheduledTask
from farmplan.services.ledger import CompletionLedger
from farmplan.services.recurrence import expand


def _percentage(done: int, total: int) -> int:
    return round(100 * done / total) if total > 0 else 0


def progress(schedule: ScheduledTask) -> Progress:
    """
    Progress of a schedule, recomputed from the definition and its ledger.

    next_due_date is the first occurrence, in expansion order, that is not
    completed; None once every occurrence is done.
    """
    ledger = CompletionLedger(schedule)
    total = schedule.total_tasks
    completed = ledger.count()
    next_due = next((d for d in expand(schedule) if not ledger.is_complete(d)), None)
    return Progress(
        completed=completed,
        total=total,
        remaining=max(total - completed, 0),
        percentage=_percentage(completed, total),
        next_due_date=next_due,
    )


@dataclass(frozen=True)
class DaySummary:
    completed: int
    pending: int
    total: int
    percentage: int


def summarize(items: Iterable) -> DaySummary:
    """Completion summary over anything with a `completed` flag (agenda items, tasks)."""
    flags = [bool(item.completed) for item in items]
    done = sum(flags)
    return DaySummary(
        completed=done,
        pending=len(flags) - done,
        total=len(flags),
        percentage=_percentage(done, len(flags)),
    )
