"""
Completion ledger for a single schedule.

Operates in place on ScheduledTask.completed_dates. The ledger is the only
record of completion: counts are always its cardinality. Pruning on edit
is done by ScheduledTask.redefine.
"""
from collections.abc import Iterator
from datetime import date

from farmplan.core.exceptions import OccurrenceNotFound
from farmplan.models.schedule import Occurrence, ScheduledTask
from farmplan.services.recurrence import expand, occurrence_index, to_date_key


class CompletionLedger:
    def __init__(self, schedule: ScheduledTask):
        self.schedule = schedule

    @property
    def dates(self) -> set[date]:
        return self.schedule.completed_dates

    def is_complete(self, day: date) -> bool:
        return to_date_key(day) in self.dates

    def count(self) -> int:
        return len(self.dates)

    def toggle(self, day: date) -> bool:
        """Flip completion of one occurrence. Returns the new completed state."""
        day = to_date_key(day)
        if occurrence_index(self.schedule, day) is None:
            raise OccurrenceNotFound(self.schedule.id, day)

        if day in self.dates:
            self.dates.discard(day)
            completed = False
        else:
            self.dates.add(day)
            completed = True
        return completed

    def occurrences(self) -> Iterator[Occurrence]:
        for index, day in enumerate(expand(self.schedule)):
            yield Occurrence(
                schedule_id=self.schedule.id,
                date=day,
                sequence_index=index,
                completed=day in self.dates,
            )
