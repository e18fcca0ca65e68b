"""
Scheduling errors.

Every error is raised synchronously by the call that detected it and leaves
the store untouched. None of them is transient, so nothing retries them.
"""
from datetime import date


class SchedulingError(Exception):
    """Base class for all scheduler errors."""


class InvalidRecurrenceSpec(SchedulingError, ValueError):
    def __init__(self, interval, total_days):
        self.interval = interval
        self.total_days = total_days
        super().__init__(
            f"interval and total_days must be positive integers "
            f"(got interval={interval!r}, total_days={total_days!r})"
        )


class OccurrenceNotFound(SchedulingError, LookupError):
    def __init__(self, schedule_id: str, day: date):
        self.schedule_id = schedule_id
        self.day = day
        super().__init__(f"schedule {schedule_id} has no occurrence on {day.isoformat()}")


class ScheduleNotFound(SchedulingError, LookupError):
    def __init__(self, schedule_id: str):
        self.schedule_id = schedule_id
        super().__init__(f"schedule {schedule_id} not found")


class TaskNotFound(SchedulingError, LookupError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"task {task_id} not found")
