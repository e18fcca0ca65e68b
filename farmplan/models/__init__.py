from farmplan.models.task import Priority, Task, TaskKind
from farmplan.models.schedule import Occurrence, Progress, ScheduledTask, ScheduleType

__all__ = [
    "Priority",
    "Task",
    "TaskKind",
    "Occurrence",
    "Progress",
    "ScheduledTask",
    "ScheduleType",
]
