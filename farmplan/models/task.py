import uuid
from dataclasses import dataclass, field
from datetime import date as date_type, datetime
from enum import Enum
from typing import Optional

from farmplan.services.recurrence import to_date_key


class TaskKind(str, Enum):
    irrigation = "irrigation"
    fertilization = "fertilization"
    pest_control = "pest-control"
    weeding = "weeding"
    harvesting = "harvesting"
    custom = "custom"


class Priority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


PRIORITY_RANK: dict[Priority, int] = {Priority.high: 0, Priority.medium: 1, Priority.low: 2}


def new_id() -> str:
    return uuid.uuid4().hex


def normalize_time(value: str) -> str:
    """Parse a 24-hour "H:MM" or "HH:MM" clock time and return it as "HH:MM"."""
    try:
        return datetime.strptime(value, "%H:%M").strftime("%H:%M")
    except (TypeError, ValueError):
        raise ValueError(f"invalid time {value!r}, expected HH:MM") from None


@dataclass
class Task:
    """A one-off farm task on a single day."""

    name: str
    date: date_type
    task_kind: TaskKind = TaskKind.custom
    time: str = "09:00"
    completed: bool = False
    priority: Priority = Priority.medium
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        self.date = to_date_key(self.date)
        self.time = normalize_time(self.time)
        self.task_kind = TaskKind(self.task_kind)
        self.priority = Priority(self.priority)
