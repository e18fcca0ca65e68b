from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from farmplan.models.schedule import ScheduleType
from farmplan.models.task import Priority, TaskKind


class ScheduledTaskCreate(BaseModel):
    # interval / total_days are range-checked by the domain model so that
    # every entry point reports the same InvalidRecurrenceSpec.
    name: str = Field(min_length=1)
    task_kind: TaskKind = TaskKind.custom
    start_date: Optional[date_type] = None
    schedule_type: ScheduleType = ScheduleType.daily
    interval: Optional[int] = None
    total_days: Optional[int] = None
    priority: Priority = Priority.medium
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None


class ScheduledTaskUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    task_kind: Optional[TaskKind] = None
    start_date: Optional[date_type] = None
    schedule_type: Optional[ScheduleType] = None
    interval: Optional[int] = None
    total_days: Optional[int] = None
    priority: Optional[Priority] = None
    is_active: Optional[bool] = None
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None


class ScheduledTaskRecord(BaseModel):
    """Persisted shape of a schedule: the definition plus its ledger, nothing derived."""

    id: str
    name: str
    task_kind: TaskKind
    start_date: date_type
    schedule_type: ScheduleType
    interval: int
    total_days: int
    completed_dates: list[date_type] = []
    is_active: bool = True
    priority: Priority = Priority.medium
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("completed_dates", mode="before")
    @classmethod
    def sort_dates(cls, value):
        """Ledger order is meaningless; emit it sorted so payloads are stable."""
        return sorted(value) if value is not None else []


class ScheduledTaskRead(ScheduledTaskRecord):
    total_tasks: int


class ProgressRead(BaseModel):
    completed: int
    total: int
    remaining: int
    percentage: int
    next_due_date: Optional[date_type]
    is_complete: bool

    model_config = {"from_attributes": True}


class OccurrenceRead(BaseModel):
    schedule_id: str
    date: date_type
    sequence_index: int
    completed: bool

    model_config = {"from_attributes": True}
