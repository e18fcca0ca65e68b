from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field

from farmplan.models.task import Priority, TaskKind

TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"


class TaskCreate(BaseModel):
    name: str = Field(min_length=1)
    task_kind: TaskKind = TaskKind.custom
    date: Optional[date_type] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    priority: Priority = Priority.medium
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None


class TaskUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    task_kind: Optional[TaskKind] = None
    date: Optional[date_type] = None
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None


class TaskRead(BaseModel):
    id: str
    name: str
    task_kind: TaskKind
    date: date_type
    time: str
    completed: bool
    priority: Priority
    crop: Optional[str] = None
    stage: Optional[str] = None
    quantity: Optional[str] = None
    notes: Optional[str] = None
    custom_type: Optional[str] = None

    model_config = {"from_attributes": True}
