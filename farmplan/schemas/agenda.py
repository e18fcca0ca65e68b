from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel

from farmplan.models.task import Priority, TaskKind


class AgendaItemRead(BaseModel):
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
    schedule_id: Optional[str] = None
    sequence_index: Optional[int] = None

    model_config = {"from_attributes": True}


class DaySummaryRead(BaseModel):
    completed: int
    pending: int
    total: int
    percentage: int

    model_config = {"from_attributes": True}


class AgendaRead(BaseModel):
    date: date_type
    items: list[AgendaItemRead]
    summary: DaySummaryRead


class ReminderRead(BaseModel):
    message: str
    item: AgendaItemRead

    model_config = {"from_attributes": True}
