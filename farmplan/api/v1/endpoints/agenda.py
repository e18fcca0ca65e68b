from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from farmplan.core.deps import StoreDep
from farmplan.schemas.agenda import AgendaItemRead, AgendaRead, DaySummaryRead, ReminderRead
from farmplan.services.agenda import SortKey
from farmplan.services.progress import summarize

router = APIRouter(prefix="/agenda", tags=["agenda"])


@router.get("/reminders", response_model=list[ReminderRead])
async def list_reminders(store: StoreDep, today: Optional[date] = Query(None)):
    return [ReminderRead.model_validate(r) for r in store.reminders(today)]


@router.get("/{day}", response_model=AgendaRead)
async def get_agenda(day: date, store: StoreDep, sort_by: SortKey = Query("insertion")):
    items = store.agenda_for(day, sort_by=sort_by)
    return AgendaRead(
        date=day,
        items=[AgendaItemRead.model_validate(item) for item in items],
        summary=DaySummaryRead.model_validate(summarize(items)),
    )
