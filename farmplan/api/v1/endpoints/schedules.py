from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from farmplan.core.deps import StoreDep
from farmplan.core.exceptions import InvalidRecurrenceSpec, OccurrenceNotFound, ScheduleNotFound
from farmplan.models.schedule import ScheduledTask
from farmplan.schemas.schedule import (
    OccurrenceRead,
    ProgressRead,
    ScheduledTaskCreate,
    ScheduledTaskRead,
    ScheduledTaskUpdate,
)
from farmplan.services.store import ScheduleStore

router = APIRouter(prefix="/schedules", tags=["schedules"])


# ── Helpers ────────────────────────────────────────────────────────────────────


def _get_schedule(store: ScheduleStore, schedule_id: str) -> ScheduledTask:
    try:
        return store.get_schedule(schedule_id)
    except ScheduleNotFound:
        raise HTTPException(status_code=404, detail="Schedule not found")


def _invalid_spec(exc: InvalidRecurrenceSpec) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


# ── Schedule endpoints ─────────────────────────────────────────────────────────


@router.get("", response_model=list[ScheduledTaskRead])
async def list_schedules(store: StoreDep, include_inactive: bool = Query(False)):
    return [
        ScheduledTaskRead.model_validate(s)
        for s in store.list_schedules(include_inactive=include_inactive)
    ]


@router.post("", response_model=ScheduledTaskRead, status_code=status.HTTP_201_CREATED)
async def create_schedule(data: ScheduledTaskCreate, store: StoreDep):
    try:
        return ScheduledTaskRead.model_validate(store.create_schedule(data))
    except InvalidRecurrenceSpec as exc:
        raise _invalid_spec(exc)


@router.get("/{schedule_id}", response_model=ScheduledTaskRead)
async def get_schedule(schedule_id: str, store: StoreDep):
    return ScheduledTaskRead.model_validate(_get_schedule(store, schedule_id))


@router.patch("/{schedule_id}", response_model=ScheduledTaskRead)
async def update_schedule(schedule_id: str, data: ScheduledTaskUpdate, store: StoreDep):
    _get_schedule(store, schedule_id)
    try:
        return ScheduledTaskRead.model_validate(store.update_schedule(schedule_id, data))
    except InvalidRecurrenceSpec as exc:
        raise _invalid_spec(exc)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(schedule_id: str, store: StoreDep):
    _get_schedule(store, schedule_id)
    store.delete_schedule(schedule_id)


# ── Occurrences and progress ───────────────────────────────────────────────────


@router.get("/{schedule_id}/occurrences", response_model=list[OccurrenceRead])
async def list_occurrences(schedule_id: str, store: StoreDep):
    _get_schedule(store, schedule_id)
    return [OccurrenceRead.model_validate(o) for o in store.occurrences(schedule_id)]


@router.post("/{schedule_id}/occurrences/{day}/toggle", response_model=OccurrenceRead)
async def toggle_occurrence(schedule_id: str, day: date, store: StoreDep):
    _get_schedule(store, schedule_id)
    try:
        return OccurrenceRead.model_validate(store.toggle(schedule_id, day))
    except OccurrenceNotFound:
        raise HTTPException(status_code=404, detail="Occurrence not found")


@router.get("/{schedule_id}/progress", response_model=ProgressRead)
async def get_progress(schedule_id: str, store: StoreDep):
    _get_schedule(store, schedule_id)
    return ProgressRead.model_validate(store.progress(schedule_id))
