from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from farmplan.core.deps import StoreDep
from farmplan.core.exceptions import TaskNotFound
from farmplan.models.task import Task
from farmplan.schemas.task import TaskCreate, TaskRead, TaskUpdate
from farmplan.services.store import ScheduleStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


# ── Helpers ────────────────────────────────────────────────────────────────────


def _get_task(store: ScheduleStore, task_id: str) -> Task:
    try:
        return store.get_task(task_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")


# ── Task endpoints ─────────────────────────────────────────────────────────────


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    store: StoreDep,
    start: Optional[date] = Query(None, description="Only tasks on or after this date"),
    end: Optional[date] = Query(None, description="Only tasks on or before this date"),
):
    return [TaskRead.model_validate(t) for t in store.list_tasks(start=start, end=end)]


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskCreate, store: StoreDep):
    return TaskRead.model_validate(store.create_task(data))


@router.get("/history", response_model=list[TaskRead])
async def task_history(store: StoreDep, today: Optional[date] = Query(None)):
    return [TaskRead.model_validate(t) for t in store.task_history(today)]


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: str, store: StoreDep):
    return TaskRead.model_validate(_get_task(store, task_id))


@router.patch("/{task_id}", response_model=TaskRead)
async def update_task(task_id: str, data: TaskUpdate, store: StoreDep):
    _get_task(store, task_id)
    return TaskRead.model_validate(store.update_task(task_id, data))


@router.post("/{task_id}/toggle", response_model=TaskRead)
async def toggle_task(task_id: str, store: StoreDep):
    _get_task(store, task_id)
    return TaskRead.model_validate(store.toggle_task(task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, store: StoreDep):
    _get_task(store, task_id)
    store.delete_task(task_id)
