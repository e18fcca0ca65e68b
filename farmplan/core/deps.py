from typing import Annotated

from fastapi import Depends, Request

from farmplan.services.store import ScheduleStore


def get_store(request: Request) -> ScheduleStore:
    return request.app.state.store


StoreDep = Annotated[ScheduleStore, Depends(get_store)]
