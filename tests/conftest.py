from datetime import date

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from farmplan.core.deps import get_store
from farmplan.main import app
from farmplan.models.schedule import ScheduledTask
from farmplan.services.store import ScheduleStore


@pytest.fixture
def store() -> ScheduleStore:
    return ScheduleStore()


@pytest.fixture
def daily_schedule() -> ScheduledTask:
    # 2024-06-01 .. 2024-06-05, one task per day
    return ScheduledTask(
        name="Drip irrigation", start_date=date(2024, 6, 1), interval=1, total_days=5,
        task_kind="irrigation", crop="Tomato",
    )


@pytest.fixture
def every_third_day() -> ScheduledTask:
    # ceil(7 / 3) = 3 occurrences: 06-01, 06-04, 06-07
    return ScheduledTask(
        name="Neem spray", start_date=date(2024, 6, 1), interval=3, total_days=7,
        task_kind="pest-control", priority="high",
    )


@pytest_asyncio.fixture
async def client(store: ScheduleStore):
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
