import random
from datetime import date

import pytest

from farmplan.core.exceptions import InvalidRecurrenceSpec, OccurrenceNotFound
from farmplan.models.schedule import Occurrence, ScheduledTask
from farmplan.services.ledger import CompletionLedger
from farmplan.services.progress import progress
from farmplan.services.recurrence import expand


def test_toggle_marks_then_unmarks(daily_schedule):
    ledger = CompletionLedger(daily_schedule)
    assert ledger.toggle(date(2024, 6, 2)) is True
    assert ledger.is_complete(date(2024, 6, 2))
    assert ledger.toggle(date(2024, 6, 2)) is False
    assert not ledger.is_complete(date(2024, 6, 2))
    assert daily_schedule.completed_dates == set()


def test_toggle_writes_through_to_schedule(daily_schedule):
    CompletionLedger(daily_schedule).toggle(date(2024, 6, 4))
    assert daily_schedule.completed_dates == {date(2024, 6, 4)}
    assert CompletionLedger(daily_schedule).is_complete(date(2024, 6, 4))


def test_toggle_outside_expansion_rejected(every_third_day):
    ledger = CompletionLedger(every_third_day)
    ledger.toggle(date(2024, 6, 4))
    for day in (date(2024, 6, 10), date(2024, 6, 2), date(2024, 5, 29)):
        with pytest.raises(OccurrenceNotFound) as exc_info:
            ledger.toggle(day)
        assert exc_info.value.day == day
    assert every_third_day.completed_dates == {date(2024, 6, 4)}


def test_count_matches_set_size_for_any_toggle_sequence(daily_schedule):
    rng = random.Random(7)
    days = expand(daily_schedule)
    ledger = CompletionLedger(daily_schedule)
    for _ in range(50):
        ledger.toggle(rng.choice(days))
        assert ledger.count() == len(daily_schedule.completed_dates)


def test_redefine_drops_only_stale_entries(daily_schedule):
    ledger = CompletionLedger(daily_schedule)
    ledger.toggle(date(2024, 6, 1))
    ledger.toggle(date(2024, 6, 5))
    assert daily_schedule.redefine(total_days=2) == 1
    assert daily_schedule.completed_dates == {date(2024, 6, 1)}
    assert daily_schedule.redefine(total_days=1) == 0


def test_recurrence_fields_cannot_be_rebound(daily_schedule):
    CompletionLedger(daily_schedule).toggle(date(2024, 6, 5))
    for name, value in [("total_days", 3), ("interval", 0), ("start_date", date(2024, 6, 3))]:
        with pytest.raises(AttributeError):
            setattr(daily_schedule, name, value)
    with pytest.raises(AttributeError):
        daily_schedule.completed_dates = {date(2024, 7, 1)}

    assert (daily_schedule.start_date, daily_schedule.interval, daily_schedule.total_days) == (
        date(2024, 6, 1), 1, 5,
    )
    assert daily_schedule.completed_dates == {date(2024, 6, 5)}
    assert progress(daily_schedule).completed == 1


def test_shrinking_through_redefine_keeps_progress_consistent(daily_schedule):
    CompletionLedger(daily_schedule).toggle(date(2024, 6, 5))
    daily_schedule.redefine(total_days=3)
    assert expand(daily_schedule) == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    p = progress(daily_schedule)
    assert (p.completed, p.total, p.remaining) == (0, 3, 3)


def test_invalid_redefine_changes_nothing(daily_schedule):
    CompletionLedger(daily_schedule).toggle(date(2024, 6, 5))
    with pytest.raises(InvalidRecurrenceSpec):
        daily_schedule.redefine(interval=0, total_days=2)
    assert (daily_schedule.interval, daily_schedule.total_days) == (1, 5)
    assert daily_schedule.completed_dates == {date(2024, 6, 5)}


def test_occurrences_are_annotated(every_third_day):
    CompletionLedger(every_third_day).toggle(date(2024, 6, 4))
    occurrences = list(CompletionLedger(every_third_day).occurrences())
    assert [(o.date, o.sequence_index, o.completed) for o in occurrences] == [
        (date(2024, 6, 1), 0, False),
        (date(2024, 6, 4), 1, True),
        (date(2024, 6, 7), 2, False),
    ]


def test_occurrence_identity_is_schedule_and_date():
    a = Occurrence("s1", date(2024, 6, 1), sequence_index=0, completed=False)
    b = Occurrence("s1", date(2024, 6, 1), sequence_index=0, completed=True)
    assert a == b
    assert a.key == ("s1", date(2024, 6, 1))
    assert len({a, b}) == 1
    assert a != Occurrence("s2", date(2024, 6, 1), sequence_index=0)


def test_stale_dates_dropped_on_construction():
    schedule = ScheduledTask(
        name="Weeding", start_date=date(2024, 6, 1), interval=2, total_days=4,
        completed_dates={date(2024, 6, 3), date(2024, 6, 2), date(2024, 7, 1)},
    )
    assert schedule.completed_dates == {date(2024, 6, 3)}
