import random
from datetime import date

from farmplan.services.ledger import CompletionLedger
from farmplan.services.progress import progress, summarize
from farmplan.services.recurrence import expand


def test_progress_of_untouched_schedule(daily_schedule):
    p = progress(daily_schedule)
    assert (p.completed, p.total, p.remaining, p.percentage) == (0, 5, 5, 0)
    assert p.next_due_date == date(2024, 6, 1)
    assert not p.is_complete


def test_progress_after_two_toggles(daily_schedule):
    ledger = CompletionLedger(daily_schedule)
    ledger.toggle(date(2024, 6, 2))
    ledger.toggle(date(2024, 6, 4))
    p = progress(daily_schedule)
    assert (p.completed, p.total, p.remaining, p.percentage) == (2, 5, 3, 40)
    assert p.next_due_date == date(2024, 6, 1)


def test_next_due_is_first_gap(daily_schedule):
    ledger = CompletionLedger(daily_schedule)
    for day in (date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 4)):
        ledger.toggle(day)
    assert progress(daily_schedule).next_due_date == date(2024, 6, 3)


def test_fully_complete(daily_schedule):
    ledger = CompletionLedger(daily_schedule)
    for day in expand(daily_schedule):
        ledger.toggle(day)
    p = progress(daily_schedule)
    assert p.percentage == 100
    assert p.remaining == 0
    assert p.next_due_date is None
    assert p.is_complete


def test_percentage_rounds(every_third_day):
    CompletionLedger(every_third_day).toggle(date(2024, 6, 1))
    assert progress(every_third_day).percentage == 33
    CompletionLedger(every_third_day).toggle(date(2024, 6, 7))
    assert progress(every_third_day).percentage == 67


def test_progress_is_pure(daily_schedule):
    CompletionLedger(daily_schedule).toggle(date(2024, 6, 3))
    before = set(daily_schedule.completed_dates)
    assert progress(daily_schedule) == progress(daily_schedule)
    assert daily_schedule.completed_dates == before


def test_percentage_is_monotonic_in_completions(daily_schedule):
    rng = random.Random(11)
    days = expand(daily_schedule)
    ledger = CompletionLedger(daily_schedule)
    for _ in range(40):
        day = rng.choice(days)
        was_complete = ledger.is_complete(day)
        before = progress(daily_schedule).percentage
        ledger.toggle(day)
        after = progress(daily_schedule).percentage
        if was_complete:
            assert after <= before
        else:
            assert after >= before


class _Item:
    def __init__(self, completed):
        self.completed = completed


def test_summarize():
    s = summarize([_Item(True), _Item(False), _Item(False), _Item(True)])
    assert (s.completed, s.pending, s.total, s.percentage) == (2, 2, 4, 50)
    empty = summarize([])
    assert (empty.total, empty.percentage) == (0, 0)
