from datetime import date, timedelta

import pytest

from roam.core.errors import InvalidDateRange, MissingDateRange
from roam.models.constants import (
    SELECTION_ENDPOINT_COLOR,
    SELECTION_INTERIOR_COLOR,
    STATUS_COLORS,
    TripStatus,
)
from roam.models.schedule import DateRange, PendingRange
from roam.services.schedule import (
    color_for,
    expand_schedule,
    expand_trip,
    iter_days,
    lookup_trip_for_day,
    merge_marks,
    preview_marks,
    select_day,
)
from tests.conftest import make_trip

D = date.fromisoformat


# --- DateRange ---


def test_date_range_rejects_reversed_pair():
    with pytest.raises(InvalidDateRange):
        DateRange(D("2024-06-03"), D("2024-06-01"))


def test_date_range_from_optional():
    assert DateRange.from_optional(None, None) is None
    assert DateRange.from_optional(D("2024-06-01"), None) is None
    with pytest.raises(InvalidDateRange):
        DateRange.from_optional(None, D("2024-06-01"))
    assert DateRange.from_optional(D("2024-06-01"), D("2024-06-01")).days == 1


def test_iter_days_crosses_leap_day():
    days = list(iter_days(DateRange(D("2024-02-28"), D("2024-03-01"))))
    assert days == [D("2024-02-28"), D("2024-02-29"), D("2024-03-01")]


def test_iter_days_crosses_year_end():
    days = list(iter_days(DateRange(D("2023-12-31"), D("2024-01-01"))))
    assert days == [D("2023-12-31"), D("2024-01-01")]


def test_iter_days_uses_injected_step():
    two_days = lambda d: d + timedelta(days=2)  # noqa: E731
    days = list(iter_days(DateRange(D("2024-06-01"), D("2024-06-05")), step=two_days))
    assert days == [D("2024-06-01"), D("2024-06-03"), D("2024-06-05")]


# --- expansion ---


def test_single_trip_three_marks():
    trip = make_trip(trip_id=7, status="planned", start="2024-06-01", end="2024-06-03")
    marks = expand_schedule([trip])
    assert list(marks) == [D("2024-06-01"), D("2024-06-02"), D("2024-06-03")]

    first, middle, last = (marks[d] for d in marks)
    assert first.is_range_start and not first.is_range_end
    assert not middle.is_range_start and not middle.is_range_end
    assert last.is_range_end and not last.is_range_start
    for mark in marks.values():
        assert mark.color == STATUS_COLORS[TripStatus.PLANNED]
        assert mark.trip_id == 7
        assert mark.status == TripStatus.PLANNED


def test_single_day_trip_is_start_and_end():
    marks = expand_trip(make_trip(start="2024-06-01", end="2024-06-01"))
    (mark,) = marks.values()
    assert mark.is_range_start and mark.is_range_end


def test_color_per_status():
    assert color_for("ideated") == STATUS_COLORS[TripStatus.IDEATED]
    assert color_for(TripStatus.CONFIRMED) == STATUS_COLORS[TripStatus.CONFIRMED]
    assert len(set(STATUS_COLORS.values())) == 3


def test_undated_trips_are_skipped():
    trips = [
        make_trip(trip_id=1),
        make_trip(trip_id=2, start="2024-06-01"),
        make_trip(trip_id=3, start="2024-06-10", end="2024-06-11"),
    ]
    marks = expand_schedule(trips)
    assert {m.trip_id for m in marks.values()} == {3}
    assert len(marks) == 2


def test_expand_trip_requires_range():
    with pytest.raises(MissingDateRange):
        expand_trip(make_trip(start="2024-06-01"))


def test_empty_schedule():
    assert expand_schedule([]) == {}


def test_overlap_last_trip_wins():
    a = make_trip(trip_id=1, status="ideated", start="2024-06-01", end="2024-06-02")
    b = make_trip(trip_id=2, status="confirmed", start="2024-06-02", end="2024-06-04")

    marks = expand_schedule([a, b])
    assert marks[D("2024-06-02")] == expand_trip(b)[D("2024-06-02")]
    assert marks[D("2024-06-01")].trip_id == 1

    reversed_marks = expand_schedule([b, a])
    assert reversed_marks[D("2024-06-02")] == expand_trip(a)[D("2024-06-02")]
    assert reversed_marks[D("2024-06-03")].trip_id == 2


def test_overlap_policy_is_pluggable():
    a = make_trip(trip_id=1, start="2024-06-01", end="2024-06-02")
    b = make_trip(trip_id=2, start="2024-06-02", end="2024-06-03")
    first_wins = lambda existing, incoming: existing  # noqa: E731
    marks = expand_schedule([a, b], combine=first_wins)
    assert marks[D("2024-06-02")].trip_id == 1


def test_merge_marks_does_not_mutate_inputs():
    a = expand_trip(make_trip(trip_id=1, start="2024-06-01", end="2024-06-02"))
    b = expand_trip(make_trip(trip_id=2, start="2024-06-02", end="2024-06-03"))
    before = dict(a)
    merged = merge_marks(a, b)
    assert a == before
    assert len(merged) == 3


def test_lookup_trip_for_day():
    marks = expand_schedule([make_trip(trip_id=4, start="2024-06-01", end="2024-06-03")])
    assert lookup_trip_for_day(marks, D("2024-06-02")) == 4
    assert lookup_trip_for_day(marks, D("2024-06-04")) is None


# --- two-tap selection ---


def test_first_tap_starts_selection():
    assert select_day(PendingRange(), D("2024-06-05")) == PendingRange(start=D("2024-06-05"))


def test_earlier_second_tap_replaces_start():
    pending = select_day(PendingRange(), D("2024-06-05"))
    pending = select_day(pending, D("2024-06-03"))
    assert pending.start == D("2024-06-03")
    assert pending.end is None


def test_later_second_tap_completes_range():
    pending = select_day(PendingRange(), D("2024-06-05"))
    pending = select_day(pending, D("2024-06-08"))
    assert pending == PendingRange(start=D("2024-06-05"), end=D("2024-06-08"))


def test_same_day_second_tap_is_single_day_range():
    pending = select_day(PendingRange(start=D("2024-06-05")), D("2024-06-05"))
    assert pending == PendingRange(start=D("2024-06-05"), end=D("2024-06-05"))


def test_tap_after_complete_range_resets():
    done = PendingRange(start=D("2024-06-05"), end=D("2024-06-08"))
    assert select_day(done, D("2024-06-20")) == PendingRange(start=D("2024-06-20"))
    assert select_day(done, D("2024-06-01")) == PendingRange(start=D("2024-06-01"))


# --- selection preview ---


def test_preview_empty():
    assert preview_marks(PendingRange()) == {}


def test_preview_start_only():
    marks = preview_marks(PendingRange(start=D("2024-06-05")))
    assert list(marks) == [D("2024-06-05")]
    assert marks[D("2024-06-05")].is_range_start
    assert not marks[D("2024-06-05")].is_range_end


def test_preview_complete_range_flags_endpoints():
    marks = preview_marks(PendingRange(start=D("2024-06-05"), end=D("2024-06-08")))
    assert len(marks) == 4
    assert marks[D("2024-06-05")].is_range_start
    assert marks[D("2024-06-08")].is_range_end
    assert marks[D("2024-06-05")].color == SELECTION_ENDPOINT_COLOR
    for day in (D("2024-06-06"), D("2024-06-07")):
        assert marks[day].color == SELECTION_INTERIOR_COLOR
        assert not marks[day].is_range_start and not marks[day].is_range_end
        assert marks[day].trip_id is None
