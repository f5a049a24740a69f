"""Tests for the free-slot search and slot preference."""

from __future__ import annotations

from datetime import date, time

import pytest

from app.domain.models import (
    Event,
    EventCategory,
    TimeSlot,
    UserPreferences,
    WorkingHours,
)
from app.services.slots import find_available_time_slots, pick_preferred_slot

_DAY = date(2025, 1, 1)
_OFFICE = WorkingHours(start="08:00", end="18:00")


def _make_event(start: str, end: str, **overrides) -> Event:
    fields = dict(
        title="Busy",
        date=_DAY,
        start_time=start,
        end_time=end,
        category=EventCategory(id="personal"),
    )
    fields.update(overrides)
    return Event(**fields)


def _slot(start: str, end: str) -> TimeSlot:
    return TimeSlot(date=_DAY, start_time=start, end_time=end)


# ---------------------------------------------------------------------------
# find_available_time_slots
# ---------------------------------------------------------------------------


def test_empty_day_offers_start_of_working_hours():
    slots = find_available_time_slots(
        _DAY, 30, [], WorkingHours(start="08:00", end="22:00")
    )
    assert slots == [_slot("08:00", "08:30")]


def test_empty_day_fits_exactly_the_whole_envelope():
    hours = WorkingHours(start="08:00", end="22:00")
    assert find_available_time_slots(_DAY, 840, [], hours) == [_slot("08:00", "22:00")]
    assert find_available_time_slots(_DAY, 841, [], hours) == []


def test_gaps_are_scanned_earliest_first():
    events = [
        _make_event("13:00", "14:00"),
        _make_event("09:00", "10:00"),
    ]
    slots = find_available_time_slots(_DAY, 60, events, _OFFICE)
    assert slots == [
        _slot("08:00", "09:00"),
        _slot("10:00", "11:00"),
        _slot("14:00", "15:00"),
    ]


def test_slot_length_is_the_requested_duration_not_the_gap():
    events = [_make_event("12:00", "13:00")]
    slots = find_available_time_slots(_DAY, 45, events, _OFFICE)
    assert slots == [_slot("08:00", "08:45"), _slot("13:00", "13:45")]


def test_gaps_shorter_than_duration_are_skipped():
    events = [
        _make_event("08:30", "10:00"),
        _make_event("10:30", "17:30"),
    ]
    assert find_available_time_slots(_DAY, 45, events, _OFFICE) == []
    assert find_available_time_slots(_DAY, 30, events, _OFFICE) == [
        _slot("08:00", "08:30"),
        _slot("10:00", "10:30"),
        _slot("17:30", "18:00"),
    ]


def test_events_on_other_days_are_ignored():
    events = [_make_event("08:00", "18:00", date=date(2025, 1, 2))]
    assert find_available_time_slots(_DAY, 60, events, _OFFICE) == [
        _slot("08:00", "09:00")
    ]


def test_event_nested_inside_another_leaves_a_gap_after_the_inner_one():
    outer = _make_event("09:00", "12:00")
    inner = _make_event("10:00", "11:00")
    hours = WorkingHours(start="08:00", end="12:00")
    assert find_available_time_slots(_DAY, 30, [outer, inner], hours) == [
        _slot("08:00", "08:30"),
        _slot("11:00", "11:30"),
    ]


def test_excluded_event_frees_its_own_time():
    blocker = _make_event("08:00", "18:00", id="blocker")
    assert find_available_time_slots(_DAY, 60, [blocker], _OFFICE) == []
    assert find_available_time_slots(
        _DAY, 60, [blocker], _OFFICE, exclude_event_id="blocker"
    ) == [_slot("08:00", "09:00")]


def test_default_working_hours(monkeypatch):
    monkeypatch.delenv("CALENDAR_WORKING_HOURS_START", raising=False)
    monkeypatch.delenv("CALENDAR_WORKING_HOURS_END", raising=False)
    slots = find_available_time_slots(_DAY, 840, [])
    assert slots == [_slot("08:00", "22:00")]


def test_default_working_hours_from_environment(monkeypatch):
    monkeypatch.setenv("CALENDAR_WORKING_HOURS_START", "09:30")
    monkeypatch.setenv("CALENDAR_WORKING_HOURS_END", "17:00")
    slots = find_available_time_slots(_DAY, 60, [])
    assert slots == [_slot("09:30", "10:30")]


# ---------------------------------------------------------------------------
# pick_preferred_slot
# ---------------------------------------------------------------------------

_CANDIDATES = [_slot("08:00", "09:00"), _slot("10:00", "11:00"), _slot("14:00", "15:00")]


@pytest.mark.parametrize("category_id", ["study", "work"])
def test_productive_categories_prefer_productivity_hours(category_id):
    prefs = UserPreferences(productivity_hours=["14:00", "10"])
    best = pick_preferred_slot(_CANDIDATES, EventCategory(id=category_id), prefs)
    assert best == _slot("10:00", "11:00")


def test_other_categories_take_earliest_slot():
    prefs = UserPreferences(productivity_hours=["10"])
    best = pick_preferred_slot(_CANDIDATES, EventCategory(id="social"), prefs)
    assert best == _slot("08:00", "09:00")


def test_no_matching_productivity_hour_falls_back_to_earliest():
    prefs = UserPreferences(productivity_hours=["19"])
    best = pick_preferred_slot(_CANDIDATES, EventCategory(id="work"), prefs)
    assert best == _slot("08:00", "09:00")


def test_no_preferences_takes_earliest_slot():
    assert pick_preferred_slot(_CANDIDATES, EventCategory(id="work"), None) == _slot(
        "08:00", "09:00"
    )


def test_no_candidates_gives_none():
    assert pick_preferred_slot([], EventCategory(id="work"), UserPreferences()) is None


def test_slot_start_time_is_compared_as_zero_padded():
    assert _CANDIDATES[0].start_time == time(8, 0)
    prefs = UserPreferences(productivity_hours=["08"])
    assert pick_preferred_slot(_CANDIDATES, EventCategory(id="study"), prefs) == _slot(
        "08:00", "09:00"
    )
