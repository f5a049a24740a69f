"""Service for finding open time slots on a single day."""

from __future__ import annotations

from datetime import date

from app.config import default_working_hours
from app.domain.models import (
    PRODUCTIVE_CATEGORY_IDS,
    Event,
    EventCategory,
    TimeSlot,
    UserPreferences,
    WorkingHours,
)
from app.services.intervals import from_minutes, to_minutes


def find_available_time_slots(
    day: date,
    duration_minutes: int,
    existing_events: list[Event],
    working_hours: WorkingHours | None = None,
    exclude_event_id: str | None = None,
) -> list[TimeSlot]:
    """Return open slots of ``duration_minutes`` on ``day``, earliest first.

    Candidate gaps are scanned in order: working-hours start to the first
    event, between each pair of consecutive events, and the last event to
    working-hours end. An empty day offers the whole envelope. Each slot
    returned starts at the beginning of its gap and is exactly
    ``duration_minutes`` long.
    """
    hours = working_hours or default_working_hours()
    day_events = sorted(
        (
            e
            for e in existing_events
            if e.date == day and e.id != exclude_event_id
        ),
        key=lambda e: e.start_time,
    )
    work_start = to_minutes(hours.start)
    work_end = to_minutes(hours.end)

    if not day_events:
        gaps = [(work_start, work_end)]
    else:
        gaps = [(work_start, to_minutes(day_events[0].start_time))]
        gaps.extend(
            (to_minutes(current.end_time), to_minutes(following.start_time))
            for current, following in zip(day_events, day_events[1:])
        )
        gaps.append((to_minutes(day_events[-1].end_time), work_end))

    return [
        TimeSlot(
            date=day,
            start_time=from_minutes(gap_start),
            end_time=from_minutes(gap_start + duration_minutes),
        )
        for gap_start, gap_end in gaps
        if gap_start + duration_minutes <= gap_end
    ]


def pick_preferred_slot(
    slots: list[TimeSlot],
    category: EventCategory,
    preferences: UserPreferences | None,
) -> TimeSlot | None:
    """Choose the best slot for an event of the given category.

    Study and work events go to the first slot starting in one of the user's
    productivity hours, if any; everything else takes the earliest slot.
    """
    if not slots:
        return None
    productivity_hours = preferences.productivity_hours if preferences else None
    if productivity_hours and category.id in PRODUCTIVE_CATEGORY_IDS:
        prefixes = [hour[:2] for hour in productivity_hours]
        for slot in slots:
            if slot.start_time.strftime("%H:%M").startswith(tuple(prefixes)):
                return slot
    return slots[0]
