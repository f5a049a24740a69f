"""Minute-based interval arithmetic over time slots."""

from __future__ import annotations

from datetime import time

from app.domain.models import Event, TimeSlot


def to_minutes(value: time) -> int:
    """Minutes since midnight for a time of day."""
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def overlaps(slot_a: TimeSlot, slot_b: TimeSlot) -> bool:
    """Return True if two slots on the same date overlap.

    Boundaries are inclusive: a slot ending at 10:00 overlaps one starting
    at 10:00.
    """
    if slot_a.date != slot_b.date:
        return False
    start_a, end_a = to_minutes(slot_a.start_time), to_minutes(slot_a.end_time)
    start_b, end_b = to_minutes(slot_b.start_time), to_minutes(slot_b.end_time)
    return start_a <= end_b and start_b <= end_a


def event_duration(event: Event) -> int:
    """Length of an event in minutes."""
    return abs(to_minutes(event.end_time) - to_minutes(event.start_time))
