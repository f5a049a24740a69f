"""Service for detecting scheduling conflicts between events."""

from __future__ import annotations

from app.domain.models import Event, TimeSlot
from app.services.intervals import overlaps


def find_conflicting_events(
    proposed_slot: TimeSlot,
    existing_events: list[Event],
    exclude_event_id: str | None = None,
) -> list[Event]:
    """Return existing events that overlap with the proposed slot.

    Input order is preserved. The event with ``exclude_event_id`` (the one
    being edited) is never reported as conflicting with itself.
    """
    return [
        event
        for event in existing_events
        if event.id != exclude_event_id and overlaps(proposed_slot, event.slot)
    ]
