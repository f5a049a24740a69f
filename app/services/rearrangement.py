"""Service for proposing new slots for events displaced by a conflict."""

from __future__ import annotations

import logging

from app.domain.models import Event, RearrangementSuggestion, UserPreferences
from app.services.intervals import event_duration
from app.services.slots import find_available_time_slots, pick_preferred_slot

logger = logging.getLogger(__name__)


def suggest_event_rearrangement(
    new_event: Event,
    conflicting_events: list[Event],
    all_events: list[Event],
    preferences: UserPreferences | None = None,
) -> list[RearrangementSuggestion]:
    """Propose a new slot on the same day for each conflicting event.

    Lower-priority events are moved first. Each event is searched against
    ``all_events`` minus itself; an event with no open slot that day is left
    out of the result, so the returned list may be shorter than
    ``conflicting_events``.
    """
    working_hours = preferences.working_hours if preferences else None

    suggestions: list[RearrangementSuggestion] = []
    for conflict in sorted(conflicting_events, key=lambda e: e.priority.rank):
        slots = find_available_time_slots(
            conflict.date,
            event_duration(conflict),
            all_events,
            working_hours,
            exclude_event_id=conflict.id,
        )
        best = pick_preferred_slot(slots, conflict.category, preferences)
        if best is None:
            logger.debug("No open slot for %r on %s", conflict.title, conflict.date)
            continue
        suggestions.append(
            RearrangementSuggestion(
                original_event=conflict,
                new_start_time=best.start_time,
                new_end_time=best.end_time,
                reason=f'Moved to avoid conflict with "{new_event.title}"',
            )
        )
    return suggestions
