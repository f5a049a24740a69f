"""Conflict resolution for event creation and event edits.

Both entry points are pure: they read the caller's events and return a
:class:`ConflictDetectionResult` describing what to do. Nothing is raised when
a conflict cannot be resolved; the result carries an advisory message and the
caller decides whether to proceed.
"""

from __future__ import annotations

import logging
from datetime import time

from app.domain.models import (
    ConflictDetectionResult,
    Event,
    SuggestedResolution,
    UserPreferences,
)
from app.services.conflicts import find_conflicting_events
from app.services.intervals import event_duration
from app.services.rearrangement import suggest_event_rearrangement
from app.services.slots import find_available_time_slots, pick_preferred_slot

logger = logging.getLogger(__name__)


def _quoted_titles(events: list[Event]) -> str:
    return " and ".join(f'"{e.title}"' for e in events)


def _hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def detect_and_resolve_conflicts(
    new_event: Event,
    existing_events: list[Event],
    preferences: UserPreferences | None = None,
) -> ConflictDetectionResult:
    """Check a new event against the calendar and propose a resolution.

    Resolution order:

    1. Move the new event to an open slot on the same day, leaving existing
       events untouched.
    2. Otherwise keep the new event where it is and move the conflicting
       events, lowest priority first.
    3. Otherwise report the conflict and ask for manual resolution.
    """
    proposed_slot = new_event.slot
    conflicts = find_conflicting_events(proposed_slot, existing_events)
    if not conflicts:
        return ConflictDetectionResult(has_conflict=False)

    logger.info(
        "New event %r conflicts with %d event(s) on %s",
        new_event.title,
        len(conflicts),
        new_event.date,
    )
    conflict_names = _quoted_titles(conflicts)

    # 1. Relocate the new event itself
    working_hours = preferences.working_hours if preferences else None
    slots = find_available_time_slots(
        new_event.date,
        event_duration(new_event),
        existing_events,
        working_hours,
    )
    best = pick_preferred_slot(slots, new_event.category, preferences)
    if best is not None:
        logger.debug("Relocating new event %r to %s", new_event.title, best)
        return ConflictDetectionResult(
            has_conflict=True,
            conflicting_events=conflicts,
            suggested_resolution=SuggestedResolution(
                rearranged_events=[],
                new_event_slot=best,
                message=(
                    f"I found a conflict with {conflict_names}. I've moved your new "
                    f'event "{new_event.title}" to {_hhmm(best.start_time)}-'
                    f"{_hhmm(best.end_time)} to avoid the conflict."
                ),
            ),
        )

    # 2. Move the conflicting events instead
    suggestions = suggest_event_rearrangement(
        new_event, conflicts, existing_events, preferences
    )
    if suggestions:
        rearranged_names = _quoted_titles([s.original_event for s in suggestions])
        logger.debug("Rearranging %d event(s) around %r", len(suggestions), new_event.title)
        return ConflictDetectionResult(
            has_conflict=True,
            conflicting_events=conflicts,
            suggested_resolution=SuggestedResolution(
                rearranged_events=[s.rearranged() for s in suggestions],
                new_event_slot=proposed_slot,
                message=(
                    f"I found a conflict with {conflict_names}. I've automatically "
                    f"rearranged {rearranged_names} to make room for your new event "
                    f'"{new_event.title}" at {_hhmm(proposed_slot.start_time)}-'
                    f"{_hhmm(proposed_slot.end_time)}."
                ),
            ),
        )

    # 3. Nothing fits
    logger.info("No automatic resolution for new event %r", new_event.title)
    return ConflictDetectionResult(
        has_conflict=True,
        conflicting_events=conflicts,
        suggested_resolution=SuggestedResolution(
            rearranged_events=[],
            new_event_slot=proposed_slot,
            message=(
                f"I found a conflict with {conflict_names}, but couldn't find suitable "
                "alternative times. Please manually adjust your schedule or choose a "
                f'different time for "{new_event.title}".'
            ),
        ),
    )


def check_event_update_conflicts(
    updated_event: Event,
    existing_events: list[Event],
    preferences: UserPreferences | None = None,
) -> ConflictDetectionResult:
    """Check an edited event against the rest of the calendar.

    The edit is taken as intentional: the edited event always keeps its new
    slot and only the other events are proposed for rearrangement.
    """
    proposed_slot = updated_event.slot
    conflicts = find_conflicting_events(
        proposed_slot, existing_events, exclude_event_id=updated_event.id
    )
    if not conflicts:
        return ConflictDetectionResult(has_conflict=False)

    logger.info(
        "Update to %r conflicts with %d event(s) on %s",
        updated_event.title,
        len(conflicts),
        updated_event.date,
    )
    conflict_names = _quoted_titles(conflicts)
    others = [e for e in existing_events if e.id != updated_event.id]

    suggestions = suggest_event_rearrangement(
        updated_event, conflicts, others, preferences
    )
    if suggestions:
        rearranged_names = _quoted_titles([s.original_event for s in suggestions])
        return ConflictDetectionResult(
            has_conflict=True,
            conflicting_events=conflicts,
            suggested_resolution=SuggestedResolution(
                rearranged_events=[s.rearranged() for s in suggestions],
                new_event_slot=proposed_slot,
                message=(
                    f'Updating "{updated_event.title}" would conflict with '
                    f"{conflict_names}. I've automatically rearranged "
                    f"{rearranged_names} to accommodate your changes."
                ),
            ),
        )

    logger.info("No automatic resolution for update to %r", updated_event.title)
    return ConflictDetectionResult(
        has_conflict=True,
        conflicting_events=conflicts,
        suggested_resolution=SuggestedResolution(
            rearranged_events=[],
            new_event_slot=proposed_slot,
            message=(
                f'Updating "{updated_event.title}" would conflict with '
                f"{conflict_names}, but I couldn't find suitable alternative times "
                "for the conflicting events. Please manually resolve the conflicts."
            ),
        ),
    )


def apply_resolution(
    event: Event,
    existing_events: list[Event],
    result: ConflictDetectionResult,
) -> list[Event]:
    """Return the calendar as it looks after committing a decision.

    ``event`` is the event being created or edited. It is placed at the
    resolution's slot when there is one, or at its own slot otherwise, and
    every rearranged event replaces the existing event with the same id.
    The inputs are not modified.
    """
    resolution = result.suggested_resolution
    placed = event
    moved: dict[str, Event] = {}
    if resolution is not None:
        slot = resolution.new_event_slot
        placed = event.model_copy(
            update={
                "date": slot.date,
                "start_time": slot.start_time,
                "end_time": slot.end_time,
            }
        )
        moved = {e.id: e for e in resolution.rearranged_events}

    moved[placed.id] = placed
    committed = [moved.get(e.id, e) for e in existing_events]
    if all(e.id != placed.id for e in existing_events):
        committed.append(placed)
    return committed
