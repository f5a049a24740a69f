"""FastAPI application — HTTP entry point for the scheduling conflict engine.

The service is stateless: every request carries the caller's own event list
and gets a decision back. Committing that decision is up to the caller.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import log_level
from app.domain.models import (
    ApplyResolutionRequest,
    ConflictCheckRequest,
    ConflictDetectionResult,
    Event,
    OverlapRequest,
    SlotSearchRequest,
    TimeSlot,
)
from app.services.intervals import overlaps
from app.services.resolution import (
    apply_resolution,
    check_event_update_conflicts,
    detect_and_resolve_conflicts,
)
from app.services.slots import find_available_time_slots

logging.basicConfig(
    level=log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Calendar Conflict Service")


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/conflicts/detect", response_model=ConflictDetectionResult)
def detect_conflicts(payload: ConflictCheckRequest) -> ConflictDetectionResult:
    """Check a new event and propose a resolution for any conflicts."""
    return detect_and_resolve_conflicts(
        payload.event, payload.existing_events, payload.preferences
    )


@app.post("/conflicts/check-update", response_model=ConflictDetectionResult)
def check_update(payload: ConflictCheckRequest) -> ConflictDetectionResult:
    """Check an edited event, moving only the other events if needed."""
    return check_event_update_conflicts(
        payload.event, payload.existing_events, payload.preferences
    )


@app.post("/conflicts/apply", response_model=list[Event])
def apply(payload: ApplyResolutionRequest) -> list[Event]:
    """Return the event list with a decision committed."""
    return apply_resolution(payload.event, payload.existing_events, payload.result)


@app.post("/slots/search", response_model=list[TimeSlot])
def search_slots(payload: SlotSearchRequest) -> list[TimeSlot]:
    """Return open slots of the requested length on one day."""
    slots = find_available_time_slots(
        payload.date,
        payload.duration_minutes,
        payload.existing_events,
        payload.working_hours,
        payload.exclude_event_id,
    )
    logger.debug("Found %d open slot(s) on %s", len(slots), payload.date)
    return slots


@app.post("/slots/overlap")
def slot_overlap(payload: OverlapRequest) -> dict:
    return {"overlaps": overlaps(payload.a, payload.b)}
