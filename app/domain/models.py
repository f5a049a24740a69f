"""Domain models for the scheduling conflict engine."""

from __future__ import annotations

import uuid
from datetime import date, time
from enum import StrEnum
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)


def _truncate_to_minute(value: time) -> time:
    if value.tzinfo is not None:
        raise ValueError("time of day must be naive")
    return value.replace(second=0, microsecond=0)


# Minute-precision time of day, "HH:MM" on the wire.
ClockTime = Annotated[
    time,
    AfterValidator(_truncate_to_minute),
    PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str),
]


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}

# Category ids that get productivity-hour placement.
PRODUCTIVE_CATEGORY_IDS = frozenset({"study", "work"})


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class EventCategory(BaseModel):
    id: str
    name: str = ""
    color: str | None = None
    icon: str | None = None


class Event(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str
    date: date
    start_time: ClockTime
    end_time: ClockTime
    category: EventCategory
    priority: Priority = Priority.MEDIUM
    description: str | None = None
    links: list[str] = Field(default_factory=list)
    is_completed: bool = False
    is_static: bool = False
    color: str | None = None

    @model_validator(mode="after")
    def _end_after_start(self) -> Event:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(date=self.date, start_time=self.start_time, end_time=self.end_time)


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    start_time: ClockTime
    end_time: ClockTime


class WorkingHours(BaseModel):
    start: ClockTime = time(8, 0)
    end: ClockTime = time(22, 0)

    @model_validator(mode="after")
    def _end_after_start(self) -> WorkingHours:
        if self.end <= self.start:
            raise ValueError("working hours must end after they start")
        return self


class UserPreferences(BaseModel):
    working_hours: WorkingHours | None = None
    # Hour prefixes such as "09"; only the first two characters are compared.
    productivity_hours: list[str] | None = None


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------


class RearrangementSuggestion(BaseModel):
    original_event: Event
    new_start_time: ClockTime
    new_end_time: ClockTime
    reason: str

    def rearranged(self) -> Event:
        """Return a copy of the original event moved to the suggested times."""
        return self.original_event.model_copy(
            update={"start_time": self.new_start_time, "end_time": self.new_end_time}
        )


class SuggestedResolution(BaseModel):
    rearranged_events: list[Event] = Field(default_factory=list)
    new_event_slot: TimeSlot
    message: str


class ConflictDetectionResult(BaseModel):
    has_conflict: bool
    conflicting_events: list[Event] = Field(default_factory=list)
    suggested_resolution: SuggestedResolution | None = None


# ---------------------------------------------------------------------------
# Request DTOs
# ---------------------------------------------------------------------------


class ConflictCheckRequest(BaseModel):
    event: Event
    existing_events: list[Event] = Field(default_factory=list)
    preferences: UserPreferences | None = None


class ApplyResolutionRequest(BaseModel):
    event: Event
    existing_events: list[Event] = Field(default_factory=list)
    result: ConflictDetectionResult


class SlotSearchRequest(BaseModel):
    date: date
    duration_minutes: int = Field(gt=0)
    existing_events: list[Event] = Field(default_factory=list)
    working_hours: WorkingHours | None = None
    exclude_event_id: str | None = None


class OverlapRequest(BaseModel):
    a: TimeSlot
    b: TimeSlot
