"""Fasting session records and their state machine.

A session moves through ``active`` and ``paused`` until it ends as either
``completed`` or ``stopped``. Timing values are never stored while a fast is
running; they are recomputed from the recorded timestamps and the ``now``
passed in by the caller.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from fasting_tracker.domain.errors import (
    InvalidConfigurationError,
    InvalidTransitionError,
)

SECONDS_PER_HOUR = 3600


class FastingType(StrEnum):
    """Kind of fast chosen by the user."""

    TWENTY_FOUR_HOUR = "twentyFourHour"
    CUSTOM = "custom"
    INTERMITTENT = "intermittent"
    JUICE = "juice"
    WATER = "water"
    DRY = "dry"


class FastingStatus(StrEnum):
    """Lifecycle status of a fasting session."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class FastingTypeProfile:
    """Display metadata and suggested durations for a fasting type."""

    label: str
    description: str
    default_hours: int
    preset_hours: tuple[int, ...]


_TYPE_PROFILES: dict[FastingType, FastingTypeProfile] = {
    FastingType.TWENTY_FOUR_HOUR: FastingTypeProfile(
        "24 Hour Fast", "Complete 24-hour fast", 24, (20, 22, 24, 26)
    ),
    FastingType.CUSTOM: FastingTypeProfile(
        "Custom Fast", "Set your own fasting duration", 16, (12, 16, 24, 36, 48, 72)
    ),
    FastingType.INTERMITTENT: FastingTypeProfile(
        "Intermittent Fast",
        "16:8, 18:6, or custom eating windows",
        16,
        (14, 16, 18, 20),
    ),
    FastingType.JUICE: FastingTypeProfile(
        "Juice Fast", "Juice-only fasting period", 24, (24, 36, 48, 72)
    ),
    FastingType.WATER: FastingTypeProfile(
        "Water Fast", "Water-only fasting", 24, (24, 36, 48, 72)
    ),
    FastingType.DRY: FastingTypeProfile(
        "Dry Fast", "No food or water", 24, (16, 20, 24, 36)
    ),
}


def type_profile(fasting_type: FastingType) -> FastingTypeProfile:
    """Return display metadata for a fasting type."""
    return _TYPE_PROFILES[fasting_type]


def default_planned_duration(fasting_type: FastingType) -> float:
    """Return the suggested plan for a fasting type, in seconds."""
    return float(_TYPE_PROFILES[fasting_type].default_hours * SECONDS_PER_HOUR)


@dataclass(frozen=True)
class ActivePhase:
    """The fast is running."""


@dataclass(frozen=True)
class PausedPhase:
    """The fast is on hold since ``paused_at``."""

    paused_at: datetime


@dataclass(frozen=True)
class EndedPhase:
    """The fast is over; ``outcome`` is COMPLETED or STOPPED."""

    end_time: datetime
    actual_duration: float
    outcome: FastingStatus


Phase = ActivePhase | PausedPhase | EndedPhase


@dataclass(frozen=True)
class FastingSession:
    """Represents one fasting attempt."""

    id: UUID
    fasting_type: FastingType
    phase: Phase
    start_time: datetime
    planned_duration: float
    total_paused_duration: float
    notes: str
    created_at: datetime

    @property
    def status(self) -> FastingStatus:
        if isinstance(self.phase, EndedPhase):
            return self.phase.outcome
        if isinstance(self.phase, PausedPhase):
            return FastingStatus.PAUSED
        return FastingStatus.ACTIVE

    @property
    def paused_at(self) -> datetime | None:
        if isinstance(self.phase, PausedPhase):
            return self.phase.paused_at
        return None

    @property
    def end_time(self) -> datetime | None:
        if isinstance(self.phase, EndedPhase):
            return self.phase.end_time
        return None

    @property
    def actual_duration(self) -> float:
        if isinstance(self.phase, EndedPhase):
            return self.phase.actual_duration
        return 0.0

    @property
    def is_active(self) -> bool:
        return isinstance(self.phase, ActivePhase)

    @property
    def is_paused(self) -> bool:
        return isinstance(self.phase, PausedPhase)

    @property
    def is_completed(self) -> bool:
        return self.status is FastingStatus.COMPLETED

    @property
    def is_finished(self) -> bool:
        return isinstance(self.phase, EndedPhase)


def create_session(
    fasting_type: FastingType,
    planned_duration: float,
    now: datetime,
    notes: str = "",
) -> FastingSession:
    """Start a new active session at ``now``."""
    if not math.isfinite(planned_duration) or planned_duration <= 0:
        raise InvalidConfigurationError(
            f"Planned duration must be a finite positive number, got {planned_duration}"
        )
    return FastingSession(
        id=uuid4(),
        fasting_type=fasting_type,
        phase=ActivePhase(),
        start_time=now,
        planned_duration=float(planned_duration),
        total_paused_duration=0.0,
        notes=notes,
        created_at=now,
    )


def pause_session(session: FastingSession, now: datetime) -> FastingSession:
    """Freeze the session clock at ``now``."""
    if not session.is_active:
        raise InvalidTransitionError(session.status, "pause")
    return replace(session, phase=PausedPhase(paused_at=now))


def resume_session(session: FastingSession, now: datetime) -> FastingSession:
    """Resume a paused session, banking the closed pause interval."""
    if not isinstance(session.phase, PausedPhase):
        raise InvalidTransitionError(session.status, "resume")
    paused_for = max(0.0, _seconds_between(session.phase.paused_at, now))
    return replace(
        session,
        phase=ActivePhase(),
        total_paused_duration=session.total_paused_duration + paused_for,
    )


def complete_session(session: FastingSession, now: datetime) -> FastingSession:
    """End the session as completed, fixing its actual duration."""
    return _end(session, now, FastingStatus.COMPLETED, "complete")


def stop_session(session: FastingSession, now: datetime) -> FastingSession:
    """End the session early, fixing its actual duration."""
    return _end(session, now, FastingStatus.STOPPED, "stop")


def current_duration(session: FastingSession, now: datetime) -> float:
    """Return fasted seconds, excluding every pause interval."""
    phase = session.phase
    if isinstance(phase, ActivePhase):
        elapsed = _seconds_between(session.start_time, now)
    elif isinstance(phase, PausedPhase):
        # The open pause is not yet in total_paused_duration.
        elapsed = _seconds_between(session.start_time, phase.paused_at)
    else:
        return phase.actual_duration
    return max(0.0, elapsed - session.total_paused_duration)


def remaining_time(session: FastingSession, now: datetime) -> float:
    """Return seconds left until the plan is met, never negative."""
    return max(0.0, session.planned_duration - current_duration(session, now))


def progress_percentage(session: FastingSession, now: datetime) -> float:
    """Return progress toward the plan as a fraction capped at 1.0."""
    if session.planned_duration <= 0:
        return 0.0
    return min(1.0, current_duration(session, now) / session.planned_duration)


def is_due(session: FastingSession, now: datetime) -> bool:
    """Return True when an active session has reached its plan."""
    return session.is_active and (
        current_duration(session, now) >= session.planned_duration
    )


def _end(
    session: FastingSession, now: datetime, outcome: FastingStatus, action: str
) -> FastingSession:
    if session.is_finished:
        raise InvalidTransitionError(session.status, action)
    return replace(
        session,
        phase=EndedPhase(
            end_time=now,
            actual_duration=current_duration(session, now),
            outcome=outcome,
        ),
    )


def _seconds_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds()
