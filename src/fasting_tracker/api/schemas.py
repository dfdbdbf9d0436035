"""Pydantic models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from fasting_tracker.domain.fasting import FastingStatus, FastingType
from fasting_tracker.domain.streaks import StreakType


class StartFastingRequest(BaseModel):
    """Request body for starting a fast."""

    fasting_type: FastingType
    planned_duration_seconds: float | None = Field(
        default=None, gt=0, allow_inf_nan=False
    )
    notes: str = ""


class FastingTypeInfo(BaseModel):
    """Fasting type with its suggested durations."""

    fasting_type: FastingType
    label: str
    description: str
    default_hours: int
    preset_hours: list[int]
    preset_labels: list[str]


class FastingSessionOut(BaseModel):
    """Fasting session with its timing as of ``as_of``."""

    id: UUID
    fasting_type: FastingType
    status: FastingStatus
    start_time: datetime
    end_time: datetime | None
    paused_at: datetime | None
    planned_duration_seconds: float
    total_paused_seconds: float
    actual_duration_seconds: float
    notes: str
    created_at: datetime
    as_of: datetime
    elapsed_seconds: float
    remaining_seconds: float
    progress: float
    elapsed_label: str
    remaining_label: str


class FastingSummaryOut(BaseModel):
    """Aggregate fasting figures."""

    total_sessions: int
    completed_sessions: int
    success_rate: int
    average_completed_seconds: float


class StreakOut(BaseModel):
    """Streak counters for one category."""

    id: UUID
    streak_type: StreakType
    label: str
    current_streak: int
    longest_streak: int
    last_activity_date: datetime | None
    total_activities: int
    active_today: bool
    updated_at: datetime
