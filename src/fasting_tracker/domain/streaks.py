"""Consecutive-day streak counters."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo


class StreakType(StrEnum):
    """Activity category a streak counts."""

    FASTING = "fasting"
    DIETING = "dieting"
    CALORIE_GOAL = "calorieGoal"
    WATER_INTAKE = "waterIntake"


STREAK_LABELS: dict[StreakType, str] = {
    StreakType.FASTING: "Fasting",
    StreakType.DIETING: "Dieting",
    StreakType.CALORIE_GOAL: "Calorie Goal",
    StreakType.WATER_INTAKE: "Water Intake",
}


@dataclass(frozen=True)
class StreakRecord:
    """Represents the running streak for one activity category."""

    id: UUID
    streak_type: StreakType
    current_streak: int
    longest_streak: int
    last_activity_date: datetime | None
    total_activities: int
    created_at: datetime
    updated_at: datetime


def new_streak(streak_type: StreakType, now: datetime) -> StreakRecord:
    """Return an empty streak for a category."""
    return StreakRecord(
        id=uuid4(),
        streak_type=streak_type,
        current_streak=0,
        longest_streak=0,
        last_activity_date=None,
        total_activities=0,
        created_at=now,
        updated_at=now,
    )


def calendar_day_delta(last: datetime, today: datetime, tz: ZoneInfo) -> int:
    """Return the number of local midnights between two instants."""
    return (today.astimezone(tz).date() - last.astimezone(tz).date()).days


def update_streak(
    streak: StreakRecord,
    today: datetime,
    tz: ZoneInfo,
    now: datetime | None = None,
) -> StreakRecord:
    """Record one qualifying activity happening at ``today``.

    A later calendar day extends the streak by one, a gap restarts it at one
    and a repeat on the same day leaves it alone. An activity dated before the
    last recorded one is counted but changes neither the streak nor the last
    activity date. ``updated_at`` is set to ``now``, which defaults to
    ``today``.
    """
    last_activity = today
    if streak.last_activity_date is None:
        current = 1
    else:
        delta = calendar_day_delta(streak.last_activity_date, today, tz)
        if delta == 1:
            current = streak.current_streak + 1
        elif delta > 1:
            current = 1
        else:
            current = streak.current_streak
            if delta < 0:
                last_activity = streak.last_activity_date
    return replace(
        streak,
        current_streak=current,
        longest_streak=max(streak.longest_streak, current),
        last_activity_date=last_activity,
        total_activities=streak.total_activities + 1,
        updated_at=now or today,
    )


def reset_streak(streak: StreakRecord, now: datetime) -> StreakRecord:
    """Zero the current streak; history counters are kept."""
    return replace(streak, current_streak=0, updated_at=now)


def is_active_today(streak: StreakRecord, now: datetime, tz: ZoneInfo) -> bool:
    """Return True when the last activity falls on today's local date."""
    if streak.last_activity_date is None:
        return False
    return calendar_day_delta(streak.last_activity_date, now, tz) == 0
