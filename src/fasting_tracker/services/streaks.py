"""Streak bookkeeping for daily activities."""

import logging
from dataclasses import dataclass
from typing import Protocol
from zoneinfo import ZoneInfo

from fasting_tracker.domain.streaks import (
    StreakRecord,
    StreakType,
    calendar_day_delta,
    is_active_today,
    new_streak,
    reset_streak,
    update_streak,
)
from fasting_tracker.services.clock import Clock

_logger = logging.getLogger(__name__)


class StreakRepository(Protocol):
    """Persistence interface for streak counters."""

    def create_streak(self, streak: StreakRecord) -> StreakRecord:
        """Persist a new streak and return it."""

    def get_streak(self, streak_type: StreakType) -> StreakRecord | None:
        """Return the streak for a category, if present."""

    def list_streaks(self) -> list[StreakRecord]:
        """Return every stored streak."""

    def update_streak(self, streak: StreakRecord) -> None:
        """Overwrite a stored streak."""


@dataclass
class StreakService:
    """Keeps one streak per category, counted in the user's timezone."""

    repository: StreakRepository
    clock: Clock
    timezone_name: str = "UTC"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    def get(self, streak_type: StreakType) -> StreakRecord | None:
        """Return the streak for a category, if it exists."""
        return self.repository.get_streak(streak_type)

    def get_or_create(self, streak_type: StreakType) -> StreakRecord:
        """Return the streak for a category, creating an empty one if needed."""
        existing = self.repository.get_streak(streak_type)
        if existing:
            return existing
        return self.repository.create_streak(
            new_streak(streak_type, self.clock.now())
        )

    def ensure_streaks(self) -> list[StreakRecord]:
        """Make sure every category has a streak and return them all."""
        return [self.get_or_create(streak_type) for streak_type in StreakType]

    def list_streaks(self) -> list[StreakRecord]:
        """Return stored streaks in category order."""
        order = list(StreakType)
        return sorted(
            self.repository.list_streaks(),
            key=lambda streak: order.index(streak.streak_type),
        )

    def record_activity(self, streak_type: StreakType) -> StreakRecord:
        """Count a qualifying activity happening now."""
        streak = self.get_or_create(streak_type)
        now = self.clock.now()
        if streak.last_activity_date is not None and (
            calendar_day_delta(streak.last_activity_date, now, self.tz) < 0
        ):
            _logger.warning(
                "Activity predates last streak activity: type=%s last=%s now=%s",
                streak_type,
                streak.last_activity_date.isoformat(),
                now.isoformat(),
            )
        updated = update_streak(streak, now, self.tz, now=now)
        self.repository.update_streak(updated)
        _logger.info(
            "Streak updated: type=%s current=%s longest=%s",
            streak_type,
            updated.current_streak,
            updated.longest_streak,
        )
        return updated

    def reset(self, streak_type: StreakType) -> StreakRecord:
        """Zero the current streak for a category."""
        updated = reset_streak(self.get_or_create(streak_type), self.clock.now())
        self.repository.update_streak(updated)
        return updated

    def is_active_today(self, streak_type: StreakType) -> bool:
        """Return True when the category already has activity today."""
        streak = self.repository.get_streak(streak_type)
        if streak is None:
            return False
        return is_active_today(streak, self.clock.now(), self.tz)
