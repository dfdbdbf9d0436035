"""Streak endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from fasting_tracker.api.schemas import StreakOut
from fasting_tracker.domain.streaks import (
    STREAK_LABELS,
    StreakRecord,
    StreakType,
    is_active_today,
)

if TYPE_CHECKING:
    from fasting_tracker.containers import AppContainer
    from fasting_tracker.services.streaks import StreakService

router = APIRouter(prefix="/streaks", tags=["streaks"])


@router.get("")
async def list_streaks(request: Request) -> list[StreakOut]:
    """Return a streak for every category, creating missing ones."""
    container: AppContainer = request.app.state.container
    service = container.streak_service
    return [_streak_out(service, streak) for streak in service.ensure_streaks()]


@router.get("/{streak_type}")
async def get_streak(streak_type: StreakType, request: Request) -> StreakOut:
    """Return the streak for one category."""
    container: AppContainer = request.app.state.container
    service = container.streak_service
    return _streak_out(service, service.get_or_create(streak_type))


@router.post("/{streak_type}/reset")
async def reset_streak(streak_type: StreakType, request: Request) -> StreakOut:
    """Zero the current streak for one category."""
    container: AppContainer = request.app.state.container
    service = container.streak_service
    return _streak_out(service, service.reset(streak_type))


def _streak_out(service: StreakService, streak: StreakRecord) -> StreakOut:
    return StreakOut(
        id=streak.id,
        streak_type=streak.streak_type,
        label=STREAK_LABELS[streak.streak_type],
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        last_activity_date=streak.last_activity_date,
        total_activities=streak.total_activities,
        active_today=is_active_today(streak, service.clock.now(), service.tz),
        updated_at=streak.updated_at,
    )
