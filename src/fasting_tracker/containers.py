"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fasting_tracker.adapters.supabase_fasting_session_repository import (
    SupabaseFastingSessionRepository,
)
from fasting_tracker.adapters.supabase_streak_repository import (
    SupabaseStreakRepository,
)
from fasting_tracker.config import Settings
from fasting_tracker.services.clock import Clock, SystemClock
from fasting_tracker.services.fasting import FastingService
from fasting_tracker.services.streaks import StreakService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    fasting_service: FastingService
    streak_service: StreakService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock()
    streak_service = StreakService(
        repository=SupabaseStreakRepository(supabase_client),
        clock=clock,
        timezone_name=resolved_settings.timezone,
    )
    fasting_service = FastingService(
        repository=SupabaseFastingSessionRepository(supabase_client),
        streak_service=streak_service,
        clock=clock,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        fasting_service=fasting_service,
        streak_service=streak_service,
        close_resources=close_resources,
    )
