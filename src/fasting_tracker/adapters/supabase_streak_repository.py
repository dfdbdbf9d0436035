"""Supabase repository for streak counters."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fasting_tracker.domain.streaks import StreakRecord, StreakType
from fasting_tracker.services.streaks import StreakRepository

_TABLE = "streaks"
_COLUMNS = (
    "id, streak_type, current_streak, longest_streak, last_activity_date, "
    "total_activities, created_at, updated_at"
)


@dataclass
class SupabaseStreakRepository(StreakRepository):
    """Supabase implementation for streaks, one row per streak type."""

    client: Client

    def create_streak(self, streak: StreakRecord) -> StreakRecord:
        """Insert a streak row and return it."""
        response = self.client.table(_TABLE).insert(_to_row(streak)).execute()
        if not response.data:
            raise RuntimeError("Failed to create streak")
        return _parse_row(response.data[0])

    def get_streak(self, streak_type: StreakType) -> StreakRecord | None:
        """Return the streak for a type, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("streak_type", streak_type.value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_streaks(self) -> list[StreakRecord]:
        """Return all streak rows."""
        response = self.client.table(_TABLE).select(_COLUMNS).execute()
        return [_parse_row(row) for row in response.data or []]

    def update_streak(self, streak: StreakRecord) -> None:
        """Update counters of an existing streak row."""
        row = _to_row(streak)
        row.pop("id")
        row.pop("created_at")
        self.client.table(_TABLE).update(row).eq("id", str(streak.id)).execute()


def _to_row(streak: StreakRecord) -> dict[str, object]:
    return {
        "id": str(streak.id),
        "streak_type": streak.streak_type.value,
        "current_streak": streak.current_streak,
        "longest_streak": streak.longest_streak,
        "last_activity_date": (
            streak.last_activity_date.isoformat()
            if streak.last_activity_date
            else None
        ),
        "total_activities": streak.total_activities,
        "created_at": streak.created_at.isoformat(),
        "updated_at": streak.updated_at.isoformat(),
    }


def _parse_row(row: dict[str, object]) -> StreakRecord:
    last_activity_raw = row.get("last_activity_date")
    return StreakRecord(
        id=UUID(str(row["id"])),
        streak_type=StreakType(row["streak_type"]),
        current_streak=int(row.get("current_streak") or 0),
        longest_streak=int(row.get("longest_streak") or 0),
        last_activity_date=(
            datetime.fromisoformat(last_activity_raw)
            if isinstance(last_activity_raw, str) and last_activity_raw
            else None
        ),
        total_activities=int(row.get("total_activities") or 0),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
