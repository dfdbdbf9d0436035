"""Supabase-backed fasting session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fasting_tracker.domain.fasting import (
    ActivePhase,
    EndedPhase,
    FastingSession,
    FastingStatus,
    FastingType,
    PausedPhase,
    Phase,
)
from fasting_tracker.services.fasting import FastingSessionRepository

_TABLE = "fasting_sessions"
_COLUMNS = (
    "id, fasting_type, status, start_time, end_time, paused_at, "
    "total_paused_duration, planned_duration, actual_duration, notes, created_at"
)
_OPEN_STATUSES = [FastingStatus.ACTIVE.value, FastingStatus.PAUSED.value]


@dataclass
class SupabaseFastingSessionRepository(FastingSessionRepository):
    """Supabase implementation for fasting sessions."""

    client: Client

    def create_session(self, session: FastingSession) -> FastingSession:
        """Insert a session row and return the stored session."""
        response = self.client.table(_TABLE).insert(_to_row(session)).execute()
        if not response.data:
            raise RuntimeError("Failed to create fasting session")
        return _parse_row(response.data[0])

    def get_session(self, session_id: UUID) -> FastingSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def get_open_session(self) -> FastingSession | None:
        """Return the latest active or paused session."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .in_("status", _OPEN_STATUSES)
            .order("start_time", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_sessions(
        self,
        status: FastingStatus | None = None,
        fasting_type: FastingType | None = None,
    ) -> list[FastingSession]:
        """Return sessions newest first with optional filters."""
        query = self.client.table(_TABLE).select(_COLUMNS)
        if status is not None:
            query = query.eq("status", status.value)
        if fasting_type is not None:
            query = query.eq("fasting_type", fasting_type.value)
        response = query.order("start_time", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def update_session(self, session: FastingSession) -> None:
        """Overwrite the mutable columns of a session row."""
        row = _to_row(session)
        row.pop("id")
        row.pop("created_at")
        self.client.table(_TABLE).update(row).eq("id", str(session.id)).execute()


def _to_row(session: FastingSession) -> dict[str, object]:
    return {
        "id": str(session.id),
        "fasting_type": session.fasting_type.value,
        "status": session.status.value,
        "start_time": session.start_time.isoformat(),
        "end_time": session.end_time.isoformat() if session.end_time else None,
        "paused_at": session.paused_at.isoformat() if session.paused_at else None,
        "total_paused_duration": session.total_paused_duration,
        "planned_duration": session.planned_duration,
        "actual_duration": session.actual_duration,
        "notes": session.notes,
        "created_at": session.created_at.isoformat(),
    }


def _parse_row(row: dict[str, object]) -> FastingSession:
    return FastingSession(
        id=UUID(str(row["id"])),
        fasting_type=FastingType(row["fasting_type"]),
        phase=_parse_phase(row),
        start_time=_parse_datetime(row["start_time"]),
        planned_duration=float(row.get("planned_duration") or 0.0),
        total_paused_duration=float(row.get("total_paused_duration") or 0.0),
        notes=str(row.get("notes") or ""),
        created_at=_parse_datetime(row["created_at"]),
    )


def _parse_phase(row: dict[str, object]) -> Phase:
    status = FastingStatus(row["status"])
    if status is FastingStatus.ACTIVE:
        return ActivePhase()
    if status is FastingStatus.PAUSED:
        paused_at = row.get("paused_at")
        if not paused_at:
            raise RuntimeError(f"Paused fasting session {row['id']} has no paused_at")
        return PausedPhase(paused_at=_parse_datetime(paused_at))
    end_time = row.get("end_time")
    if not end_time:
        raise RuntimeError(f"Ended fasting session {row['id']} has no end_time")
    return EndedPhase(
        end_time=_parse_datetime(end_time),
        actual_duration=float(row.get("actual_duration") or 0.0),
        outcome=status,
    )


def _parse_datetime(raw: object) -> datetime:
    return datetime.fromisoformat(str(raw))
