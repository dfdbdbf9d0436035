"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import timedelta
from uuid import uuid4

import pytest

from fasting_tracker.adapters.supabase_fasting_session_repository import (
    SupabaseFastingSessionRepository,
)
from fasting_tracker.adapters.supabase_streak_repository import (
    SupabaseStreakRepository,
)
from fasting_tracker.domain.fasting import (
    FastingStatus,
    FastingType,
    complete_session,
    create_session,
    pause_session,
)
from fasting_tracker.domain.streaks import StreakType, new_streak
from tests.conftest import T0


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _session_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": str(uuid4()),
        "fasting_type": "water",
        "status": "active",
        "start_time": T0.isoformat(),
        "end_time": None,
        "paused_at": None,
        "total_paused_duration": 0,
        "planned_duration": 3600,
        "actual_duration": 0,
        "notes": "",
        "created_at": T0.isoformat(),
    }
    row.update(overrides)
    return row


def test_fasting_repository_create_writes_flat_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("fasting_sessions")
    session = create_session(FastingType.WATER, 3600, T0, notes="hydrate")
    table.queue("insert", [_session_row(id=str(session.id), notes="hydrate")])

    created = SupabaseFastingSessionRepository(client).create_session(session)

    assert created == session
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["status"] == "active"
    assert table.last_payload["fasting_type"] == "water"
    assert table.last_payload["paused_at"] is None


def test_fasting_repository_create_fails_without_rows() -> None:
    client = FakeSupabaseClient()
    session = create_session(FastingType.WATER, 3600, T0)

    with pytest.raises(RuntimeError):
        SupabaseFastingSessionRepository(client).create_session(session)


def test_fasting_repository_parses_paused_and_ended_rows() -> None:
    client = FakeSupabaseClient()
    table = client.table("fasting_sessions")
    paused_at = T0 + timedelta(minutes=30)
    end_time = T0 + timedelta(hours=2)
    table.queue(
        "select", [_session_row(status="paused", paused_at=paused_at.isoformat())]
    )
    table.queue(
        "select",
        [
            _session_row(
                status="completed",
                end_time=end_time.isoformat(),
                actual_duration=7200,
            )
        ],
    )
    repository = SupabaseFastingSessionRepository(client)

    paused = repository.get_open_session()
    ended = repository.get_session(uuid4())

    assert paused is not None
    assert paused.status is FastingStatus.PAUSED
    assert paused.paused_at == paused_at
    assert ended is not None
    assert ended.status is FastingStatus.COMPLETED
    assert ended.end_time == end_time
    assert ended.actual_duration == 7200


def test_fasting_repository_rejects_paused_row_without_timestamp() -> None:
    client = FakeSupabaseClient()
    client.table("fasting_sessions").queue("select", [_session_row(status="paused")])

    with pytest.raises(RuntimeError):
        SupabaseFastingSessionRepository(client).get_open_session()


def test_fasting_repository_list_applies_filters() -> None:
    client = FakeSupabaseClient()
    table = client.table("fasting_sessions")
    table.queue("select", [_session_row(), _session_row(fasting_type="juice")])

    sessions = SupabaseFastingSessionRepository(client).list_sessions(
        status=FastingStatus.ACTIVE, fasting_type=FastingType.JUICE
    )

    assert len(sessions) == 2
    assert ("status", "active") in table.last_filters
    assert ("fasting_type", "juice") in table.last_filters


def test_fasting_repository_update_sends_phase_columns() -> None:
    client = FakeSupabaseClient()
    table = client.table("fasting_sessions")
    session = create_session(FastingType.WATER, 3600, T0)
    session = complete_session(
        pause_session(session, T0 + timedelta(minutes=10)), T0 + timedelta(hours=1)
    )

    SupabaseFastingSessionRepository(client).update_session(session)

    assert isinstance(table.last_payload, dict)
    assert "id" not in table.last_payload
    assert table.last_payload["status"] == "completed"
    assert table.last_payload["actual_duration"] == 600
    assert table.last_payload["paused_at"] is None
    assert ("id", str(session.id)) in table.last_filters


def test_streak_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("streaks")
    streak = new_streak(StreakType.FASTING, T0)
    row = {
        "id": str(streak.id),
        "streak_type": "fasting",
        "current_streak": 3,
        "longest_streak": 5,
        "last_activity_date": T0.isoformat(),
        "total_activities": 9,
        "created_at": T0.isoformat(),
        "updated_at": T0.isoformat(),
    }
    table.queue("insert", [dict(row, current_streak=0, longest_streak=0)])
    table.queue("select", [row])
    repository = SupabaseStreakRepository(client)

    created = repository.create_streak(streak)
    fetched = repository.get_streak(StreakType.FASTING)

    assert created.id == streak.id
    assert created.current_streak == 0
    assert fetched is not None
    assert fetched.current_streak == 3
    assert fetched.longest_streak == 5
    assert fetched.last_activity_date == T0
    assert ("streak_type", "fasting") in table.last_filters


def test_streak_repository_missing_returns_none() -> None:
    client = FakeSupabaseClient()

    assert SupabaseStreakRepository(client).get_streak(StreakType.DIETING) is None
