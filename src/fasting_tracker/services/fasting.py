"""Application service for the fasting session lifecycle."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from fasting_tracker.domain import fasting
from fasting_tracker.domain.errors import (
    SessionAlreadyOpenError,
    SessionNotFoundError,
)
from fasting_tracker.domain.fasting import FastingSession, FastingStatus, FastingType
from fasting_tracker.domain.streaks import StreakType
from fasting_tracker.formatting import format_clock, format_compact
from fasting_tracker.services.clock import Clock
from fasting_tracker.services.streaks import StreakService

_logger = logging.getLogger(__name__)


class FastingSessionRepository(Protocol):
    """Persistence interface for fasting sessions."""

    def create_session(self, session: FastingSession) -> FastingSession:
        """Persist a new session and return it."""

    def get_session(self, session_id: UUID) -> FastingSession | None:
        """Return a session by id, if present."""

    def get_open_session(self) -> FastingSession | None:
        """Return the most recent active or paused session, if any."""

    def list_sessions(
        self,
        status: FastingStatus | None = None,
        fasting_type: FastingType | None = None,
    ) -> list[FastingSession]:
        """Return sessions, newest first, optionally filtered."""

    def update_session(self, session: FastingSession) -> None:
        """Overwrite a stored session."""


@dataclass(frozen=True)
class FastingProgress:
    """Point-in-time view of a session's timing."""

    session: FastingSession
    as_of: datetime
    elapsed_seconds: float
    remaining_seconds: float
    progress: float

    @property
    def elapsed_label(self) -> str:
        return format_clock(self.elapsed_seconds)

    @property
    def remaining_label(self) -> str:
        return f"{format_compact(self.remaining_seconds)} left"


@dataclass(frozen=True)
class FastingSummary:
    """Aggregate figures over all recorded fasts."""

    total_sessions: int
    completed_sessions: int
    success_rate: int
    average_completed_seconds: float


@dataclass
class FastingService:
    """Runs fasting sessions and keeps at most one of them open."""

    repository: FastingSessionRepository
    streak_service: StreakService
    clock: Clock

    def start_session(
        self,
        fasting_type: FastingType,
        planned_duration: float | None = None,
        notes: str = "",
    ) -> FastingSession:
        """Start a new fast; fails while another fast is still open."""
        open_session = self.repository.get_open_session()
        if open_session is not None:
            raise SessionAlreadyOpenError(open_session.id)
        if planned_duration is None:
            planned_duration = fasting.default_planned_duration(fasting_type)
        session = fasting.create_session(
            fasting_type, planned_duration, self.clock.now(), notes=notes
        )
        created = self.repository.create_session(session)
        _logger.info(
            "Fasting session started: id=%s type=%s planned=%s",
            created.id,
            created.fasting_type,
            created.planned_duration,
        )
        return created

    def get_session(self, session_id: UUID) -> FastingSession:
        """Return a stored session or raise SessionNotFoundError."""
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def get_current_session(self) -> FastingSession | None:
        """Return the open session, if any."""
        return self.repository.get_open_session()

    def list_sessions(
        self,
        status: FastingStatus | None = None,
        fasting_type: FastingType | None = None,
    ) -> list[FastingSession]:
        """Return stored sessions, newest first."""
        return self.repository.list_sessions(status=status, fasting_type=fasting_type)

    def pause_session(self, session_id: UUID) -> FastingSession:
        """Pause a running fast."""
        return self._apply(session_id, fasting.pause_session)

    def resume_session(self, session_id: UUID) -> FastingSession:
        """Resume a paused fast."""
        return self._apply(session_id, fasting.resume_session)

    def stop_session(self, session_id: UUID) -> FastingSession:
        """End a fast early without counting it toward the streak."""
        return self._apply(session_id, fasting.stop_session)

    def complete_session(self, session_id: UUID) -> FastingSession:
        """Finish a fast and count it toward the fasting streak."""
        completed = self._apply(session_id, fasting.complete_session)
        try:
            self.streak_service.record_activity(StreakType.FASTING)
        except Exception:
            _logger.exception(
                "Fasting streak not updated for completed session: id=%s",
                completed.id,
            )
            raise
        return completed

    def complete_due_sessions(self) -> list[FastingSession]:
        """Complete every active fast that has reached its plan."""
        now = self.clock.now()
        due = [
            session
            for session in self.repository.list_sessions(status=FastingStatus.ACTIVE)
            if fasting.is_due(session, now)
        ]
        return [self.complete_session(session.id) for session in due]

    def get_progress(self, session_id: UUID) -> FastingProgress:
        """Return the timing view of a session as of now."""
        return self.progress_for(self.get_session(session_id))

    def progress_for(self, session: FastingSession) -> FastingProgress:
        """Return the timing view of an already loaded session."""
        now = self.clock.now()
        return FastingProgress(
            session=session,
            as_of=now,
            elapsed_seconds=fasting.current_duration(session, now),
            remaining_seconds=fasting.remaining_time(session, now),
            progress=fasting.progress_percentage(session, now),
        )

    def summarize(self) -> FastingSummary:
        """Return success rate and average length of completed fasts."""
        sessions = self.repository.list_sessions()
        completed = [session for session in sessions if session.is_completed]
        success_rate = (
            int(len(completed) / len(sessions) * 100) if sessions else 0
        )
        average = (
            sum(session.actual_duration for session in completed) / len(completed)
            if completed
            else 0.0
        )
        return FastingSummary(
            total_sessions=len(sessions),
            completed_sessions=len(completed),
            success_rate=success_rate,
            average_completed_seconds=average,
        )

    def _apply(
        self,
        session_id: UUID,
        transition: Callable[[FastingSession, datetime], FastingSession],
    ) -> FastingSession:
        session = self.get_session(session_id)
        updated = transition(session, self.clock.now())
        self.repository.update_session(updated)
        _logger.info(
            "Fasting session %s: id=%s status=%s",
            transition.__name__.removesuffix("_session"),
            updated.id,
            updated.status,
        )
        return updated
