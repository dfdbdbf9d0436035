"""Fasting session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Query, Request, status

from fasting_tracker.api.schemas import (
    FastingSessionOut,
    FastingSummaryOut,
    FastingTypeInfo,
    StartFastingRequest,
)
from fasting_tracker.domain.fasting import FastingStatus, FastingType, type_profile
from fasting_tracker.formatting import format_preset_hours

if TYPE_CHECKING:
    from fasting_tracker.containers import AppContainer
    from fasting_tracker.services.fasting import FastingProgress

router = APIRouter(prefix="/fasting", tags=["fasting"])


def _container(request: Request) -> AppContainer:
    container: AppContainer = request.app.state.container
    if container.settings.auto_complete_due_sessions:
        container.fasting_service.complete_due_sessions()
    return container


@router.get("/types")
async def list_fasting_types() -> list[FastingTypeInfo]:
    """Return every fasting type with its suggested durations."""
    types = []
    for fasting_type in FastingType:
        profile = type_profile(fasting_type)
        types.append(
            FastingTypeInfo(
                fasting_type=fasting_type,
                label=profile.label,
                description=profile.description,
                default_hours=profile.default_hours,
                preset_hours=list(profile.preset_hours),
                preset_labels=[
                    format_preset_hours(hours) for hours in profile.preset_hours
                ],
            )
        )
    return types


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def start_session(
    body: StartFastingRequest, request: Request
) -> FastingSessionOut:
    """Start a new fast."""
    service = _container(request).fasting_service
    session = service.start_session(
        body.fasting_type,
        planned_duration=body.planned_duration_seconds,
        notes=body.notes,
    )
    return _session_out(service.progress_for(session))


@router.get("/sessions")
async def list_sessions(
    request: Request,
    status_filter: FastingStatus | None = Query(default=None, alias="status"),
    fasting_type: FastingType | None = None,
) -> list[FastingSessionOut]:
    """Return recorded fasts, newest first."""
    service = _container(request).fasting_service
    sessions = service.list_sessions(status=status_filter, fasting_type=fasting_type)
    return [_session_out(service.progress_for(session)) for session in sessions]


@router.get("/sessions/current")
async def current_session(request: Request) -> FastingSessionOut:
    """Return the open fast."""
    service = _container(request).fasting_service
    session = service.get_current_session()
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No open fasting session"
        )
    return _session_out(service.progress_for(session))


@router.post("/sessions/complete-due")
async def complete_due_sessions(request: Request) -> list[FastingSessionOut]:
    """Complete every running fast that has reached its plan."""
    container: AppContainer = request.app.state.container
    service = container.fasting_service
    return [
        _session_out(service.progress_for(session))
        for session in service.complete_due_sessions()
    ]


@router.get("/sessions/{session_id}")
async def get_session(session_id: UUID, request: Request) -> FastingSessionOut:
    """Return one fast with its current timing."""
    service = _container(request).fasting_service
    return _session_out(service.get_progress(session_id))


@router.post("/sessions/{session_id}/pause")
async def pause_session(session_id: UUID, request: Request) -> FastingSessionOut:
    """Pause a running fast."""
    service = _container(request).fasting_service
    return _session_out(service.progress_for(service.pause_session(session_id)))


@router.post("/sessions/{session_id}/resume")
async def resume_session(session_id: UUID, request: Request) -> FastingSessionOut:
    """Resume a paused fast."""
    service = _container(request).fasting_service
    return _session_out(service.progress_for(service.resume_session(session_id)))


@router.post("/sessions/{session_id}/complete")
async def complete_session(session_id: UUID, request: Request) -> FastingSessionOut:
    """Finish a fast and count it toward the fasting streak."""
    service = _container(request).fasting_service
    return _session_out(service.progress_for(service.complete_session(session_id)))


@router.post("/sessions/{session_id}/stop")
async def stop_session(session_id: UUID, request: Request) -> FastingSessionOut:
    """End a fast early."""
    service = _container(request).fasting_service
    return _session_out(service.progress_for(service.stop_session(session_id)))


@router.get("/summary")
async def summary(request: Request) -> FastingSummaryOut:
    """Return success rate and average completed duration."""
    result = _container(request).fasting_service.summarize()
    return FastingSummaryOut(
        total_sessions=result.total_sessions,
        completed_sessions=result.completed_sessions,
        success_rate=result.success_rate,
        average_completed_seconds=result.average_completed_seconds,
    )


def _session_out(progress: FastingProgress) -> FastingSessionOut:
    session = progress.session
    return FastingSessionOut(
        id=session.id,
        fasting_type=session.fasting_type,
        status=session.status,
        start_time=session.start_time,
        end_time=session.end_time,
        paused_at=session.paused_at,
        planned_duration_seconds=session.planned_duration,
        total_paused_seconds=session.total_paused_duration,
        actual_duration_seconds=session.actual_duration,
        notes=session.notes,
        created_at=session.created_at,
        as_of=progress.as_of,
        elapsed_seconds=progress.elapsed_seconds,
        remaining_seconds=progress.remaining_seconds,
        progress=progress.progress,
        elapsed_label=progress.elapsed_label,
        remaining_label=progress.remaining_label,
    )
