"""Domain errors for fasting sessions and streaks."""

from uuid import UUID


class FastingTrackerError(Exception):
    """Base class for domain errors."""


class InvalidTransitionError(FastingTrackerError):
    """Raised when a session cannot perform the requested transition."""

    def __init__(self, status: str, action: str) -> None:
        super().__init__(f"Cannot {action} a session that is {status}")
        self.status = status
        self.action = action


class InvalidConfigurationError(FastingTrackerError):
    """Raised when a session is created with an unusable plan."""


class SessionNotFoundError(FastingTrackerError):
    """Raised when a session id does not resolve to a stored session."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__(f"Fasting session {session_id} not found")
        self.session_id = session_id


class SessionAlreadyOpenError(FastingTrackerError):
    """Raised when starting a fast while another one is active or paused."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__(f"Fasting session {session_id} is still open")
        self.session_id = session_id
