"""Human-readable duration labels."""

HOURS_PER_DAY = 24


def format_clock(seconds: float) -> str:
    """Format seconds as ``H:MM:SS``, or ``MM:SS`` below an hour."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_compact(seconds: float) -> str:
    """Format seconds as ``5h 12m`` or ``12m``."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_preset_hours(hours: int) -> str:
    """Format a preset length like ``16h``, ``1d`` or ``1d12h``."""
    if hours < HOURS_PER_DAY:
        return f"{hours}h"
    days, remaining = divmod(hours, HOURS_PER_DAY)
    if remaining == 0:
        return f"{days}d"
    return f"{days}d{remaining}h"
