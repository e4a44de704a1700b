"""Date/time helpers shared by the timer and the API"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Current time as a timezone-aware UTC datetime.

    Returns:
        datetime: now, with tzinfo=UTC
    """
    return datetime.now(timezone.utc)


def format_mm_ss(total_seconds: int) -> str:
    """
    Format a second count as a countdown clock.

    Args:
        total_seconds: non-negative number of seconds

    Returns:
        str: "MM:SS", minutes zero-padded to two digits (may exceed 59)
    """
    minutes, seconds = divmod(max(total_seconds, 0), 60)
    return f"{minutes:02d}:{seconds:02d}"
