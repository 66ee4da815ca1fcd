"""
Verified session hours: the cumulative time a volunteer spent in sessions,
counting only sessions with sane join/end timestamps.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from .snapshot import SessionRecord

# Longer sessions are leftovers of stuck sessions, not real tutoring
MAX_SESSION_DURATION = timedelta(hours=5)

_HOUR = timedelta(hours=1)


def verified_duration(session: SessionRecord) -> timedelta:
    """Duration a single session contributes; zero when its timestamps can't be trusted."""
    if not (session.volunteer_joined_at and session.ended_at):
        return timedelta(0)

    duration = session.ended_at - session.volunteer_joined_at

    if duration > MAX_SESSION_DURATION:
        return timedelta(0)

    # volunteer joined after the session ended
    if duration < timedelta(0):
        return timedelta(0)

    return duration


def compute_verified_hours(past_sessions: Optional[Sequence[SessionRecord]]) -> float | None:
    """
    Total verified hours rounded to 2 decimals.

    Returns None when the session records were not loaded (``None``) or only
    partially materialized (first record has no ``created_at``); an empty
    sequence is a known total of 0.0.
    """
    if past_sessions is None:
        return None

    if not past_sessions:
        return 0.0

    if not past_sessions[0].created_at:
        return None

    total = sum((verified_duration(session) for session in past_sessions), timedelta(0))
    return round(total / _HOUR, 2)
