"""
Read-only views of a volunteer record used by the derived-value calculations.

``VolunteerSnapshot.past_sessions`` distinguishes two states that an empty
check would conflate: ``None`` means the session records were never loaded,
``()`` means they were loaded and there are none.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Hashable, Iterable, Optional, Tuple


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    created_at: Optional[datetime]
    volunteer_joined_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None


@dataclass(frozen=True)
class LastNotification:
    sent_at: datetime


@dataclass(frozen=True)
class LastSession:
    created_at: datetime


@dataclass(frozen=True)
class VolunteerSnapshot:
    """Immutable view of a volunteer at one instant"""

    id: Hashable
    created_at: datetime
    is_volunteer: bool
    volunteer_partner_org: Optional[str] = None
    last_notification: Optional[LastNotification] = None
    last_session: Optional[LastSession] = None
    num_past_sessions: int = 0
    past_sessions: Optional[Tuple[SessionRecord, ...]] = None
    phone: Optional[str] = None

    @property
    def sessions_loaded(self) -> bool:
        return self.past_sessions is not None


def session_record_from(session: Any) -> SessionRecord:
    return SessionRecord(
        created_at=as_utc(getattr(session, "created_at", None)),
        volunteer_joined_at=as_utc(getattr(session, "volunteer_joined_at", None)),
        ended_at=as_utc(getattr(session, "ended_at", None)),
    )


def build_snapshot(user: Any, *, load_sessions: bool = True) -> VolunteerSnapshot:
    """
    Materialize a snapshot from a ``User`` row.

    With ``load_sessions=False`` the past session records are left unloaded,
    so hour totals computed from the snapshot report "unknown" instead of 0.
    """
    last_notification = user.get_last_notification()
    last_session = user.get_last_session()

    past_sessions: Optional[Tuple[SessionRecord, ...]] = None
    if load_sessions:
        sessions: Iterable[Any] = user.past_sessions or ()
        past_sessions = tuple(session_record_from(s) for s in sessions)

    return VolunteerSnapshot(
        id=user.id,
        created_at=as_utc(user.created_at),
        is_volunteer=bool(user.is_volunteer),
        volunteer_partner_org=user.volunteer_partner_org,
        last_notification=(
            LastNotification(sent_at=as_utc(last_notification.sent_at)) if last_notification else None
        ),
        last_session=LastSession(created_at=as_utc(last_session.created_at)) if last_session else None,
        num_past_sessions=len(past_sessions) if past_sessions is not None else user.count_past_sessions(),
        past_sessions=past_sessions,
        phone=user.phone,
    )
