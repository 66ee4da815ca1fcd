"""
Outreach priority score for volunteers.

Additive point system; elapsed-time terms are prorated continuously rather
than floored to whole weeks.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from .snapshot import VolunteerSnapshot

NEW_VOLUNTEER_BONUS = 2.0
PARTNER_ORG_BONUS = 1.0
LAST_SESSION_WEEKLY_RATE = 0.5
RECENT_NOTIFICATION_MINUTES = 5
RECENT_NOTIFICATION_PENALTY = 10000.0

_WEEK = timedelta(weeks=1)
_MINUTE = timedelta(minutes=1)


def weeks_since(moment: datetime, now: datetime) -> float:
    return (now - moment) / _WEEK


def minutes_since(moment: datetime, now: datetime) -> float:
    return (now - moment) / _MINUTE


def compute_score(snapshot: VolunteerSnapshot, now: datetime) -> float:
    """
    Score a volunteer for outreach; higher means contact sooner.

    Only defined for volunteers. A volunteer notified in the last few minutes
    gets a penalty large enough to sink them below everyone else.
    """
    assert snapshot.is_volunteer, f"user {snapshot.id} is not a volunteer"

    points = 0.0

    if not snapshot.num_past_sessions:
        points += NEW_VOLUNTEER_BONUS

    if snapshot.volunteer_partner_org:
        points += PARTNER_ORG_BONUS

    # +1 point per week since last notification
    if snapshot.last_notification:
        points += weeks_since(snapshot.last_notification.sent_at, now)
    else:
        points += weeks_since(snapshot.created_at, now)

    # +1 point per 2 weeks since last session, but a full point per week
    # since sign-up for volunteers who never had one
    if snapshot.last_session:
        points += LAST_SESSION_WEEKLY_RATE * weeks_since(snapshot.last_session.created_at, now)
    else:
        points += weeks_since(snapshot.created_at, now)

    if (
        snapshot.last_notification
        and minutes_since(snapshot.last_notification.sent_at, now) < RECENT_NOTIFICATION_MINUTES
    ):
        points -= RECENT_NOTIFICATION_PENALTY

    return round(points, 2)


def volunteer_point_rank(snapshot: VolunteerSnapshot, now: datetime) -> float | None:
    """Score for volunteers, None for everyone else."""
    if not snapshot.is_volunteer:
        return None
    return compute_score(snapshot, now)
