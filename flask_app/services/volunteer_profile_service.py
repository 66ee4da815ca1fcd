# flask_app/services/volunteer_profile_service.py
"""
Volunteer Profile Service - derived values for profile rendering and outreach ranking
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from config.org_manifests import OrgManifest, load_org_manifests
from flask_app.models import User, db
from flask_app.tasks.phone import enqueue_phone_correction
from flask_app.volunteer_stats import (
    build_snapshot,
    compute_verified_hours,
    math_coaching_only,
    read_phone,
    session_record_from,
    volunteer_point_rank,
)

ORG_MANIFESTS_EXTENSION_KEY = "org_manifests"


@dataclass
class RankedVolunteer:
    """A volunteer's position in the outreach ranking"""

    user_id: int
    name: str
    score: float
    partner_org: Optional[str]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.user_id,
            "name": self.name,
            "score": self.score,
            "volunteer_partner_org": self.partner_org,
        }


def get_org_manifests() -> Dict[str, OrgManifest]:
    """Partner org manifests for the current app, loaded once per app"""
    manifests = current_app.extensions.get(ORG_MANIFESTS_EXTENSION_KEY)
    if manifests is None:
        manifests = load_org_manifests(current_app.config.get("ORG_MANIFESTS_PATH"))
        current_app.extensions[ORG_MANIFESTS_EXTENSION_KEY] = manifests
    return manifests


class VolunteerProfileService:
    """Service computing the derived fields shown on volunteer profiles"""

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return now if now is not None else datetime.now(timezone.utc)

    @classmethod
    def display_phone(cls, user: User) -> Optional[str]:
        """
        Display form of the user's phone.

        A legacy stored value queues a correction to its canonical form; the
        display value is returned whether or not the correction succeeds.
        """
        reading = read_phone(user.phone)
        if reading.needs_correction and current_app.config.get("PHONE_AUTOCORRECT_ENABLED", True):
            enqueue_phone_correction(user.id, user.phone, reading.correction)
        return reading.display

    @classmethod
    def verified_hours(cls, user: User) -> Optional[float]:
        """Verified session hours, or None for non-volunteers"""
        if not user.is_volunteer:
            return None
        return compute_verified_hours(tuple(session_record_from(s) for s in user.past_sessions))

    @classmethod
    def parse_profile(
        cls, user: User, now: Optional[datetime] = None, load_sessions: bool = True
    ) -> Dict[str, Any]:
        """
        Public profile for a user, stripped of sensitive data.

        With ``load_sessions=False`` the hours total is reported as unknown
        (None) rather than computed.
        """
        now = cls._now(now)
        snapshot = build_snapshot(user, load_sessions=load_sessions)

        return {
            "id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "nickname": user.nickname,
            "is_volunteer": user.is_volunteer,
            "is_admin": user.is_admin,
            "is_fake_user": user.is_fake_user,
            "created_at": snapshot.created_at.isoformat() if snapshot.created_at else None,
            "phone": user.phone,
            "phone_pretty": cls.display_phone(user),
            "volunteer_partner_org": user.volunteer_partner_org,
            "num_past_sessions": snapshot.num_past_sessions,
            "num_volunteer_session_hours": (
                compute_verified_hours(snapshot.past_sessions) if snapshot.is_volunteer else None
            ),
            "volunteer_point_rank": volunteer_point_rank(snapshot, now),
            "math_coaching_only": math_coaching_only(snapshot, get_org_manifests()),
        }

    @classmethod
    def rank_volunteers(
        cls, now: Optional[datetime] = None, limit: Optional[int] = None
    ) -> List[RankedVolunteer]:
        """
        Volunteers ordered by outreach score, highest first.

        Fake and test accounts are left out. Ties keep user id order.
        """
        now = cls._now(now)
        ranked = []
        for user in User.find_volunteers():
            snapshot = build_snapshot(user, load_sessions=False)
            ranked.append(
                RankedVolunteer(
                    user_id=user.id,
                    name=user.get_full_name(),
                    score=volunteer_point_rank(snapshot, now),
                    partner_org=user.volunteer_partner_org,
                )
            )

        ranked.sort(key=lambda entry: entry.score, reverse=True)
        if limit is not None:
            ranked = ranked[:limit]

        current_app.logger.debug(f"Ranked {len(ranked)} volunteers for outreach")
        return ranked

    @staticmethod
    def update_phone(user: User, raw_phone: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
        """Store a free-form phone input in canonical form. Returns (phone, error)."""
        stored = user.set_phone(raw_phone)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Error updating phone for user {user.id}: {str(e)}")
            return None, str(e)

        current_app.logger.info(f"Phone number updated for user {user.id}")
        return stored, None
