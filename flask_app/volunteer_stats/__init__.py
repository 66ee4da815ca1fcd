"""
Derived values computed from volunteer records: outreach score, verified
session hours and canonical phone numbers.
"""

from .partner_org import math_coaching_only
from .phone import PhoneRead, format_for_display, pending_correction, read_phone, set_from_input
from .scoring import compute_score, volunteer_point_rank
from .session_hours import compute_verified_hours
from .snapshot import (
    LastNotification,
    LastSession,
    SessionRecord,
    VolunteerSnapshot,
    build_snapshot,
    session_record_from,
)

__all__ = [
    "LastNotification",
    "LastSession",
    "PhoneRead",
    "SessionRecord",
    "VolunteerSnapshot",
    "build_snapshot",
    "compute_score",
    "compute_verified_hours",
    "format_for_display",
    "math_coaching_only",
    "pending_correction",
    "read_phone",
    "session_record_from",
    "set_from_input",
    "volunteer_point_rank",
]
