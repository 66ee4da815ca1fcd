"""Partner-organization derived flags."""

from __future__ import annotations

from typing import Any, Mapping

from .snapshot import VolunteerSnapshot


def math_coaching_only(snapshot: VolunteerSnapshot, manifests: Mapping[str, Any]) -> bool | None:
    """
    Whether the volunteer's partner organization limits them to math coaching.

    None for non-volunteers; False for volunteers without a partner org or
    whose org has no manifest.
    """
    if not snapshot.is_volunteer:
        return None
    if not snapshot.volunteer_partner_org:
        return False

    manifest = manifests.get(snapshot.volunteer_partner_org)
    return bool(manifest) and bool(getattr(manifest, "math_coaching_only", False))
