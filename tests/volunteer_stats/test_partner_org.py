from datetime import datetime, timezone

from config.org_manifests import OrgManifest
from flask_app.volunteer_stats import VolunteerSnapshot, math_coaching_only

MANIFESTS = {
    "mathletes": OrgManifest(key="mathletes", name="Mathletes", math_coaching_only=True),
    "general": OrgManifest(key="general", name="General Corp"),
}


def snapshot(**overrides):
    fields = {"id": 7, "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc), "is_volunteer": True}
    fields.update(overrides)
    return VolunteerSnapshot(**fields)


def test_students_have_no_math_coaching_flag():
    assert math_coaching_only(snapshot(is_volunteer=False, volunteer_partner_org="mathletes"), MANIFESTS) is None


def test_volunteer_without_partner_org_is_not_math_only():
    assert math_coaching_only(snapshot(), MANIFESTS) is False


def test_manifest_flag_is_used_for_partner_volunteers():
    assert math_coaching_only(snapshot(volunteer_partner_org="mathletes"), MANIFESTS) is True
    assert math_coaching_only(snapshot(volunteer_partner_org="general"), MANIFESTS) is False


def test_unknown_partner_org_is_not_math_only():
    assert math_coaching_only(snapshot(volunteer_partner_org="unknown"), MANIFESTS) is False
