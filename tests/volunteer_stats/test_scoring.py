from datetime import datetime, timedelta, timezone

import pytest

from flask_app.volunteer_stats import (
    LastNotification,
    LastSession,
    VolunteerSnapshot,
    compute_score,
    volunteer_point_rank,
)
from flask_app.volunteer_stats.scoring import minutes_since, weeks_since

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_snapshot(**overrides):
    fields = {
        "id": 1,
        "created_at": NOW - timedelta(days=21),
        "is_volunteer": True,
    }
    fields.update(overrides)
    return VolunteerSnapshot(**fields)


def test_new_volunteer_three_weeks_old_scores_eight():
    # 2.0 new bonus + 3.0 notification term + 3.0 session term at full rate
    assert compute_score(make_snapshot(), NOW) == 8.0


def test_partner_org_adds_one_point():
    assert compute_score(make_snapshot(volunteer_partner_org="example"), NOW) == 9.0


def test_past_sessions_remove_new_volunteer_bonus():
    snapshot = make_snapshot(
        num_past_sessions=4,
        last_session=LastSession(created_at=NOW - timedelta(weeks=2)),
    )
    # 3.0 since sign-up (no notification) + 0.5 * 2 weeks since last session
    assert compute_score(snapshot, NOW) == 4.0


def test_session_term_accrues_at_half_rate_when_last_session_known():
    with_session = make_snapshot(
        num_past_sessions=1, last_session=LastSession(created_at=NOW - timedelta(weeks=4))
    )
    assert compute_score(with_session, NOW) == pytest.approx(3.0 + 2.0)


def test_notification_term_anchors_on_last_notification():
    snapshot = make_snapshot(
        created_at=NOW - timedelta(weeks=10),
        last_notification=LastNotification(sent_at=NOW - timedelta(weeks=1)),
    )
    # 2.0 bonus + 1 week since notification + 10 weeks since sign-up (no session)
    assert compute_score(snapshot, NOW) == 13.0


def test_time_terms_are_prorated_not_floored():
    snapshot = make_snapshot(created_at=NOW - timedelta(days=10, hours=12))
    # 1.5 weeks counted twice plus the new-volunteer bonus
    assert compute_score(snapshot, NOW) == 5.0


def test_recent_notification_penalty_applies_within_five_minutes():
    sent_at = NOW - timedelta(minutes=4)
    penalized = make_snapshot(last_notification=LastNotification(sent_at=sent_at))
    expected_without_penalty = round(2.0 + weeks_since(sent_at, NOW) + 3.0, 2)

    score = compute_score(penalized, NOW)

    assert score <= expected_without_penalty - 10000
    assert score == pytest.approx(expected_without_penalty - 10000, abs=0.01)


def test_notification_exactly_five_minutes_ago_is_not_penalized():
    snapshot = make_snapshot(last_notification=LastNotification(sent_at=NOW - timedelta(minutes=5)))
    assert compute_score(snapshot, NOW) > 0


def test_penalty_dominates_positive_terms():
    snapshot = make_snapshot(
        created_at=NOW - timedelta(weeks=500),
        volunteer_partner_org="example",
        last_notification=LastNotification(sent_at=NOW - timedelta(seconds=30)),
    )
    assert compute_score(snapshot, NOW) < -9000


def test_score_is_rounded_to_two_decimals():
    snapshot = make_snapshot(created_at=NOW - timedelta(days=1))
    score = compute_score(snapshot, NOW)
    assert score == round(score, 2)
    assert score == pytest.approx(2.0 + 2 / 7, abs=0.005)


def test_compute_score_rejects_non_volunteers():
    with pytest.raises(AssertionError):
        compute_score(make_snapshot(is_volunteer=False), NOW)


def test_volunteer_point_rank_is_none_for_students():
    assert volunteer_point_rank(make_snapshot(is_volunteer=False), NOW) is None
    assert volunteer_point_rank(make_snapshot(), NOW) == 8.0


def test_time_helpers_use_injected_now():
    assert weeks_since(NOW - timedelta(weeks=2), NOW) == 2.0
    assert minutes_since(NOW - timedelta(seconds=90), NOW) == 1.5
