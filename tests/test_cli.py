import json
from datetime import timedelta

from conftest import NOW
from flask_app.models import User, db


def test_rank_command_prints_json(runner, make_user):
    older = make_user(created_at=NOW - timedelta(weeks=6))
    make_user(created_at=NOW - timedelta(weeks=1))

    result = runner.invoke(args=["volunteers", "rank", "--limit", "1"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [entry["id"] for entry in payload] == [older.id]


def test_heal_phones_dry_run_lists_corrections(runner, make_user):
    user = make_user(phone="555 111 2222")

    result = runner.invoke(args=["volunteers", "heal-phones", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert f"user {user.id}: '555 111 2222' -> '5551112222'" in result.output
    assert "would correct 1" in result.output
    db.session.expire_all()
    assert db.session.get(User, user.id).phone == "555 111 2222"


def test_heal_phones_writes_corrections(runner, make_user):
    user = make_user(phone="555-111-2222")

    result = runner.invoke(args=["volunteers", "heal-phones"])

    assert result.exit_code == 0, result.output
    assert "corrected 1" in result.output
    db.session.expire_all()
    assert db.session.get(User, user.id).phone == "5551112222"


def test_hours_command(runner, make_user, make_session):
    volunteer = make_user()
    make_session(
        volunteer,
        created_at=NOW - timedelta(days=3),
        joined_after=timedelta(minutes=1),
        duration=timedelta(hours=1, minutes=15),
    )

    result = runner.invoke(args=["volunteers", "hours", str(volunteer.id)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "1.25"


def test_hours_command_rejects_unknown_user(runner):
    result = runner.invoke(args=["volunteers", "hours", "12345"])
    assert result.exit_code != 0
    assert "not found" in result.output
