# conftest.py

import os
from datetime import datetime, timedelta, timezone

import pytest

# Set testing environment BEFORE importing app so app.py picks TestingConfig
os.environ["FLASK_ENV"] = "testing"

# Now import app and other modules after environment is set
from app import app as flask_app  # noqa: E402
from flask_app.models import Notification, Session, User, db  # noqa: E402

# Fixed evaluation instant shared by tests that need deterministic scores
NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def app():
    """Create and configure a test Flask application with a clean database"""
    flask_app.config.update(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret-key-for-testing-only",
            "LOG_LEVEL": "DEBUG",
            "PHONE_AUTOCORRECT_ENABLED": True,
            "ORG_MANIFESTS_PATH": None,
        }
    )
    # Re-initialize logging with updated config to pick up LOG_LEVEL=DEBUG
    from flask_app.utils.logging_config import setup_logging

    setup_logging(flask_app)

    # Manifests are cached per app; reset so tests can point at their own file
    flask_app.extensions.pop("org_manifests", None)

    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def app_context(app):
    """Automatically provide app context for all tests"""
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    """Create a test client for the Flask application"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a test CLI runner for the Flask application"""
    return app.test_cli_runner()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_user(app):
    """Factory persisting users; volunteers by default"""
    counter = {"n": 0}

    def _make_user(**overrides):
        counter["n"] += 1
        fields = {
            "email": f"volunteer{counter['n']}@example.com",
            "first_name": "Vol",
            "last_name": f"Unteer{counter['n']}",
            "is_volunteer": True,
            "phone": "5551234567",
            "created_at": NOW - timedelta(weeks=3),
        }
        fields.update(overrides)
        user = User(**fields)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def make_session(app):
    """Factory persisting a session and linking it to the volunteer's past sessions"""

    def _make_session(volunteer, *, created_at, joined_after=None, duration=None, student=None):
        joined_at = created_at + joined_after if joined_after is not None else None
        ended_at = joined_at + duration if joined_at is not None and duration is not None else None
        session = Session(
            volunteer_id=volunteer.id,
            student_id=student.id if student else None,
            type="math",
            created_at=created_at,
            volunteer_joined_at=joined_at,
            ended_at=ended_at,
        )
        db.session.add(session)
        volunteer.past_sessions.append(session)
        db.session.commit()
        return session

    return _make_session


@pytest.fixture
def make_notification(app):
    def _make_notification(volunteer, *, sent_at, method="sms"):
        notification = Notification(volunteer_id=volunteer.id, sent_at=sent_at, method=method)
        db.session.add(notification)
        db.session.commit()
        return notification

    return _make_notification
