# flask_app/models/user.py

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import validates

from flask_app.volunteer_stats.phone import set_from_input

from .base import BaseModel, db
from .notification import Notification
from .session import Session, user_past_sessions


class User(BaseModel):
    """Platform account; volunteers and students share this table"""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    nickname = db.Column(db.String(100), nullable=True)

    # Canonical phone: 10 digits (US) or "+" followed by digits (international).
    # Legacy rows may still hold formatted values until they are read.
    phone = db.Column(db.String(30), nullable=True)

    # Key into the partner organization manifests
    volunteer_partner_org = db.Column(db.String(100), nullable=True, index=True)

    # User status
    is_volunteer = db.Column(db.Boolean, default=False, nullable=False, index=True)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    # Real accounts we decided not to track (people trying out the service)
    is_fake_user = db.Column(db.Boolean, default=False, nullable=False)
    is_test_user = db.Column(db.Boolean, default=False, nullable=False)

    # Relationships
    past_sessions = db.relationship(
        "Session", secondary=user_past_sessions, lazy="select", order_by=Session.created_at
    )
    notifications = db.relationship(
        "Notification",
        back_populates="volunteer",
        order_by=Notification.sent_at.desc(),
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        role = "volunteer" if self.is_volunteer else "student"
        return f"<User {self.email} ({role})>"

    @validates("email")
    def validate_email(self, key, value):
        """Store emails lower-cased"""
        return value.strip().lower() if value else value

    def set_phone(self, raw_phone):
        """Store a free-form phone input in canonical form"""
        self.phone = set_from_input(raw_phone)
        return self.phone

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def count_past_sessions(self):
        """Number of past sessions referenced by this user, without loading them"""
        if self.id is None:
            return len(self.past_sessions)
        try:
            return (
                db.session.query(func.count(user_past_sessions.c.session_id))
                .filter(user_past_sessions.c.user_id == self.id)
                .scalar()
                or 0
            )
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error counting sessions for user {self.id}: {str(e)}")
            return 0

    def get_last_notification(self):
        """Most recently sent notification to this volunteer, or None"""
        return (
            Notification.query.filter(
                Notification.volunteer_id == self.id, Notification.sent_at.isnot(None)
            )
            .order_by(Notification.sent_at.desc())
            .first()
        )

    def get_last_session(self):
        """Most recently created session this user volunteered in, or None"""
        return (
            Session.query.filter_by(volunteer_id=self.id)
            .order_by(Session.created_at.desc())
            .first()
        )

    @staticmethod
    def find_volunteers(include_fake=False, include_test=False):
        """Volunteer accounts eligible for outreach ranking"""
        query = User.query.filter(User.is_volunteer.is_(True))
        if not include_fake:
            query = query.filter(User.is_fake_user.is_(False))
        if not include_test:
            query = query.filter(User.is_test_user.is_(False))
        return query.order_by(User.id).all()
