# flask_app/models/session.py

from sqlalchemy import Index

from .base import BaseModel, db

# Association between a user and every session they took part in,
# as student or as volunteer
user_past_sessions = db.Table(
    "user_past_sessions",
    db.Column("user_id", db.Integer, db.ForeignKey("users.id"), primary_key=True),
    db.Column("session_id", db.Integer, db.ForeignKey("sessions.id"), primary_key=True),
)


class Session(BaseModel):
    """A tutoring session between a student and (once one joins) a volunteer"""

    __tablename__ = "sessions"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    volunteer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True, index=True)
    type = db.Column(db.String(50), nullable=True)  # e.g. "math", "college"
    sub_topic = db.Column(db.String(100), nullable=True)
    volunteer_joined_at = db.Column(db.DateTime(timezone=True), nullable=True)
    ended_at = db.Column(db.DateTime(timezone=True), nullable=True)

    # Relationships
    student = db.relationship("User", foreign_keys=[student_id])
    volunteer = db.relationship("User", foreign_keys=[volunteer_id])

    __table_args__ = (Index("idx_session_volunteer_created", "volunteer_id", "created_at"),)

    def __repr__(self):
        return f"<Session {self.id} ({self.type or 'unknown'})>"
