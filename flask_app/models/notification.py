# flask_app/models/notification.py

from sqlalchemy import Index

from .base import BaseModel, db, utc_now


class Notification(BaseModel):
    """An outreach notification sent to a volunteer"""

    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    volunteer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    session_id = db.Column(db.Integer, db.ForeignKey("sessions.id"), nullable=True)
    method = db.Column(db.String(20), default="sms", nullable=False)  # sms, voice, email
    sent_at = db.Column(db.DateTime(timezone=True), default=utc_now, nullable=True)

    # Relationships
    volunteer = db.relationship("User", back_populates="notifications")
    session = db.relationship("Session")

    __table_args__ = (Index("idx_notification_volunteer_sent", "volunteer_id", "sent_at"),)

    def __repr__(self):
        return f"<Notification {self.method} to volunteer={self.volunteer_id}>"
