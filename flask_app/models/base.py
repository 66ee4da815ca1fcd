# flask_app/models/base.py

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utc_now():
    """Timezone-aware current time used for column defaults"""
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """Abstract base carrying audit timestamps shared by every table"""

    __abstract__ = True

    created_at = db.Column(db.DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )
