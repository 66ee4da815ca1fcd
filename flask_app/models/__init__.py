# flask_app/models/__init__.py
"""
Database models package
"""

from .base import BaseModel, db
from .notification import Notification
from .session import Session, user_past_sessions
from .user import User

__all__ = [
    "db",
    "BaseModel",
    "User",
    "Session",
    "Notification",
    "user_past_sessions",
]
