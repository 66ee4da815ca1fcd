"""
Background tasks for volunteer records.
"""

from .celery_app import DEFAULT_QUEUE_NAME, get_celery_app, init_tasks
from .phone import CORRECT_PHONE_TASK, enqueue_phone_correction

__all__ = [
    "CORRECT_PHONE_TASK",
    "DEFAULT_QUEUE_NAME",
    "enqueue_phone_correction",
    "get_celery_app",
    "init_tasks",
]
