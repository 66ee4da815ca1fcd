"""
Phone self-correction task and its fire-and-forget dispatcher.
"""

from __future__ import annotations

from typing import Any

from celery import shared_task
from flask import current_app

from flask_app.services.phone_correction_service import apply_phone_correction

from .celery_app import get_celery_app

CORRECT_PHONE_TASK = "volunteers.correct_phone"


@shared_task(name=CORRECT_PHONE_TASK, bind=True)
def correct_volunteer_phone(self, *, user_id: int, old_phone: str, new_phone: str) -> dict[str, Any]:
    corrected = apply_phone_correction(user_id, old_phone, new_phone)
    return {"user_id": user_id, "corrected": corrected}


def enqueue_phone_correction(user_id: int, old_phone: str, new_phone: str) -> str | None:
    """
    Queue a phone correction without waiting for it.

    Returns the task id, or None when the task could not be queued; queueing
    failures are logged and never reach the caller.
    """
    celery_app = get_celery_app(current_app)
    if celery_app is None:
        current_app.logger.warning(
            f"Task worker not configured; phone correction for user {user_id} not queued"
        )
        return None

    task = celery_app.tasks.get(CORRECT_PHONE_TASK)
    if task is None:
        current_app.logger.error(f"Task {CORRECT_PHONE_TASK!r} is not registered")
        return None

    try:
        async_result = task.apply_async(
            kwargs={"user_id": user_id, "old_phone": old_phone, "new_phone": new_phone}
        )
    except Exception as exc:
        current_app.logger.exception(
            "Failed to enqueue phone correction",
            extra={"user_id": user_id},
            exc_info=exc,
        )
        return None

    current_app.logger.debug(
        "Phone correction enqueued",
        extra={"user_id": user_id, "task_id": async_result.id},
    )
    return async_result.id
