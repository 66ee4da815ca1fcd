"""
Celery configuration for background volunteer maintenance tasks.

Defaults to a SQLite transport in the Flask instance folder so local
development does not need Redis; ``CELERY_BROKER_URL`` and
``CELERY_RESULT_BACKEND`` switch to a real broker.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from celery import Celery
from flask import Flask
from kombu import Queue

DEFAULT_QUEUE_NAME = "volunteers"
DEFAULT_SQLITE_FILENAME = "celery.sqlite"
TASKS_EXTENSION_KEY = "volunteer_tasks"


def _sqlite_url(app: Flask, scheme: str) -> str:
    # CELERY_SQLITE_PATH may be relative to the instance folder
    sqlite_path = Path(app.config.get("CELERY_SQLITE_PATH") or DEFAULT_SQLITE_FILENAME)
    if not sqlite_path.is_absolute():
        sqlite_path = Path(app.instance_path) / sqlite_path
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    return f"{scheme}:///{sqlite_path.as_posix()}"


def broker_urls(app: Flask) -> tuple[str, str]:
    """(broker_url, result_backend), each falling back to the SQLite transport."""
    broker_url = app.config.get("CELERY_BROKER_URL") or _sqlite_url(app, "sqla+sqlite")
    result_backend = app.config.get("CELERY_RESULT_BACKEND") or _sqlite_url(app, "db+sqlite")
    return broker_url, result_backend


def _extra_conf(app: Flask) -> Mapping[str, Any]:
    """CELERY_CONFIG overrides, given either as a mapping or a JSON object string."""
    raw = app.config.get("CELERY_CONFIG")
    if not raw:
        return {}
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            app.logger.warning("CELERY_CONFIG is not valid JSON; ignoring value.", exc_info=True)
            return {}
    return raw


def create_celery_app(app: Flask) -> Celery:
    """
    Create a Celery instance bound to the given Flask app. Tasks run inside
    the Flask application context.
    """
    broker_url, result_backend = broker_urls(app)
    celery_app = Celery(
        app.import_name,
        broker=broker_url,
        backend=result_backend,
        include=("flask_app.tasks.phone",),
    )

    celery_app.conf.update(
        task_default_queue=DEFAULT_QUEUE_NAME,
        task_queues=[Queue(DEFAULT_QUEUE_NAME)],
        task_acks_late=True,
        worker_prefetch_multiplier=1,
        # Nothing reads task results
        task_ignore_result=True,
        broker_connection_retry_on_startup=True,
        task_time_limit=app.config.get("VOLUNTEER_TASK_TIME_LIMIT", 60),
        worker_hijack_root_logger=False,
    )
    celery_app.conf.update(_extra_conf(app))
    logging.getLogger("celery.worker.strategy").setLevel(logging.WARNING)
    app.logger.debug(f"Volunteer tasks routed to {DEFAULT_QUEUE_NAME!r} via {broker_url}")

    class FlaskContextTask(celery_app.Task):  # type: ignore[misc]
        """Runs each task inside the Flask application context."""

        def __call__(self, *args, **kwargs):
            with app.app_context():
                return super().__call__(*args, **kwargs)

    celery_app.Task = FlaskContextTask  # type: ignore[assignment]
    celery_app.loader.import_default_modules()
    return celery_app


def init_tasks(app: Flask) -> Celery:
    """Create the Celery instance and cache it on ``app.extensions``."""
    celery_app = create_celery_app(app)
    app.extensions[TASKS_EXTENSION_KEY] = celery_app
    return celery_app


def get_celery_app(app: Flask) -> Celery | None:
    return app.extensions.get(TASKS_EXTENSION_KEY)
