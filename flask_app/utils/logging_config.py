# flask_app/utils/logging_config.py
"""
Application logging setup: console output plus an optional rotating log file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from flask.logging import default_handler

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
_HANDLER_MARKER = "_volunteer_stats_handler"


def _tag(handler):
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def setup_logging(app):
    """
    Configure ``app.logger`` from LOG_LEVEL, ENABLE_CONSOLE_LOGGING and
    ENABLE_FILE_LOGGING. Safe to call again after the config changes.
    """
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    # Drop handlers added by a previous call
    for handler in list(app.logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            app.logger.removeHandler(handler)
            handler.close()

    app.logger.setLevel(level)

    if app.config.get("ENABLE_CONSOLE_LOGGING", True):
        console_handler = _tag(logging.StreamHandler())
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        app.logger.addHandler(console_handler)

    if app.config.get("ENABLE_FILE_LOGGING", False):
        log_dir = app.config.get("LOG_DIR", "logs")
        os.makedirs(log_dir, exist_ok=True)
        file_handler = _tag(
            RotatingFileHandler(
                os.path.join(log_dir, "volunteer_stats.log"),
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
            )
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)

    # Flask's default handler would duplicate every record
    app.logger.removeHandler(default_handler)

    if not app.config.get("SQLALCHEMY_ECHO", False):
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    app.logger.debug(f"Logging configured at level {level_name}")
