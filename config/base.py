# config/base.py
import os


def _coerce_bool(value, default=False):
    """Convert environment-style truthy/falsey values to bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    value_str = str(value).strip().lower()
    if value_str in {"1", "true", "yes", "on"}:
        return True
    if value_str in {"0", "false", "no", "off"}:
        return False
    return default


def _coerce_int(value, default, *, minimum=None, maximum=None):
    """Parse an integer setting, falling back to ``default`` when invalid or out of bounds."""
    if value is None or str(value).strip() == "":
        return default
    try:
        number = int(value)
    except ValueError:
        return default
    if minimum is not None and number < minimum:
        return default
    if maximum is not None and number > maximum:
        return default
    return number


class Config:
    _flask_env = os.environ.get("FLASK_ENV", "development")
    _is_testing = _flask_env == "testing"
    _is_production = _flask_env == "production"

    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Only require SECRET_KEY in production mode
    if not SECRET_KEY and _is_production:
        raise ValueError(
            "SECRET_KEY environment variable is required in production. "
            'Generate with: python -c "import secrets; print(secrets.token_hex(32))"'
        )

    if not SECRET_KEY and not _is_testing:
        import warnings

        warnings.warn(
            "SECRET_KEY not set. Using default for development only. "
            "Set SECRET_KEY environment variable for any shared deployment.",
            UserWarning,
        )
        SECRET_KEY = "dev-secret-key-change-in-production"

    if not SECRET_KEY:
        SECRET_KEY = "test-secret-key-placeholder"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_DIR = os.environ.get("LOG_DIR", "logs")
    ENABLE_FILE_LOGGING = _coerce_bool(os.environ.get("ENABLE_FILE_LOGGING"), default=False)
    ENABLE_CONSOLE_LOGGING = _coerce_bool(os.environ.get("ENABLE_CONSOLE_LOGGING"), default=True)

    # Partner organization manifests (JSON or YAML); bundled file when unset
    ORG_MANIFESTS_PATH = os.environ.get("ORG_MANIFESTS_PATH")

    # Volunteer derived values
    PHONE_AUTOCORRECT_ENABLED = _coerce_bool(os.environ.get("PHONE_AUTOCORRECT_ENABLED"), default=True)
    VOLUNTEER_RANKING_DEFAULT_LIMIT = _coerce_int(
        os.environ.get("VOLUNTEER_RANKING_DEFAULT_LIMIT"), 25, minimum=1, maximum=500
    )
    VOLUNTEER_RANKING_MAX_LIMIT = _coerce_int(
        os.environ.get("VOLUNTEER_RANKING_MAX_LIMIT"), 500, minimum=1, maximum=5000
    )

    # Background worker (phone corrections)
    CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL")
    CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND")
    CELERY_SQLITE_PATH = os.environ.get("CELERY_SQLITE_PATH")
    CELERY_CONFIG = os.environ.get("CELERY_CONFIG")


class DevelopmentConfig(Config):
    DEBUG = True
    # Use instance folder for database to avoid conflicts
    _config_dir = os.path.dirname(os.path.abspath(__file__))
    _project_root = os.path.dirname(_config_dir)
    instance_path = os.path.join(_project_root, "instance")

    if not os.path.exists(instance_path):
        os.makedirs(instance_path, exist_ok=True)

    # SQLite URI format: sqlite:///absolute/path (3 slashes for absolute path)
    db_path = os.path.join(instance_path, "volunteer_stats_dev.db").replace("\\", "/")
    db_uri = f"sqlite:///{db_path}"

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", db_uri)
    SQLALCHEMY_ECHO = _coerce_bool(os.environ.get("SQLALCHEMY_ECHO"), default=False)
    if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": 5,
            }
        }
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {}


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get("SECRET_KEY", "test-secret-key-for-testing-only")
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"  # In-memory database for testing
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {
            "check_same_thread": False,
            "timeout": 5,
        }
    }
    # Corrections run inline so tests can observe them
    CELERY_CONFIG = {"task_always_eager": True, "task_eager_propagates": False}


class ProductionConfig(Config):
    DEBUG = False
    uri = os.environ.get("DATABASE_URL")
    if uri and uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = uri
    SQLALCHEMY_ECHO = False
