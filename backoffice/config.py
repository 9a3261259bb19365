import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent  # <project>
INSTANCE_DIR = BASE_DIR / "instance"


def _default_sqlite_uri():
    return f"sqlite:///{(INSTANCE_DIR / 'backoffice.db').as_posix()}"


def _flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or _default_sqlite_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # business calendar used for "today" and day/month windows
    BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Africa/Nairobi")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = _flag("LOG_JSON")

    # e.g. "REPEATABLE READ" on PostgreSQL; None keeps the driver default
    PAYROLL_ISOLATION_LEVEL = os.getenv("PAYROLL_ISOLATION_LEVEL") or None

    LOGIN_DISABLED = _flag("LOGIN_DISABLED")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOGIN_DISABLED = True
    LOG_LEVEL = "WARNING"
    LOG_JSON = False
    PAYROLL_ISOLATION_LEVEL = None


def ensure_instance(app):
    # Flask instance path
    os.makedirs(app.instance_path, exist_ok=True)
    INSTANCE_DIR.mkdir(parents=True, exist_ok=True)
