import os

from dotenv import load_dotenv
load_dotenv()


def normalize_database_url(url: str) -> str:
    if url.startswith("mysql://"):
        return "mysql+pymysql://" + url[len("mysql://"):]
    return url


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # ======= FLASK =======
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    JSON_SORT_KEYS = False

    # ======= DATABASE =======
    SQLALCHEMY_DATABASE_URI = normalize_database_url(
        os.getenv("DATABASE_URL", "sqlite:///hydroplan.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ======= LOGGING =======
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # ======= DAILY PLAN SCHEDULER =======
    # Runs in UTC, plans are keyed by the UTC day.
    DAILY_PLAN_SCHEDULER_ENABLED = _as_bool(os.getenv("DAILY_PLAN_SCHEDULER_ENABLED"), True)
    DAILY_PLAN_CRON_HOUR = int(os.getenv("DAILY_PLAN_CRON_HOUR", "0"))
    DAILY_PLAN_CRON_MINUTE = int(os.getenv("DAILY_PLAN_CRON_MINUTE", "0"))
