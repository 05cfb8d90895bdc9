import os
from dotenv import load_dotenv

load_dotenv()


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "") else default


def _env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v in (None, ""):
        return default
    return str(v).strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _database_url() -> str:
    """Resolve the database URL from DATABASE_URL or the POSTGRES_* variables"""
    url = _env("DATABASE_URL")
    if url:
        return url

    host = _env("POSTGRES_ADDR")
    if not host:
        return "sqlite:///./orders.db"

    return "postgresql+psycopg://{user}:{password}@{host}:{port}/{db}".format(
        user=_env("POSTGRES_USER", "postgres"),
        password=_env("POSTGRES_PASSWORD", ""),
        host=host,
        port=_env("POSTGRES_PORT", "5432"),
        db=_env("POSTGRES_DB", "orders"),
    )


class Settings:
    """Runtime settings for the order service"""

    def __init__(
        self,
        database_url: str = None,
        host: str = None,
        port: int = None,
        auto_migrate: bool = None,
        log_level: str = None,
        db_echo: bool = None,
    ):
        self.database_url = database_url or _database_url()
        self.host = host or _env("APP_HOST", "0.0.0.0")
        self.port = port or int(_env("APP_PORT", 8080))
        self.auto_migrate = _env_bool("AUTO_MIGRATE", True) if auto_migrate is None else auto_migrate
        self.log_level = (log_level or _env("LOG_LEVEL", "INFO")).upper()
        self.db_echo = _env_bool("DB_ECHO", False) if db_echo is None else db_echo
