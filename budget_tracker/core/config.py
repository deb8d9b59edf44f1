from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    APP_NAME: str = "Budget Tracker"
    ENV: str = "dev"

    # SQLite file next to the package so the CWD does not change the DB location
    _default_db_path = Path(__file__).resolve().parents[2] / "budget_tracker.sqlite3"
    DATABASE_URL: str = f"sqlite:///{_default_db_path}"
    DATABASE_ECHO: bool = False
    SQLITE_FOREIGN_KEYS: bool = True
    # empty keeps the SQLite default
    SQLITE_JOURNAL_MODE: str = "WAL"

    CORS_ORIGINS: list[str] = ["*"]

    DEFAULT_CURRENCY: str = "USD"
    MAX_DATE_RANGE_DAYS: int = 90
    TABLE_PAGE_SIZE: int = 8
    HISTORY_CACHE_SIZE: int = 128

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(name)s %(levelname)s %(message)s"

    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="BUDGET_", case_sensitive=False)


settings = Settings()
