from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, declared_attr

from budget_tracker.logging_setup import get_logger

from .config import settings

_logger = get_logger("budget_tracker.core.database")


class Base(DeclarativeBase):
    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore[override]
        return cls.__name__.lower()


def sqlite_pragmas() -> dict[str, str]:
    """Pragmas applied to every new SQLite connection, taken from settings."""
    pragmas = {"foreign_keys": "ON" if settings.SQLITE_FOREIGN_KEYS else "OFF"}
    if settings.SQLITE_JOURNAL_MODE:
        pragmas["journal_mode"] = settings.SQLITE_JOURNAL_MODE
    return pragmas


def create_db_engine(url: str | None = None) -> Engine:
    """Engine for ``url`` (default ``settings.DATABASE_URL``).

    SQLite engines share connections across threads (FastAPI runs sync
    endpoints in a pool) and run :func:`sqlite_pragmas` on connect.
    """
    url = url or settings.DATABASE_URL
    is_sqlite = url.startswith("sqlite")
    eng = create_engine(
        url,
        echo=settings.DATABASE_ECHO,
        connect_args={"check_same_thread": False} if is_sqlite else {},
    )
    if is_sqlite:
        pragmas = sqlite_pragmas()

        @event.listens_for(eng, "connect")
        def _apply_pragmas(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            for name, value in pragmas.items():
                cursor.execute(f"PRAGMA {name}={value}")
            cursor.close()

    return eng


engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables on ``bind`` (the app engine by default)."""
    from budget_tracker import models  # noqa: F401  registers mappers on Base

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    _logger.info("database ready at %s (%d tables)", bind.url.render_as_string(hide_password=True),
                 len(Base.metadata.tables))
