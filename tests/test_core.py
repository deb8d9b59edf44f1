import io
import logging

import pytest
from sqlalchemy.exc import IntegrityError

from budget_tracker import models
from budget_tracker.core.config import settings
from budget_tracker.core.database import create_db_engine, sqlite_pragmas
from budget_tracker.logging_setup import configure_logging, get_logger


def test_sqlite_pragmas_follow_settings(monkeypatch):
    assert sqlite_pragmas() == {"foreign_keys": "ON", "journal_mode": "WAL"}
    monkeypatch.setattr(settings, "SQLITE_FOREIGN_KEYS", False)
    monkeypatch.setattr(settings, "SQLITE_JOURNAL_MODE", "")
    assert sqlite_pragmas() == {"foreign_keys": "OFF"}


def test_engine_applies_pragmas_on_connect(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "SQLITE_JOURNAL_MODE", "DELETE")
    eng = create_db_engine(f"sqlite:///{tmp_path / 'pragmas.sqlite3'}")
    try:
        with eng.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
            assert conn.exec_driver_sql("PRAGMA journal_mode").scalar().lower() == "delete"
    finally:
        eng.dispose()


def test_foreign_keys_enforced_on_test_engine(db_session):
    db_session.add(models.UserSettings(user_id=9999, currency="USD"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_configure_logging_reuses_one_handler():
    first, second = io.StringIO(), io.StringIO()
    logger = configure_logging("DEBUG", fmt="%(levelname)s %(message)s", stream=first)
    configure_logging("debug", fmt="%(levelname)s %(message)s", stream=second)
    try:
        own = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(own) == 1
        get_logger("budget_tracker.tests").debug("hello %s", "there")
        assert first.getvalue() == ""
        assert second.getvalue() == "DEBUG hello there\n"
    finally:
        configure_logging(settings.LOG_LEVEL, stream=io.StringIO())


def test_unknown_level_falls_back_to_info():
    logger = configure_logging("chatty", stream=io.StringIO())
    assert logger.level == logging.INFO
