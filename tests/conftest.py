from __future__ import annotations

import os
import tempfile
from typing import Generator, Any

# Keep the app's own engine off the developer database during tests.
os.environ.setdefault("BUDGET_DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.orm import sessionmaker

from budget_tracker.core.database import Base, create_db_engine, get_db, init_db
from budget_tracker.core.deps import history_cache
from budget_tracker.main import app
from budget_tracker import models


@pytest.fixture(scope="session")
def test_db_url() -> Generator[str, Any, Any]:
    fd, path = tempfile.mkstemp(prefix="budget_test_", suffix=".sqlite3")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(test_db_url: str):
    eng = create_db_engine(test_db_url)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Any, Any, Any]:
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    # seed: demo user(1) with default settings
    user = models.User(email="demo@example.com", is_active=True)
    session.add(user)
    session.flush()
    session.add(models.UserSettings(user_id=user.id, currency="USD"))
    session.commit()

    try:
        yield session
    finally:
        session.close()
        # children before parents
        with engine.begin() as conn:
            for tbl in reversed(Base.metadata.sorted_tables):
                conn.execute(tbl.delete())


@pytest.fixture(autouse=True)
def override_dependency(db_session):
    def _get_db_override():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_override
    history_cache.clear()
    yield
    app.dependency_overrides.clear()
    history_cache.clear()


@pytest.fixture()
def client(db_session):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_category(client):
    def _make(name: str, icon: str = "🛒", type: str = "expense") -> dict:
        r = client.post("/api/categories", json={"name": name, "icon": icon, "type": type})
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def make_transaction(client):
    def _make(category: str, amount: float, date: str, type: str = "expense", description: str = "") -> dict:
        r = client.post("/api/transactions", json={
            "category": category,
            "amount": amount,
            "date": date,
            "type": type,
            "description": description,
        })
        assert r.status_code == 201, r.text
        return r.json()

    return _make
