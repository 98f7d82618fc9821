from typing import Any

import pytest
from fastapi.testclient import TestClient

from core import db


class FakeDB:
    """
    Stands in for the asyncpg-backed helpers in `core.db`.

    Every call is recorded as (helper_name, sql, args). Return values are
    taken from the attributes below.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.one: dict[str, Any] | None = None
        self.rows: list[dict[str, Any]] = []
        self.val: Any = 0
        self.status = "DELETE 0"
        self.error: Exception | None = None

    def _record(self, name: str, sql: str, args: tuple[Any, ...]) -> None:
        self.calls.append((name, " ".join(sql.split()), args))
        if self.error is not None:
            raise self.error

    async def fetch_one(self, sql: str, *args: Any):
        self._record("fetch_one", sql, args)
        return self.one

    async def fetch_all(self, sql: str, *args: Any):
        self._record("fetch_all", sql, args)
        return list(self.rows)

    async def fetch_val(self, sql: str, *args: Any):
        self._record("fetch_val", sql, args)
        return self.val

    async def execute(self, sql: str, *args: Any):
        self._record("execute", sql, args)
        return self.status


@pytest.fixture
def fake_db(monkeypatch):
    fake = FakeDB()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    monkeypatch.setattr(db, "fetch_val", fake.fetch_val)
    monkeypatch.setattr(db, "execute", fake.execute)
    return fake


@pytest.fixture
def client():
    from main import app

    # No `with`: the lifespan (DB pool) is not started.
    test_client = TestClient(app)
    yield test_client
    test_client.close()
