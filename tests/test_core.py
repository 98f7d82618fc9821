import asyncio
import logging
from datetime import date

import pytest

from core import db, log_config, settings
from core.middleware import level_for_status
from pageable.builder import QueryPlan


def test_database_url_prefers_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/cv?sslmode=disable&application_name=cv")
    assert db.database_url() == "postgresql://u:p@db:5432/cv?application_name=cv"


def test_database_url_from_postgres_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_HOST", "pg")
    monkeypatch.setenv("POSTGRES_PORT", "6543")
    monkeypatch.setenv("POSTGRES_USER", "cv")
    monkeypatch.setenv("POSTGRES_PASSWORD", "p@ss")
    monkeypatch.setenv("POSTGRES_DB", "resume")
    assert settings.database_url() == "postgresql://cv:p%40ss@pg:6543/resume"


def test_pool_sizes_fall_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "three")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "0")
    assert settings.db_pool_min_size() == 1
    assert settings.db_pool_max_size() == 1


def test_cors_origins(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://cv.example, ,http://localhost:3000")
    assert settings.cors_origins() == ["https://cv.example", "http://localhost:3000"]
    monkeypatch.delenv("CORS_ORIGINS")
    assert settings.cors_origins() == list(settings.DEFAULT_CORS_ORIGINS)


def test_log_levels():
    assert log_config.level_from_name("debug") == logging.DEBUG
    assert log_config.level_from_name("INFO") == logging.INFO
    assert log_config.level_from_name("warn") == logging.WARNING
    assert log_config.level_from_name("verbose") == logging.ERROR


def test_configure_logging_sets_level_and_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "info")
    monkeypatch.setenv("APP_ENV", "test")
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_config.configure_logging()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        assert root.handlers[0].filter(record)
        assert record.app_env == "test"
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_request_log_level_follows_status():
    assert level_for_status(200) == logging.INFO
    assert level_for_status(404) == logging.WARNING
    assert level_for_status(503) == logging.ERROR


def test_column_converter():
    convert = db.column_converter({"id": int, "period_start": date.fromisoformat})
    assert convert("id", " 42 ") == 42
    assert convert("id", "4x") == "4x"
    assert convert("period_start", "2021-02-03") == date(2021, 2, 3)
    assert convert("name", "42") == "42"


def test_affected_rows():
    assert db.affected_rows("DELETE 3") == 3
    assert db.affected_rows("UPDATE 0") == 0
    assert db.affected_rows("") == 0


def test_fetch_page_runs_count_then_select(fake_db):
    fake_db.val = 12
    fake_db.rows = [{"id": 1}, {"id": 2}]
    plan = QueryPlan(
        select_sql="SELECT id FROM t WHERE id > $1 LIMIT $2",
        count_sql="SELECT COUNT(*) FROM (SELECT id FROM t WHERE id > $1) as subquery",
        select_params=[0, 10],
        count_params=[0],
    )

    total, items = asyncio.run(db.fetch_page(plan, lambda row: row["id"]))

    assert total == 12
    assert items == [1, 2]
    assert [(name, args) for name, _, args in fake_db.calls] == [("fetch_val", (0,)), ("fetch_all", (0, 10))]


def test_pool_requires_init():
    with pytest.raises(RuntimeError, match="not initialized"):
        db.pool()
