# tests/test_config.py

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskboard.config import Settings


def test_production_forbids_auto_create() -> None:
    with pytest.raises(ValidationError):
        Settings(ENV="production", DB_AUTO_CREATE=True)


def test_production_with_migrations() -> None:
    settings = Settings(ENV="production", DB_AUTO_CREATE=False, DATABASE_URL="postgresql+asyncpg://u:p@db/tasks")

    assert settings.DB_AUTO_CREATE is False


def test_schema_rejected_for_sqlite() -> None:
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="sqlite+aiosqlite:///./tasks.db", DB_SCHEMA="taskboard")


def test_schema_accepted_for_postgres() -> None:
    settings = Settings(DATABASE_URL="postgresql+asyncpg://u:p@db/tasks", DB_SCHEMA="taskboard")

    assert settings.db_backend == "postgresql"
    assert settings.DB_SCHEMA == "taskboard"


def test_table_args_only_carry_schema_on_postgres(monkeypatch: pytest.MonkeyPatch) -> None:
    from taskboard.db.models import base

    monkeypatch.setattr(base, "settings", Settings(DATABASE_URL="sqlite+aiosqlite:///./tasks.db"))
    assert base.schema_table_args() == {}

    monkeypatch.setattr(
        base, "settings", Settings(DATABASE_URL="postgresql+asyncpg://u:p@db/tasks", DB_SCHEMA="taskboard")
    )
    assert base.schema_table_args() == {"schema": "taskboard"}


def test_log_level_is_normalized() -> None:
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty")
