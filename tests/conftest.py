# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import get_settings
from taskboard.db.engine import connect, disconnect

from .fakes import FakeTaskServer, RecordingNotifier


@pytest.fixture()
async def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[Path]:
    """
    Fresh SQLite file per test.

    Settings are cached process-wide, so the cache is cleared and the
    engine disposed on both sides of the test.
    """
    db_path = tmp_path / "tasks.sqlite3"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    monkeypatch.setenv("DB_AUTO_CREATE", "true")
    monkeypatch.setenv("ENV", "development")
    get_settings.cache_clear()
    await disconnect()

    yield db_path

    await disconnect()
    get_settings.cache_clear()


@pytest.fixture()
async def session(database: Path) -> AsyncIterator[AsyncSession]:
    session_factory = await connect()
    async with session_factory() as db:
        yield db


@pytest.fixture()
async def api(database: Path) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client wired straight into the FastAPI app (no network)."""
    from taskboard.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def fake_server() -> FakeTaskServer:
    return FakeTaskServer()
