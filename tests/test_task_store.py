# tests/test_task_store.py

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import get_settings
from taskboard.db.engine import connect, disconnect, is_connected
from taskboard.tasks.errors import StoreUnavailableError, TaskNotFoundError, TaskValidationError
from taskboard.tasks.store import TaskStore


async def test_create_defaults_to_low_priority_and_pending(session: AsyncSession) -> None:
    store = TaskStore(session)

    task = await store.create("Buy milk")

    assert task.id is not None
    assert task.title == "Buy milk"
    assert task.priority == "low"
    assert task.completed is False


@pytest.mark.parametrize("title", [None, "", "   ", 42])
async def test_create_without_title_fails_and_leaves_collection_unchanged(
    session: AsyncSession, title: object
) -> None:
    store = TaskStore(session)
    await store.create("existing")

    with pytest.raises(TaskValidationError) as exc_info:
        await store.create(title, "high")

    assert exc_info.value.message == "Title is required"
    assert [t.title for t in await store.find_all()] == ["existing"]


async def test_create_keeps_long_titles_intact(session: AsyncSession) -> None:
    store = TaskStore(session)
    title = "Read " + "very " * 200 + "long book"

    await store.create(title)

    assert [t.title for t in await store.find_all()] == [title]


async def test_create_rejects_unknown_priority(session: AsyncSession) -> None:
    store = TaskStore(session)

    with pytest.raises(TaskValidationError):
        await store.create("Write report", "urgent")

    assert await store.find_all() == []


async def test_find_all_empty(session: AsyncSession) -> None:
    assert await TaskStore(session).find_all() == []


async def test_ids_are_unique(session: AsyncSession) -> None:
    store = TaskStore(session)
    for i in range(10):
        await store.create(f"task {i}", ("low", "medium", "high")[i % 3])

    ids = [t.id for t in await store.find_all()]
    assert len(ids) == 10
    assert len(set(ids)) == 10


async def test_double_toggle_restores_completed(session: AsyncSession) -> None:
    store = TaskStore(session)
    task = await store.create("Walk the dog", "medium")
    task_id = str(task.id)

    first = await store.update_by_id(task_id, completed=True)
    assert first.completed is True

    second = await store.update_by_id(task_id, completed=False)
    assert second.completed is False
    assert second.title == "Walk the dog"
    assert second.priority == "medium"


async def test_update_only_touches_given_fields(session: AsyncSession) -> None:
    store = TaskStore(session)
    task = await store.create("Pay rent")
    task_id = str(task.id)
    await store.update_by_id(task_id, completed=True)

    updated = await store.update_by_id(task_id, priority="high")

    assert updated.priority == "high"
    assert updated.completed is True


async def test_update_completed_and_priority_together(session: AsyncSession) -> None:
    store = TaskStore(session)
    task = await store.create("Call mom")

    updated = await store.update_by_id(str(task.id), completed=True, priority="medium")

    assert (updated.completed, updated.priority) == (True, "medium")


@pytest.mark.parametrize("task_id", ["0190f1a2-0000-7000-8000-000000000000", "not-a-uuid"])
async def test_update_missing_task_raises_not_found(session: AsyncSession, task_id: str) -> None:
    with pytest.raises(TaskNotFoundError):
        await TaskStore(session).update_by_id(task_id, completed=True)


async def test_update_rejects_unknown_priority(session: AsyncSession) -> None:
    store = TaskStore(session)
    task = await store.create("Clean desk")

    with pytest.raises(TaskValidationError):
        await store.update_by_id(str(task.id), priority="asap")

    assert (await store.find_all())[0].priority == "low"


async def test_delete_removes_task(session: AsyncSession) -> None:
    store = TaskStore(session)
    keep = await store.create("keep")
    drop = await store.create("drop")

    assert await store.delete_by_id(str(drop.id)) is True

    assert [t.id for t in await store.find_all()] == [keep.id]


@pytest.mark.parametrize("task_id", ["0190f1a2-0000-7000-8000-000000000000", "garbage"])
async def test_delete_missing_task_is_silent(session: AsyncSession, task_id: str) -> None:
    store = TaskStore(session)
    await store.create("survivor")

    assert await store.delete_by_id(task_id) is False
    assert [t.title for t in await store.find_all()] == ["survivor"]


async def test_connect_is_idempotent(database: Path) -> None:
    first = await connect()
    second = await connect()

    assert first is second
    assert is_connected()

    await disconnect()
    assert not is_connected()


async def test_connect_to_unreachable_store_raises(
    database: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'tasks.db'}")
    get_settings.cache_clear()
    await disconnect()

    with pytest.raises(StoreUnavailableError):
        await connect()

    assert not is_connected()
