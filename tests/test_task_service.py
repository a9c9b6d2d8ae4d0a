# tests/test_task_service.py

from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas.task import TaskCreate, TaskUpdate
from app.core.exceptions import StorageError
from app.services.task import TaskService


async def test_create_applies_defaults(session: AsyncSession) -> None:
    task = await TaskService.create(session, TaskCreate(title="A"))

    assert task.id > 0
    assert task.title == "A"
    assert task.description == ""
    assert task.status == "pending"
    assert task.priority == "medium"
    assert task.due_date is None
    assert task.created_at is not None
    assert task.updated_at == task.created_at


async def test_create_keeps_supplied_fields(session: AsyncSession) -> None:
    task = await TaskService.create(
        session,
        TaskCreate(
            title="Ship release",
            description="Tag and publish",
            status="in-progress",
            priority="high",
            due_date="2026-12-01",
        ),
    )

    stored = await TaskService.find_by_id(session, task.id)
    assert stored is not None
    assert (stored.title, stored.description, stored.status, stored.priority, stored.due_date) == (
        "Ship release",
        "Tag and publish",
        "in-progress",
        "high",
        "2026-12-01",
    )


async def test_ids_increase_and_are_never_reused(session: AsyncSession) -> None:
    first = await TaskService.create(session, TaskCreate(title="one"))
    second = await TaskService.create(session, TaskCreate(title="two"))
    assert second.id > first.id

    assert await TaskService.delete(session, second.id) is True
    third = await TaskService.create(session, TaskCreate(title="three"))
    assert third.id > second.id


async def test_find_all_empty_store(session: AsyncSession) -> None:
    assert await TaskService.find_all(session) == []


async def test_find_all_newest_first(session: AsyncSession) -> None:
    titles = ["first", "second", "third"]
    for title in titles:
        await TaskService.create(session, TaskCreate(title=title))

    tasks = await TaskService.find_all(session)
    assert [t.title for t in tasks] == list(reversed(titles))


async def test_find_by_id_missing_returns_none(session: AsyncSession) -> None:
    assert await TaskService.find_by_id(session, 9999) is None


async def test_find_by_status_returns_exact_subset(session: AsyncSession) -> None:
    await TaskService.create(session, TaskCreate(title="p1"))
    await TaskService.create(session, TaskCreate(title="c1", status="completed"))
    await TaskService.create(session, TaskCreate(title="p2", status="pending"))
    await TaskService.create(session, TaskCreate(title="i1", status="in-progress"))

    pending = await TaskService.find_by_status(session, "pending")
    assert [t.title for t in pending] == ["p2", "p1"]
    assert [t.title for t in await TaskService.find_by_status(session, "completed")] == ["c1"]
    assert await TaskService.find_by_status(session, "bogus") == []


async def test_out_of_enum_status_is_stored_as_given(session: AsyncSession) -> None:
    # Write paths do not check status against TaskStatus
    task = await TaskService.create(session, TaskCreate(title="odd", status="archived"))
    assert task.status == "archived"
    assert [t.id for t in await TaskService.find_by_status(session, "archived")] == [task.id]


async def test_update_leaves_unspecified_fields_unchanged(session: AsyncSession) -> None:
    task = await TaskService.create(
        session,
        TaskCreate(title="A", description="keep me", priority="high", due_date="2026-01-31"),
    )
    before = (task.title, task.description, task.priority, task.due_date, task.created_at)
    previous_updated_at = task.updated_at

    updated = await TaskService.update(session, task.id, TaskUpdate(status="completed"))

    assert updated is not None
    assert updated.status == "completed"
    assert (updated.title, updated.description, updated.priority, updated.due_date, updated.created_at) == before
    assert updated.updated_at > previous_updated_at


async def test_updated_at_strictly_increases_on_repeated_updates(session: AsyncSession) -> None:
    task = await TaskService.create(session, TaskCreate(title="A"))
    stamps = [task.updated_at]
    for _ in range(5):
        task = await TaskService.update(session, task.id, TaskUpdate())
        stamps.append(task.updated_at)

    assert all(later > earlier for earlier, later in zip(stamps, stamps[1:]))


async def test_update_explicit_clears(session: AsyncSession) -> None:
    task = await TaskService.create(
        session, TaskCreate(title="A", description="text", due_date="2026-05-05")
    )

    updated = await TaskService.update(
        session, task.id, TaskUpdate(description=None, due_date=None)
    )

    assert updated.description == ""
    assert updated.due_date is None

    updated = await TaskService.update(session, task.id, TaskUpdate(due_date="2027-01-01"))
    assert updated.due_date == "2027-01-01"
    updated = await TaskService.update(session, task.id, TaskUpdate(due_date=""))
    assert updated.due_date is None


async def test_update_never_clears_required_fields(session: AsyncSession) -> None:
    task = await TaskService.create(session, TaskCreate(title="A", status="in-progress", priority="low"))

    updated = await TaskService.update(
        session, task.id, TaskUpdate(title="", status=None, priority="")
    )

    assert (updated.title, updated.status, updated.priority) == ("A", "in-progress", "low")


async def test_update_missing_returns_none(session: AsyncSession) -> None:
    assert await TaskService.update(session, 42, TaskUpdate(title="x")) is None


async def test_delete_missing_returns_false(session: AsyncSession) -> None:
    assert await TaskService.delete(session, 42) is False


async def test_delete_removes_row(session: AsyncSession) -> None:
    task = await TaskService.create(session, TaskCreate(title="gone"))

    assert await TaskService.delete(session, task.id) is True
    assert await TaskService.find_by_id(session, task.id) is None
    assert await TaskService.count(session) == 0


async def test_storage_failures_raise_storage_error(session: AsyncSession) -> None:
    await session.execute(text("DROP TABLE tasks"))
    await session.commit()

    with pytest.raises(StorageError) as exc_info:
        await TaskService.find_all(session)

    assert exc_info.value.message == "error fetching tasks"
    assert "tasks" in exc_info.value.detail


@pytest.mark.parametrize("task_id", [0, -5, 2**63, 10**30])
async def test_ids_outside_sqlite_range_match_nothing(session: AsyncSession, task_id: int) -> None:
    await TaskService.create(session, TaskCreate(title="A"))

    assert await TaskService.find_by_id(session, task_id) is None
    assert await TaskService.update(session, task_id, TaskUpdate(title="B")) is None
    assert await TaskService.delete(session, task_id) is False
    assert await TaskService.count(session) == 1
