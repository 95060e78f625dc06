"""Integration tests for the task store over SQLite."""

from datetime import date, timedelta

import pytest

from hausgeist.core.db_client import DatabaseError, RecordNotFoundError
from hausgeist.core.schema import ITEMS_COLLECTION, init_db, seed_sample_data
from hausgeist.domain.create_models import TaskCreate
from hausgeist.domain.task import ChoreStatus


@pytest.mark.integration
async def test_init_db_is_idempotent(db_client):
    await init_db(db_client)

    assert await db_client.list_records(collection=ITEMS_COLLECTION) == []


@pytest.mark.integration
async def test_seed_sample_data(db_client, sqlite_store):
    count = await seed_sample_data(db_client)

    assert count == 7
    open_chores = await sqlite_store.open_tasks()
    assert {t.title for t in open_chores} == {"Brush teeth (morning)", "Tidy toys", "Help set table"}
    assert all(t.recurring for t in open_chores)


@pytest.mark.integration
async def test_due_date_sort_puts_undated_last(sqlite_store):
    today = date.today()
    await sqlite_store.create(TaskCreate(title="Undated", owner="Ira"))
    await sqlite_store.create(TaskCreate(title="Later", owner="Ira", due_date=today + timedelta(days=3)))
    await sqlite_store.create(TaskCreate(title="Sooner", owner="Ira", due_date=today + timedelta(days=1)))

    assert [t.title for t in await sqlite_store.open_tasks("Ira")] == ["Sooner", "Later", "Undated"]


@pytest.mark.integration
async def test_archived_tasks_are_hidden(sqlite_store):
    task = await sqlite_store.create(TaskCreate(title="Tidy toys", owner="Ira"))

    await sqlite_store.archive(task.id)

    assert await sqlite_store.get(task.id) is None
    assert await sqlite_store.tasks_for_owner("Ira") == []


@pytest.mark.integration
async def test_complete_persists_default_points(sqlite_store):
    task = await sqlite_store.create(TaskCreate(title="Tidy toys", owner="Ira"))

    await sqlite_store.complete(task.id)

    stored = await sqlite_store.get(task.id)
    assert stored.status == ChoreStatus.DONE
    assert stored.points == 5


@pytest.mark.integration
async def test_overdue_and_due_today(sqlite_store):
    today = date.today()
    await sqlite_store.create(TaskCreate(title="Late", owner="Isha", due_date=today - timedelta(days=2)))
    await sqlite_store.create(TaskCreate(title="Now", owner="Ira", due_date=today))

    assert [t.title for t in await sqlite_store.tasks_overdue()] == ["Late"]
    assert [t.title for t in await sqlite_store.tasks_due_today()] == ["Now"]


@pytest.mark.integration
async def test_empty_title_rejected_by_database(db_client):
    with pytest.raises(DatabaseError):
        await db_client.create_record(collection=ITEMS_COLLECTION, data={"title": ""})


@pytest.mark.integration
async def test_update_missing_record(db_client):
    with pytest.raises(RecordNotFoundError):
        await db_client.update_record(collection=ITEMS_COLLECTION, record_id="42", data={"status": "done"})


@pytest.mark.integration
async def test_pagination(db_client):
    for i in range(5):
        await db_client.create_record(collection=ITEMS_COLLECTION, data={"title": f"Chore {i}"})

    page = await db_client.list_records(collection=ITEMS_COLLECTION, sort="+title", page=2, per_page=2)

    assert [r["title"] for r in page] == ["Chore 2", "Chore 3"]
