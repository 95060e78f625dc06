"""End-to-end tests: chat messages and CLI commands against a real database."""

import pytest

from hausgeist import main as main_module
from hausgeist.core.db_client import DBClient
from hausgeist.core.errors import ErrorCategory, StoreErrorCode, TaskStoreError, classify_error
from hausgeist.domain.create_models import TaskCreate
from hausgeist.rules.heartbeat import generate_heartbeat
from hausgeist.services.message_service import handle_message
from hausgeist.services.task_store import TaskStore


@pytest.mark.integration
async def test_add_complete_and_summarize(sqlite_store):
    reply = await handle_message(sqlite_store, "Add task for Ira: water the plants")
    assert "water the plants" in reply
    assert [t.title for t in await sqlite_store.open_tasks("Ira")] == ["water the plants"]

    reply = await handle_message(sqlite_store, "Ira finished water the plants")
    assert "water the plants" in reply
    assert await sqlite_store.open_tasks("Ira") == []

    stats = await sqlite_store.weekly_stats("Ira")
    assert stats.completed >= 1
    assert stats.total_points >= 1

    reply = await handle_message(sqlite_store, "Ira finished water the plants")
    assert "couldn't find" in reply.lower()


@pytest.mark.integration
async def test_list_after_add(sqlite_store):
    await handle_message(sqlite_store, "Isha needs to feed the fish")

    reply = await handle_message(sqlite_store, "What's left for Isha?")

    assert "feed the fish" in reply


@pytest.fixture
def quiet_logfire(monkeypatch):
    monkeypatch.setattr(main_module, "configure_logfire", lambda: None)


@pytest.mark.integration
def test_cli_init_add_and_report(db_file, quiet_logfire, capsys):
    db = str(db_file)

    assert main_module.main(["--db-path", db, "init-db", "--with-samples"]) == 0
    assert "7 sample items added" in capsys.readouterr().out

    assert main_module.main(["--db-path", db, "task", "Add", "task", "for", "Ira:", "feed", "the", "cat"]) == 0
    assert "feed the cat" in capsys.readouterr().out

    assert main_module.main(["--db-path", db, "heartbeat"]) == 0
    assert "Hausgeist Weekly Report" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_missing_message(db_file, quiet_logfire, capsys):
    assert main_module.main(["--db-path", str(db_file), "task"]) == 1
    assert "Usage: hausgeist task" in capsys.readouterr().err


@pytest.fixture
async def busy_store(sqlite_store):
    """130 open chores for Ira, more than one page of query results."""
    for number in range(1, 131):
        await sqlite_store.create(TaskCreate(title=f"chore {number}", owner="Ira"))
    return sqlite_store


@pytest.mark.integration
async def test_heartbeat_counts_every_open_task(busy_store):
    report = await generate_heartbeat(busy_store)

    assert report.open_tasks.total == 130
    assert report.open_tasks.by_owner == {"Ira": 130}


@pytest.mark.integration
async def test_list_counts_every_open_task(busy_store):
    reply = await handle_message(busy_store, "What's left?")

    assert reply.endswith("130 tasks total.")
    assert "- chore 130\n" in reply


@pytest.mark.integration
async def test_complete_task_beyond_first_page(busy_store):
    reply = await handle_message(busy_store, "Ira finished chore 120")

    assert '"chore 120" is done' in reply
    open_titles = {t.title for t in await busy_store.open_tasks("Ira")}
    assert "chore 120" not in open_titles
    assert "chore 1" in open_titles
    assert len(open_titles) == 129


@pytest.mark.integration
async def test_uninitialized_database(db_file):
    client = await DBClient.connect(str(db_file))
    try:
        store = TaskStore(client)

        with pytest.raises(TaskStoreError) as exc_info:
            await store.open_tasks()

        assert exc_info.value.code == StoreErrorCode.NOT_INITIALIZED
        assert classify_error(exc_info.value).category == ErrorCategory.STORE_UNAVAILABLE
    finally:
        await client.close()
