"""Pytest configuration and fixtures for unit tests."""

from datetime import timedelta
from pathlib import Path

import pytest

from hausgeist.domain.create_models import TaskCreate
from hausgeist.domain.task import Task
from hausgeist.services.task_store import TaskStore
from tests.unit.factories import NOW, TODAY
from tests.unit.mocks import InMemoryDBClient


RULES_YAML = """
chores:
  - name: Daily chores incomplete
    schedule: daily_evening
    trigger:
      frequency: daily
      status: todo
      due_date: today
    action:
      type: remind
      message: "{{owner}} has {{count}} left: {{titles}}"
  - name: Recurring chore missed
    schedule: daily_morning
    trigger:
      recurring: true
      last_completed: "> frequency"
    action:
      type: alert
      priority: high
      message: "{{owner}} missed {{title}}"
  - name: Weekly chore summary
    schedule: weekly_sunday
    trigger:
      type: chore
    action:
      type: summary
      message: "Weekly summary"
inventory:
  - name: Clothes outgrown
    schedule: weekly_sunday
    trigger:
      type: inventory
      status: outgrown
    action:
      type: suggest
      message: "{{title}} is outgrown"
documents:
  - name: Passport expiring
    trigger:
      type: document
      due_date: "< 90 days"
    action:
      type: alert
      message: "{{title}} expires soon"
heartbeat:
  schedule: weekly_sunday
  include: [chores, inventory]
  format: markdown
"""


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient(now=lambda: NOW)


@pytest.fixture
def store(in_memory_db):
    """TaskStore over the in-memory database with a fixed today."""
    return TaskStore(in_memory_db, today=lambda: TODAY)


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """Rules document with chore, inventory and document rules."""
    path = tmp_path / "rules.yaml"
    path.write_text(RULES_YAML, encoding="utf-8")
    return path


@pytest.fixture
def add_task(store):
    """Create a chore through the store, with a relative due date in days."""

    async def _add(title: str, owner: str = "Ira", *, due_in: int | None = None, **fields) -> Task:
        due_date = TODAY + timedelta(days=due_in) if due_in is not None else None
        return await store.create(TaskCreate(title=title, owner=owner, due_date=due_date, **fields))

    return _add
