"""Task store: chore CRUD and the pre-built queries the assistant relies on.

Every query only sees chores that are not archived. "Open" and "overdue"
exclude done chores by construction. Today and the week start (Monday) are
computed in local time.
"""

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

from hausgeist.core.config import Constants
from hausgeist.core.db_client import DatabaseError, DBClient, RecordNotFoundError, sanitize_param
from hausgeist.core.errors import StoreErrorCode, TaskStoreError
from hausgeist.core.logging import span
from hausgeist.core.schema import ITEMS_COLLECTION
from hausgeist.domain.create_models import TaskCreate, TaskStatusUpdate
from hausgeist.domain.task import ChoreStatus, ItemType, Task
from hausgeist.models.service_models import WeeklyStats


logger = logging.getLogger(__name__)

_ACTIVE_CHORES = f'type = "{ItemType.CHORE}" && archived = "0"'


def _owner_clause(owner: str | None) -> str:
    return f' && owner = "{sanitize_param(owner)}"' if owner else ""


def _error_code(error: Exception, code: StoreErrorCode) -> StoreErrorCode:
    """Report a missing schema as NOT_INITIALIZED instead of the operation code."""
    if "no such table" in str(error).lower():
        return StoreErrorCode.NOT_INITIALIZED
    return code


class TaskStore:
    """Chore operations over a record store handle."""

    def __init__(self, db: DBClient, *, today: Callable[[], date] = date.today) -> None:
        self._db = db
        self._today = today

    def today(self) -> date:
        return self._today()

    def week_start(self) -> date:
        """Monday of the current week."""
        today = self._today()
        return today - timedelta(days=today.weekday())

    async def _query(self, *, filter_query: str, sort: str, label: str) -> list[Task]:
        """Run a filtered, sorted query and collect every page of results."""
        per_page = Constants.DEFAULT_PER_PAGE_LIMIT
        records: list[dict[str, Any]] = []
        page = 1
        try:
            while True:
                batch = await self._db.list_records(
                    collection=ITEMS_COLLECTION,
                    filter_query=filter_query,
                    sort=sort,
                    page=page,
                    per_page=per_page,
                )
                records.extend(batch)
                if len(batch) < per_page:
                    break
                page += 1
        except (DatabaseError, ValueError) as e:
            logger.error("task_query_failed", extra={"query": label, "error": str(e)})
            msg = f"Failed to get {label}: {e}"
            raise TaskStoreError(msg, _error_code(e, StoreErrorCode.QUERY_FAILED)) from e
        return [Task.model_validate(record) for record in records]

    async def create(self, task: TaskCreate) -> Task:
        """Create a chore; status starts as todo unless given."""
        with span("task_store.create", owner=task.owner):
            data: dict[str, Any] = task.model_dump(mode="json", exclude_none=True)
            try:
                record = await self._db.create_record(collection=ITEMS_COLLECTION, data=data)
            except (DatabaseError, ValueError) as e:
                msg = f"Failed to create task: {e}"
                raise TaskStoreError(msg, _error_code(e, StoreErrorCode.CREATE_FAILED)) from e

            logger.info("Created task", extra={"task_id": record["id"], "owner": task.owner})
            return Task.model_validate(record)

    async def get(self, task_id: str) -> Task | None:
        """Fetch a task by id; None when it does not exist or was archived."""
        try:
            record = await self._db.get_record(collection=ITEMS_COLLECTION, record_id=task_id)
        except DatabaseError as e:
            msg = f"Failed to get task: {e}"
            raise TaskStoreError(msg, _error_code(e, StoreErrorCode.GET_FAILED)) from e

        if record is None or record.get("archived"):
            return None
        return Task.model_validate(record)

    async def _update(self, task_id: str, update: TaskStatusUpdate) -> Task:
        try:
            record = await self._db.update_record(
                collection=ITEMS_COLLECTION,
                record_id=task_id,
                data=update.model_dump(mode="json", exclude_none=True),
            )
        except (DatabaseError, RecordNotFoundError) as e:
            msg = f"Failed to update task status: {e}"
            raise TaskStoreError(msg, _error_code(e, StoreErrorCode.UPDATE_FAILED)) from e
        return Task.model_validate(record)

    async def set_status(self, task_id: str, status: ChoreStatus) -> Task:
        """Move a chore to a new status."""
        with span("task_store.set_status", task_id=task_id, status=str(status)):
            task = await self._update(task_id, TaskStatusUpdate(status=status))
            logger.info("Updated task status", extra={"task_id": task_id, "status": str(status)})
            return task

    async def complete(self, task_id: str, *, default_points: int = Constants.DEFAULT_TASK_POINTS) -> Task:
        """Mark a chore done, persisting default points when none were set."""
        with span("task_store.complete", task_id=task_id):
            current = await self.get(task_id)
            if current is None:
                msg = f"Failed to complete task: {task_id} not found"
                raise TaskStoreError(msg, StoreErrorCode.UPDATE_FAILED)

            points = None if current.points is not None else default_points
            task = await self._update(task_id, TaskStatusUpdate(status=ChoreStatus.DONE, points=points))
            logger.info("Completed task", extra={"task_id": task_id, "owner": task.owner, "points": task.points})
            return task

    async def archive(self, task_id: str) -> None:
        """Soft-delete a task."""
        try:
            await self._db.update_record(collection=ITEMS_COLLECTION, record_id=task_id, data={"archived": True})
        except (DatabaseError, RecordNotFoundError) as e:
            msg = f"Failed to delete task: {e}"
            raise TaskStoreError(msg, _error_code(e, StoreErrorCode.DELETE_FAILED)) from e
        logger.info("Archived task", extra={"task_id": task_id})

    async def open_tasks(self, owner: str | None = None) -> list[Task]:
        """Chores not yet done, earliest due first."""
        with span("task_store.open_tasks", owner=owner or "all"):
            return await self._query(
                filter_query=f'{_ACTIVE_CHORES} && status != "{ChoreStatus.DONE}"{_owner_clause(owner)}',
                sort="+due_date",
                label="open tasks",
            )

    async def tasks_for_owner(self, owner: str) -> list[Task]:
        """All chores of one owner, including done ones, earliest due first."""
        with span("task_store.tasks_for_owner", owner=owner):
            return await self._query(
                filter_query=f"{_ACTIVE_CHORES}{_owner_clause(owner)}",
                sort="+due_date",
                label=f"tasks for {owner}",
            )

    async def tasks_due_today(self) -> list[Task]:
        """Open chores due today, ordered by owner."""
        with span("task_store.tasks_due_today"):
            today = self._today().isoformat()
            return await self._query(
                filter_query=f'{_ACTIVE_CHORES} && due_date = "{today}" && status != "{ChoreStatus.DONE}"',
                sort="+owner",
                label="tasks for today",
            )

    async def tasks_completed_since(self, week_start: date, owner: str | None = None) -> list[Task]:
        """Chores done since the given date, most recently updated first."""
        with span("task_store.tasks_completed_since", owner=owner or "all"):
            return await self._query(
                filter_query=(
                    f'{_ACTIVE_CHORES} && status = "{ChoreStatus.DONE}" '
                    f'&& updated_at >= "{week_start.isoformat()}"{_owner_clause(owner)}'
                ),
                sort="-updated_at",
                label="completed tasks",
            )

    async def weekly_stats(self, owner: str | None = None) -> WeeklyStats:
        """Completed count and points since Monday."""
        tasks = await self.tasks_completed_since(self.week_start(), owner)
        return WeeklyStats(
            completed=len(tasks),
            total_points=sum(task.points or 0 for task in tasks),
            tasks=tasks,
        )

    async def tasks_overdue(self, owner: str | None = None) -> list[Task]:
        """Open chores with a due date before today, oldest first."""
        with span("task_store.tasks_overdue", owner=owner or "all"):
            today = self._today().isoformat()
            return await self._query(
                filter_query=(
                    f'{_ACTIVE_CHORES} && status != "{ChoreStatus.DONE}" && due_date < "{today}"{_owner_clause(owner)}'
                ),
                sort="+due_date",
                label="overdue tasks",
            )
