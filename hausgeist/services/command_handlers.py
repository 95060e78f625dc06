"""Command handlers: one async function per intent.

Each handler takes the task store handle and a parsed command and returns
the reply text. Missing slots and failed matches are answered with a prompt.
Store errors propagate to the message service.
"""

import logging
from datetime import date

from hausgeist.core import message_templates
from hausgeist.core.config import Constants, settings
from hausgeist.core.fuzzy_match import find_best_match
from hausgeist.core.grouping import group_by_owner
from hausgeist.core.logging import span
from hausgeist.domain.create_models import TaskCreate
from hausgeist.domain.task import ChoreStatus
from hausgeist.services.command_parser import ParsedCommand, Timeframe
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


def format_due_date(due: date, today: date) -> str:
    """Describe a due date relative to today ("tomorrow", "3 days ago", "17 Oct")."""
    diff_days = (due - today).days
    if diff_days == 0:
        return "today"
    if diff_days == 1:
        return "tomorrow"
    if diff_days == -1:
        return "yesterday"
    if diff_days < 0:
        return f"{abs(diff_days)} days ago"
    return f"{due.day} {due.strftime('%b')}"


async def handle_add_task(store: TaskStore, cmd: ParsedCommand) -> str:
    """Create a chore from an add_task command."""
    if not cmd.title:
        return message_templates.ADD_TASK_PROMPT

    owner = cmd.owner or settings.default_owner
    with span("command_handlers.add_task", owner=owner):
        task = await store.create(
            TaskCreate(title=cmd.title, owner=owner, recurring=cmd.recurring, frequency=cmd.frequency)
        )

    frequency = task.frequency if task.recurring else None
    return message_templates.task_added(title=task.title, owner=task.owner, frequency=frequency)


async def handle_complete_task(store: TaskStore, cmd: ParsedCommand) -> str:
    """Mark the open chore best matching the identifier as done."""
    if not cmd.task_identifier:
        return message_templates.COMPLETE_TASK_PROMPT

    with span("command_handlers.complete_task", owner=cmd.owner or "all"):
        tasks = await store.tasks_for_owner(cmd.owner) if cmd.owner else await store.open_tasks()
        open_tasks = [task for task in tasks if task.is_open]

        match = find_best_match(cmd.task_identifier, open_tasks)
        if match is None:
            logger.info(
                "No open task matched",
                extra={"identifier": cmd.task_identifier, "owner": cmd.owner, "candidates": len(open_tasks)},
            )
            return message_templates.task_not_found(identifier=cmd.task_identifier, owner=cmd.owner)

        completed = await store.complete(match.id)

    points = completed.points or Constants.DEFAULT_TASK_POINTS
    return message_templates.task_completed(title=completed.title, owner=completed.owner, points=points)


async def handle_list_tasks(store: TaskStore, cmd: ParsedCommand) -> str:
    """List open chores grouped by owner."""
    today_only = cmd.timeframe == Timeframe.TODAY

    with span("command_handlers.list_tasks", owner=cmd.owner or "all", timeframe=str(cmd.timeframe)):
        if today_only:
            tasks = await store.tasks_due_today()
            if cmd.owner:
                tasks = [task for task in tasks if task.owner == cmd.owner]
        elif cmd.owner:
            tasks = [task for task in await store.tasks_for_owner(cmd.owner) if task.is_open]
        else:
            tasks = await store.open_tasks()

    if not tasks:
        return message_templates.no_open_tasks(owner=cmd.owner)

    today = store.today()
    groups: dict[str, list[str]] = {}
    for owner, owner_tasks in group_by_owner(tasks).items():
        lines = []
        for task in owner_tasks:
            due = f" (due {format_due_date(task.due_date, today)})" if task.due_date else ""
            doing = " \U0001f504" if task.status == ChoreStatus.DOING else ""
            lines.append(f"{task.title}{due}{doing}")
        groups[owner] = lines

    return message_templates.task_list(groups=groups, today_only=today_only)


async def handle_summary(store: TaskStore, cmd: ParsedCommand) -> str:
    """Report this week's completions and overdue chores."""
    with span("command_handlers.summary", owner=cmd.owner or "all"):
        stats = await store.weekly_stats(cmd.owner)
        overdue = await store.tasks_overdue(cmd.owner)

    if stats.completed == 0 and not overdue:
        return message_templates.nothing_to_report(owner=cmd.owner)

    by_owner = {
        owner: (len(owner_tasks), sum(task.points or 0 for task in owner_tasks))
        for owner, owner_tasks in group_by_owner(stats.tasks).items()
    }
    return message_templates.weekly_summary(
        completed=stats.completed,
        points=stats.total_points,
        owner=cmd.owner,
        by_owner=by_owner,
        overdue=[(task.title, task.owner) for task in overdue],
        overdue_limit=Constants.OVERDUE_PREVIEW_LIMIT,
    )
