"""Weekly heartbeat: household-wide completion and open-work report."""

import asyncio
import logging

from hausgeist.core.config import settings
from hausgeist.core.logging import span
from hausgeist.models.service_models import ChoreSummary, HeartbeatReport, OpenTaskSummary, OwnerCompletions
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


async def generate_heartbeat(store: TaskStore) -> HeartbeatReport:
    """Build the weekly report from live data.

    The three queries are independent and run concurrently. Inventory,
    document and suggestion lists stay empty.
    """
    with span("heartbeat.generate"):
        stats, open_tasks, overdue = await asyncio.gather(
            store.weekly_stats(),
            store.open_tasks(),
            store.tasks_overdue(),
        )

        by_owner: dict[str, OwnerCompletions] = {}
        for task in stats.tasks:
            entry = by_owner.setdefault(task.owner or settings.default_owner, OwnerCompletions())
            entry.count += 1
            entry.points += task.points or 0

        # Strict > keeps the first owner on ties; zero completions never wins
        top_performer: str | None = None
        top_count = 0
        for owner, completions in by_owner.items():
            if completions.count > top_count:
                top_count = completions.count
                top_performer = owner

        open_by_owner: dict[str, int] = {}
        for task in open_tasks:
            owner = task.owner or settings.default_owner
            open_by_owner[owner] = open_by_owner.get(owner, 0) + 1

        report = HeartbeatReport(
            chore_summary=ChoreSummary(
                completed=stats.completed,
                total_points=stats.total_points,
                by_owner=by_owner,
                top_performer=top_performer,
            ),
            open_tasks=OpenTaskSummary(total=len(open_tasks), overdue=len(overdue), by_owner=open_by_owner),
        )

    logger.info(
        "Generated heartbeat",
        extra={"completed": stats.completed, "open": len(open_tasks), "overdue": len(overdue)},
    )
    return report


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def format_heartbeat(report: HeartbeatReport) -> str:
    """Render the report as a chat message."""
    chores = report.chore_summary
    open_tasks = report.open_tasks
    lines = ["\U0001f47b **Hausgeist Weekly Report**", "", "\U0001f4cb **Chores**"]

    if chores.completed > 0:
        lines.append(f"Completed this week: {chores.completed}")
        lines.append(f"Points earned: {chores.total_points} ⭐")
        if chores.top_performer:
            lines.append(f"Top performer: {chores.top_performer} \U0001f3c6")
        lines.append("")
        for owner, completions in chores.by_owner.items():
            lines.append(f"  {owner}: {_plural(completions.count, 'task')} ({completions.points} pts)")
    else:
        lines.append("No tasks completed this week.")

    lines.extend(["", "\U0001f4cc **Still Open**"])
    if open_tasks.total > 0:
        lines.append(_plural(open_tasks.total, "open task"))
        if open_tasks.overdue > 0:
            lines.append(f"⚠️ {open_tasks.overdue} overdue!")
        for owner, count in open_tasks.by_owner.items():
            lines.append(f"  {owner}: {count}")
    else:
        lines.append("All clear! \U0001f389")

    optional_sections = (
        ("\U0001f455 **Inventory**", report.inventory_alerts),
        ("\U0001f4c4 **Documents**", report.document_alerts),
        ("\U0001f4a1 **Suggestions**", report.suggestions),
    )
    for heading, items in optional_sections:
        if items:
            lines.extend(["", heading])
            lines.extend(f"- {item}" for item in items)

    lines.extend(["", "Have a great week! \U0001f47b"])
    return "\n".join(lines)
