"""Grouping helpers shared by chat replies, rule messages and reports."""

from collections.abc import Sequence

from hausgeist.core.config import settings
from hausgeist.domain.task import Task


def group_by_owner(tasks: Sequence[Task]) -> dict[str, list[Task]]:
    """Group tasks by owner, keeping first-seen owner order."""
    groups: dict[str, list[Task]] = {}
    for task in tasks:
        groups.setdefault(task.owner or settings.default_owner, []).append(task)
    return groups
