"""Pydantic models for service layer return types.

These models give typed shapes to query aggregates, rule evaluation results
and the weekly heartbeat report.
"""

from pydantic import BaseModel, Field

from hausgeist.domain.rule import Rule
from hausgeist.domain.task import Task


class WeeklyStats(BaseModel):
    """Chores completed since the start of the week."""

    completed: int
    total_points: int
    tasks: list[Task]


class EvaluationResult(BaseModel):
    """Outcome of evaluating one rule against live data."""

    triggered: bool
    rule: Rule
    data: list[Task] | None = None
    message: str | None = None


class OwnerCompletions(BaseModel):
    """Completed chores and points for one owner."""

    count: int = 0
    points: int = 0


class ChoreSummary(BaseModel):
    """Completion part of the heartbeat report."""

    completed: int
    total_points: int
    by_owner: dict[str, OwnerCompletions] = Field(default_factory=dict)
    top_performer: str | None = None


class OpenTaskSummary(BaseModel):
    """Open-work part of the heartbeat report."""

    total: int
    overdue: int
    by_owner: dict[str, int] = Field(default_factory=dict)


class HeartbeatReport(BaseModel):
    """Weekly household report.

    Inventory, document and suggestion lists are always present so consumers
    see a stable shape; they stay empty until those data sources exist.
    """

    chore_summary: ChoreSummary
    open_tasks: OpenTaskSummary
    inventory_alerts: list[str] = Field(default_factory=list)
    document_alerts: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
