"""Domain models and DTOs."""

from hausgeist.domain.create_models import TaskCreate, TaskStatusUpdate
from hausgeist.domain.rule import (
    ActionType,
    HeartbeatConfig,
    Priority,
    Rule,
    RuleAction,
    RuleCategory,
    RuleTrigger,
    TriggerCondition,
)
from hausgeist.domain.task import ChoreStatus, Frequency, ItemType, Task


__all__ = [
    "ActionType",
    "ChoreStatus",
    "Frequency",
    "HeartbeatConfig",
    "ItemType",
    "Priority",
    "Rule",
    "RuleAction",
    "RuleCategory",
    "RuleTrigger",
    "Task",
    "TaskCreate",
    "TaskStatusUpdate",
    "TriggerCondition",
]
