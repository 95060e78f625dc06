"""Check one rule against live task data.

Only chore rules are evaluated. Inventory, document and suggestion rules
always come back not triggered until those data sources exist.
"""

import logging

from hausgeist.core.grouping import group_by_owner
from hausgeist.core.logging import span
from hausgeist.core.template_renderer import render_template
from hausgeist.domain.rule import Rule, TriggerCondition
from hausgeist.models.service_models import EvaluationResult
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


async def _daily_due_today(store: TaskStore, rule: Rule) -> EvaluationResult | None:
    tasks = await store.tasks_due_today()
    if not tasks:
        return None

    messages = [
        render_template(
            rule.action.message,
            {
                "owner": owner,
                "count": len(owner_tasks),
                "titles": ", ".join(task.title for task in owner_tasks),
            },
        )
        for owner, owner_tasks in group_by_owner(tasks).items()
    ]
    return EvaluationResult(triggered=True, rule=rule, data=tasks, message="\n".join(messages))


async def _recurring_overdue(store: TaskStore, rule: Rule) -> EvaluationResult | None:
    recurring = [task for task in await store.tasks_overdue() if task.recurring]
    if not recurring:
        return None

    messages = [render_template(rule.action.message, {"owner": task.owner, "title": task.title}) for task in recurring]
    return EvaluationResult(triggered=True, rule=rule, data=recurring, message="\n".join(messages))


_CHECKS = {
    TriggerCondition.DAILY_DUE_TODAY: _daily_due_today,
    TriggerCondition.RECURRING_OVERDUE: _recurring_overdue,
}


async def evaluate_rule(store: TaskStore, rule: Rule) -> EvaluationResult:
    """Evaluate a single rule against the current store contents.

    Conditions are checked in order and the first one with matching data
    triggers. Summary-only rules never trigger here; the heartbeat covers them.
    """
    with span("rules.evaluate_rule", rule=rule.name, category=str(rule.category)):
        for condition in rule.conditions:
            check = _CHECKS.get(condition)
            if check is None:
                continue
            result = await check(store, rule)
            if result is not None:
                logger.info(
                    "Rule triggered",
                    extra={"rule": rule.name, "condition": str(condition), "matches": len(result.data or [])},
                )
                return result

        return EvaluationResult(triggered=False, rule=rule)
