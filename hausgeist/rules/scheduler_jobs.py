"""Entry points for periodic runs.

Triggering is external (cron or a chat platform scheduler); these functions
only do the work for one tick:
- Daily check of chore rules
- Weekly heartbeat report
- Evaluation of every rule
"""

import logging
from pathlib import Path

from hausgeist.domain.rule import RuleCategory
from hausgeist.models.service_models import EvaluationResult
from hausgeist.rules.engine import RulesEngine
from hausgeist.rules.heartbeat import format_heartbeat, generate_heartbeat
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


async def run_daily_check(store: TaskStore, config_path: str | Path | None = None) -> list[str]:
    """Evaluate chore rules and return one alert per triggered rule.

    Returns an empty list when nothing triggered; the caller decides how to
    render that.
    """
    logger.info("Running daily chore check")
    try:
        engine = RulesEngine(store, config_path)
        results = await engine.evaluate_by_category(RuleCategory.CHORES)
    except Exception as e:
        logger.error("Daily chore check failed", extra={"error": str(e)})
        raise

    alerts = [result.message for result in results if result.triggered and result.message]
    logger.info("Daily chore check finished", extra={"alerts": len(alerts)})
    return alerts


async def run_weekly_heartbeat(store: TaskStore) -> str:
    """Generate and format the weekly report."""
    logger.info("Running weekly heartbeat")
    try:
        report = await generate_heartbeat(store)
    except Exception as e:
        logger.error("Weekly heartbeat failed", extra={"error": str(e)})
        raise
    return format_heartbeat(report)


async def run_all_rules(store: TaskStore, config_path: str | Path | None = None) -> list[EvaluationResult]:
    """Evaluate every loaded rule and return the triggered results."""
    logger.info("Running all rules")
    try:
        engine = RulesEngine(store, config_path)
        return await engine.evaluate_all()
    except Exception as e:
        logger.error("Rule run failed", extra={"error": str(e)})
        raise
