"""Rules engine: a fixed rule set evaluated against a task store."""

import logging
from collections.abc import Iterable
from pathlib import Path

from hausgeist.core.config import settings
from hausgeist.domain.rule import HeartbeatConfig, Rule, RuleCategory
from hausgeist.models.service_models import EvaluationResult
from hausgeist.rules.evaluators import evaluate_rule
from hausgeist.rules.loader import load_heartbeat_config, load_rules
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


class RulesEngine:
    """Loads rules once at construction and evaluates them on demand.

    The rule set never changes after loading; build a new engine to pick up
    edits to the rules document.
    """

    def __init__(self, store: TaskStore, config_path: str | Path | None = None) -> None:
        path = Path(config_path or settings.rules_config_path)
        self._store = store
        self._rules: tuple[Rule, ...] = tuple(load_rules(path))
        self._heartbeat = load_heartbeat_config(path)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def heartbeat(self) -> HeartbeatConfig | None:
        return self._heartbeat

    async def evaluate(self, rule: Rule) -> EvaluationResult:
        return await evaluate_rule(self._store, rule)

    async def _evaluate_triggered(self, rules: Iterable[Rule]) -> list[EvaluationResult]:
        # Sequential on purpose: one evaluation finishes before the next starts
        results = []
        for rule in rules:
            result = await evaluate_rule(self._store, rule)
            if result.triggered:
                results.append(result)
        return results

    async def evaluate_all(self) -> list[EvaluationResult]:
        """Triggered results for every loaded rule."""
        return await self._evaluate_triggered(self._rules)

    async def evaluate_by_category(self, category: RuleCategory | str) -> list[EvaluationResult]:
        """Triggered results for rules of one category."""
        return await self._evaluate_triggered(rule for rule in self._rules if rule.category == category)

    async def evaluate_by_schedule(self, schedule: str) -> list[EvaluationResult]:
        """Triggered results for rules tagged with the given schedule."""
        return await self._evaluate_triggered(rule for rule in self._rules if rule.schedule == schedule)
