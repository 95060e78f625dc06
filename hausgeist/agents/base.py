"""Base utilities and dependencies for Pydantic AI agents."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from hausgeist.services.task_store import TaskStore


@dataclass
class Deps:
    """Dependencies injected into agent RunContext."""

    store: TaskStore
    rules_config_path: str | Path | None
    current_time: datetime
