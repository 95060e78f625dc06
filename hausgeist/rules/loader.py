"""Load reminder rules from the YAML rules document."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from hausgeist.core.errors import RuleConfigError
from hausgeist.domain.rule import HeartbeatConfig, Rule, RuleCategory


logger = logging.getLogger(__name__)

# Sections are read in this order; rules keep document order within a section
RULE_SECTIONS: tuple[RuleCategory, ...] = (
    RuleCategory.CHORES,
    RuleCategory.INVENTORY,
    RuleCategory.DOCUMENTS,
    RuleCategory.SUGGESTIONS,
)


def _read_document(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        logger.warning("Rules config not found, using empty rules", extra={"config_path": str(path)})
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in rules config {path}: {e}"
        raise RuleConfigError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Rules config {path} must be a mapping of sections, got {type(data).__name__}"
        raise RuleConfigError(msg)
    return data


def load_rules(path: str | Path) -> list[Rule]:
    """Read every rule from the rules document, tagged with its section.

    A missing file yields an empty list and a warning.

    Args:
        path: Location of the rules document

    Returns:
        Rules in section order (chores, inventory, documents, suggestions)

    Raises:
        RuleConfigError: If the file exists but is not a valid rules document
    """
    config_path = Path(path)
    data = _read_document(config_path)
    if data is None:
        return []

    rules: list[Rule] = []
    for category in RULE_SECTIONS:
        entries = data.get(category.value) or []
        if not isinstance(entries, list):
            msg = f"Section '{category}' in {config_path} must be a list of rules"
            raise RuleConfigError(msg)

        for entry in entries:
            if not isinstance(entry, dict):
                msg = f"Rule in section '{category}' of {config_path} must be a mapping"
                raise RuleConfigError(msg)
            try:
                rules.append(Rule.model_validate({**entry, "category": category}))
            except ValidationError as e:
                msg = f"Invalid rule {entry.get('name', '<unnamed>')!r} in section '{category}': {e}"
                raise RuleConfigError(msg) from e

    logger.info("Loaded rules", extra={"config_path": str(config_path), "count": len(rules)})
    return rules


def load_heartbeat_config(path: str | Path) -> HeartbeatConfig | None:
    """Read the heartbeat section, or None when the file or section is absent."""
    data = _read_document(Path(path))
    if not data or data.get("heartbeat") is None:
        return None

    try:
        return HeartbeatConfig.model_validate(data["heartbeat"])
    except ValidationError as e:
        msg = f"Invalid heartbeat section in {path}: {e}"
        raise RuleConfigError(msg) from e
