"""Natural language command parser.

Turns one chat message into a structured command: an intent plus the slots
that intent needs (owner, title, task identifier, timeframe, recurrence).

Intent detection walks ``INTENT_PATTERNS`` in ``INTENT_PRIORITY`` order and
stops at the first pattern found anywhere in the message. Surface phrases
overlap ("how did Ira do" also reads like a list query), so add_task and
summary are checked before complete_task and list_tasks.
"""

import logging
import re
from collections.abc import Sequence
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from hausgeist.core.config import settings
from hausgeist.core.errors import ParseError
from hausgeist.domain.task import Frequency


logger = logging.getLogger(__name__)


class Intent(StrEnum):
    """Coarse action a message expresses."""

    ADD_TASK = "add_task"
    COMPLETE_TASK = "complete_task"
    LIST_TASKS = "list_tasks"
    SUMMARY = "summary"


class Timeframe(StrEnum):
    """Period a list or summary request refers to."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class ParsedCommand(BaseModel):
    """Structured form of one chat message."""

    model_config = ConfigDict(frozen=True)

    intent: Intent
    owner: str | None = None
    title: str | None = None
    task_identifier: str | None = None
    timeframe: Timeframe | None = None
    recurring: bool | None = None
    frequency: Frequency | None = None


INTENT_PRIORITY: tuple[Intent, ...] = (
    Intent.ADD_TASK,
    Intent.SUMMARY,
    Intent.COMPLETE_TASK,
    Intent.LIST_TASKS,
)

_PATTERNS: dict[Intent, tuple[re.Pattern[str], ...]] = {
    Intent.ADD_TASK: (
        re.compile(r"\b(add|create|new)\b.*\b(task|chore)\b", re.IGNORECASE),
        re.compile(r"\b(add|create)\b", re.IGNORECASE),
        re.compile(r"\bneeds?\s+to\b", re.IGNORECASE),
        re.compile(r"\bshould\b", re.IGNORECASE),
        re.compile(r"\bassign\b", re.IGNORECASE),
    ),
    Intent.SUMMARY: (
        re.compile(r"\bhow\s+did\b", re.IGNORECASE),
        re.compile(r"\b(summary|report|stats)\b", re.IGNORECASE),
        re.compile(r"\bhow\b.*\b(do|doing|week)\b", re.IGNORECASE),
    ),
    Intent.COMPLETE_TASK: (
        re.compile(r"\b(finished|completed|done\s+with)\b", re.IGNORECASE),
        re.compile(r"\bmark\b.*\b(done|complete|finished)\b", re.IGNORECASE),
        re.compile(r"^(\w+)\s+did\b", re.IGNORECASE),
    ),
    Intent.LIST_TASKS: (
        re.compile(r"\bwhat'?s?\s+left\b", re.IGNORECASE),
        re.compile(r"\b(show|list|get)\b.*\b(task|chore|open)\b", re.IGNORECASE),
        re.compile(r"\btasks?\s+(for|today|this)\b", re.IGNORECASE),
        re.compile(r"\bopen\s+(task|chore)s?\b", re.IGNORECASE),
        re.compile(r"\boverdue\b", re.IGNORECASE),
        re.compile(r"\bwhat\b.*\b(task|chore|to\s*do|left|open|pending)\b", re.IGNORECASE),
        re.compile(r"\bwhat\s+are\b", re.IGNORECASE),
    ),
}

# Ordered (intent, patterns) pairs; first match wins
INTENT_PATTERNS: tuple[tuple[Intent, tuple[re.Pattern[str], ...]], ...] = tuple(
    (intent, _PATTERNS[intent]) for intent in INTENT_PRIORITY
)

_SUBJECT_VERBS = r"(finished|completed|needs|should|did)"

_ADD_TITLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r":\s*(.+)$"),  # "Add task for Ira: brush teeth"
    re.compile(r"needs?\s+to\s+(.+)", re.IGNORECASE),  # "Ira needs to tidy toys"
    re.compile(r"should\s+(.+)", re.IGNORECASE),  # "Ira should feed the cat"
    re.compile(r"(?:add|create)\s+(?:task|chore)\s+(.+?)\s+for\s+", re.IGNORECASE),  # "Add task X for Ira"
)

_FINISHED_RE = re.compile(r"(?:finished|completed|did)\s+(.+)", re.IGNORECASE)
_MARK_DONE_RE = re.compile(r"mark\s+(.+?)\s+as\s+(?:done|complete|finished)", re.IGNORECASE)
_DONE_WITH_RE = re.compile(r"done\s+with\s+(.+)", re.IGNORECASE)
_PRONOUN_RE = re.compile(r"\b(his|her|their|the)\b", re.IGNORECASE)

_RECURRENCE_PHRASES: tuple[tuple[tuple[str, ...], Frequency | None], ...] = (
    (("every day", "daily", "each day", "every morning", "every evening"), Frequency.DAILY),
    (("every week", "weekly"), Frequency.WEEKLY),
    (("every month", "monthly"), Frequency.MONTHLY),
    (("recurring", "repeat"), None),
)


def detect_intent(message: str) -> Intent | None:
    """Return the first intent whose pattern occurs in the message."""
    for intent, patterns in INTENT_PATTERNS:
        for pattern in patterns:
            if pattern.search(message):
                return intent
    return None


def extract_owner(message: str, family_members: Sequence[str] | None = None) -> str | None:
    """Find the family member a message is about, capitalized.

    Checked in order: possessive ("Ira's"), "for <name>", a message starting
    with "<name> finished/needs/...", then the name anywhere in the text.
    """
    members = [m.lower() for m in (family_members if family_members is not None else settings.family_members)]
    lower = message.lower()

    owner: str | None = None
    for member in members:
        if f"{member}'s" in lower or f"{member}s " in lower:
            owner = member
            break

    if owner is None:
        for_match = re.search(r"\bfor\s+(\w+)", lower)
        if for_match and for_match.group(1) in members:
            owner = for_match.group(1)

    if owner is None:
        subject_match = re.match(rf"^(\w+)\s+{_SUBJECT_VERBS}\b", lower)
        if subject_match and subject_match.group(1) in members:
            owner = subject_match.group(1)

    if owner is None:
        owner = next((member for member in members if member in lower), None)

    return owner.capitalize() if owner else None


def extract_add_title(message: str) -> str | None:
    """Pull the task title out of an add-task message."""
    for pattern in _ADD_TITLE_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1).strip() or None
    return None


def extract_task_identifier(message: str) -> str | None:
    """Pull the loose task reference out of a completion message."""
    finished = _FINISHED_RE.search(message)
    if finished:
        stripped = _PRONOUN_RE.sub("", finished.group(1))
        return " ".join(stripped.split()) or None

    mark = _MARK_DONE_RE.search(message)
    if mark:
        return mark.group(1).strip() or None

    done_with = _DONE_WITH_RE.search(message)
    if done_with:
        return done_with.group(1).strip() or None

    return None


def extract_timeframe(message: str) -> Timeframe | None:
    lower = message.lower()
    if "today" in lower:
        return Timeframe.TODAY
    if "week" in lower:
        return Timeframe.WEEK
    if "month" in lower:
        return Timeframe.MONTH
    return None


def extract_recurrence(message: str) -> tuple[bool | None, Frequency | None]:
    """Return (recurring, frequency) from phrases like "every day" or "weekly"."""
    lower = message.lower()
    for phrases, frequency in _RECURRENCE_PHRASES:
        if any(phrase in lower for phrase in phrases):
            return True, frequency
    return None, None


def parse_command(message: str, *, family_members: Sequence[str] | None = None) -> ParsedCommand:
    """Parse a natural language message into a structured command.

    Args:
        message: Raw chat message
        family_members: Owner vocabulary; defaults to the configured household

    Returns:
        ParsedCommand with the intent and its slots

    Raises:
        ParseError: If no intent pattern matches
    """
    intent = detect_intent(message)
    if intent is None:
        logger.info("No intent detected", extra={"message_length": len(message)})
        raise ParseError(message)

    owner = extract_owner(message, family_members)

    match intent:
        case Intent.ADD_TASK:
            recurring, frequency = extract_recurrence(message)
            command = ParsedCommand(
                intent=intent,
                owner=owner,
                title=extract_add_title(message),
                recurring=recurring,
                frequency=frequency,
            )
        case Intent.COMPLETE_TASK:
            command = ParsedCommand(intent=intent, owner=owner, task_identifier=extract_task_identifier(message))
        case Intent.LIST_TASKS:
            command = ParsedCommand(intent=intent, owner=owner, timeframe=extract_timeframe(message) or Timeframe.ALL)
        case Intent.SUMMARY:
            command = ParsedCommand(intent=intent, owner=owner, timeframe=extract_timeframe(message) or Timeframe.WEEK)

    logger.debug("Parsed command", extra={"intent": str(intent), "owner": owner})
    return command
