"""Rule domain models for reminders and reports."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class RuleCategory(StrEnum):
    """Configuration section a rule was read from."""

    CHORES = "chores"
    INVENTORY = "inventory"
    DOCUMENTS = "documents"
    SUGGESTIONS = "suggestions"


class ActionType(StrEnum):
    """What a triggered rule does."""

    REMIND = "remind"
    SUGGEST = "suggest"
    ALERT = "alert"
    SUMMARY = "summary"


class Priority(StrEnum):
    """Urgency of a rule action."""

    NORMAL = "normal"
    HIGH = "high"


class TriggerCondition(StrEnum):
    """Condition kinds the evaluator knows how to check."""

    DAILY_DUE_TODAY = "daily_due_today"
    RECURRING_OVERDUE = "recurring_overdue"
    SUMMARY_ONLY = "summary_only"
    UNHANDLED = "unhandled"
    NOT_IMPLEMENTED = "not_implemented"


class RuleTrigger(BaseModel):
    """Condition portion of a rule as written in the rules document."""

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    type: str | None = None
    status: str | None = None
    recurring: bool | None = None
    frequency: str | None = None
    category: str | None = None
    last_completed: str | None = None
    due_date: str | None = None
    age: str | None = None
    age_in_status: str | None = None
    event: str | None = None
    person_birthday: str | None = None


class RuleAction(BaseModel):
    """Action portion of a rule."""

    model_config = ConfigDict(frozen=True)

    type: ActionType
    priority: Priority | None = None
    message: str = Field(..., description="Template with {{var}} placeholders")
    auto_action: str | None = None
    tasks: tuple[str, ...] | None = None


class Rule(BaseModel):
    """A declarative rule loaded from configuration."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    schedule: str | None = None
    trigger: RuleTrigger | None = None
    action: RuleAction
    category: RuleCategory

    @property
    def conditions(self) -> tuple[TriggerCondition, ...]:
        """Condition kinds to check for this rule, in evaluation order."""
        if self.category != RuleCategory.CHORES:
            return (TriggerCondition.NOT_IMPLEMENTED,)

        # Rules without a trigger only feed the heartbeat
        if self.trigger is None:
            return (TriggerCondition.SUMMARY_ONLY,)

        trigger = self.trigger
        found: list[TriggerCondition] = []
        if trigger.frequency == "daily" and trigger.status == "todo" and trigger.due_date == "today":
            found.append(TriggerCondition.DAILY_DUE_TODAY)
        if trigger.recurring and trigger.last_completed:
            found.append(TriggerCondition.RECURRING_OVERDUE)
        if found:
            return tuple(found)

        if self.action.type == ActionType.SUMMARY:
            return (TriggerCondition.SUMMARY_ONLY,)
        return (TriggerCondition.UNHANDLED,)


class HeartbeatConfig(BaseModel):
    """Schedule metadata from the heartbeat section of the rules document."""

    model_config = ConfigDict(frozen=True)

    schedule: str | None = None
    include: tuple[str, ...] = ()
    format: str | None = None
