"""Task tools for the hausgeist agent.

Three operations are exposed to the chat agent: handle a task message,
produce the weekly report, and run the daily check.
"""

import logging

import logfire
from pydantic import BaseModel, Field
from pydantic_ai import Agent, RunContext

from hausgeist.agents.base import Deps
from hausgeist.core import message_templates
from hausgeist.rules.scheduler_jobs import run_daily_check, run_weekly_heartbeat
from hausgeist.services.message_service import handle_message


logger = logging.getLogger(__name__)


class TaskMessage(BaseModel):
    """Parameters for handling a household task message."""

    message: str = Field(
        description=(
            "The user's task message verbatim, e.g. 'Add task for Ira: brush teeth', "
            "'Ira finished brushing teeth', \"What's left for today?\" or 'How did Ira do this week?'"
        )
    )


async def tool_handle_task_message(ctx: RunContext[Deps], params: TaskMessage) -> str:
    """
    Handle a task-related message: add, complete, list or summarize chores.

    Args:
        ctx: Agent runtime context with dependencies
        params: The message to interpret

    Returns:
        Reply text for the user
    """
    with logfire.span("tool_handle_task_message"):
        return await handle_message(ctx.deps.store, params.message)


async def tool_weekly_heartbeat(ctx: RunContext[Deps]) -> str:
    """
    Generate the weekly household report (completions, points, open and overdue chores).

    Args:
        ctx: Agent runtime context with dependencies

    Returns:
        Formatted weekly report or error message
    """
    try:
        with logfire.span("tool_weekly_heartbeat"):
            return await run_weekly_heartbeat(ctx.deps.store)
    except Exception as e:
        logger.error("Weekly heartbeat tool failed", extra={"error": str(e)})
        return f"Error: Unable to generate weekly report - {e!s}"


async def tool_daily_check(ctx: RunContext[Deps]) -> str:
    """
    Run the daily chore check and return any reminders.

    Args:
        ctx: Agent runtime context with dependencies

    Returns:
        Reminder messages, or a note that everything is fine
    """
    try:
        with logfire.span("tool_daily_check"):
            alerts = await run_daily_check(ctx.deps.store, ctx.deps.rules_config_path)
    except Exception as e:
        logger.error("Daily check tool failed", extra={"error": str(e)})
        return f"Error: Unable to run daily check - {e!s}"

    if not alerts:
        return message_templates.NO_ALERTS
    return "\n\n".join(alerts)


def register_tools(agent: Agent[Deps, str]) -> None:
    """Register task tools with agent."""
    agent.tool(tool_handle_task_message)
    agent.tool(tool_weekly_heartbeat)
    agent.tool(tool_daily_check)
