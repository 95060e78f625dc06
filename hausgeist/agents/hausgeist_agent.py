"""Run the hausgeist chat agent for one user message."""

import logging

from hausgeist.agents.agent_instance import get_agent
from hausgeist.agents.base import Deps
from hausgeist.core.config import settings
from hausgeist.core.errors import classify_error


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are Hausgeist, a friendly house spirit helping a family with household chores.

Current time: {current_time}
Family members: {members}

Use the tools for anything about tasks:
- tool_handle_task_message for adding, finishing, listing or summarizing chores. Pass the user's words verbatim.
- tool_weekly_heartbeat when asked for the weekly report.
- tool_daily_check when asked what still needs doing today or for reminders.

Reply with the tool output as-is. Keep any other answers short."""


def build_instructions(deps: Deps) -> str:
    members = ", ".join(member.capitalize() for member in settings.family_members)
    return SYSTEM_PROMPT.format(current_time=deps.current_time.isoformat(timespec="minutes"), members=members)


async def run_agent(*, user_message: str, deps: Deps) -> str:
    """
    Run the agent with the given message.

    Args:
        user_message: The message from the user
        deps: The injected dependencies (store, rules path, current time)

    Returns:
        The agent's response, or a user-friendly error message
    """
    try:
        agent = get_agent()
        logger.info("hausgeist_agent_run", extra={"message_length": len(user_message)})
        result = await agent.run(user_message, deps=deps, instructions=build_instructions(deps))
        return result.output
    except Exception as e:
        error_response = classify_error(e)
        logger.error(
            "Agent execution failed",
            extra={"error": str(e), "error_category": error_response.category.value},
        )
        return f"{error_response.message} {error_response.suggestion}"
