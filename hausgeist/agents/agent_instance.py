"""Agent instance with the task tools registered.

Kept apart from the run helpers so tools can be registered without
importing the agent runner.
"""

import logging

from pydantic_ai import Agent
from pydantic_ai.models.openrouter import OpenRouterModel
from pydantic_ai.providers.openrouter import OpenRouterProvider

from hausgeist.agents.base import Deps
from hausgeist.agents.tools import task_tools
from hausgeist.core.config import settings
from hausgeist.core.logging import configure_logfire, instrument_pydantic_ai


logger = logging.getLogger(__name__)


class _LogfireState:
    """Singleton state for logfire configuration."""

    configured = False


def _ensure_logfire_configured() -> None:
    """Ensure Logfire is configured (lazy initialization)."""
    if not _LogfireState.configured:
        configure_logfire()
        instrument_pydantic_ai()
        _LogfireState.configured = True


class _AgentState:
    """Singleton state for agent instance."""

    instance: Agent[Deps, str] | None = None


def _create_agent() -> Agent[Deps, str]:
    """Create the agent instance (called once during initialization)."""
    _ensure_logfire_configured()

    api_key = settings.require_credential("openrouter_api_key", "OpenRouter API key")
    provider = OpenRouterProvider(api_key=api_key)
    model = OpenRouterModel(model_name=settings.model_id, provider=provider)

    return Agent(model=model, deps_type=Deps)


def get_agent() -> Agent[Deps, str]:
    """Get or create the agent instance with all tools registered."""
    if _AgentState.instance is None:
        agent = _create_agent()
        task_tools.register_tools(agent)
        _AgentState.instance = agent
        logger.info("Agent created", extra={"model_id": settings.model_id})

    return _AgentState.instance
