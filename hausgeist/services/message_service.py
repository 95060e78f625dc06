"""Entry point for one chat message: parse, dispatch, reply."""

import logging
from collections.abc import Awaitable, Callable

from hausgeist.core import message_templates
from hausgeist.core.errors import ParseError, classify_error
from hausgeist.core.logging import log_with_context, span
from hausgeist.services import command_handlers
from hausgeist.services.command_parser import Intent, ParsedCommand, parse_command
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)

Handler = Callable[[TaskStore, ParsedCommand], Awaitable[str]]

HANDLERS: dict[Intent, Handler] = {
    Intent.ADD_TASK: command_handlers.handle_add_task,
    Intent.COMPLETE_TASK: command_handlers.handle_complete_task,
    Intent.LIST_TASKS: command_handlers.handle_list_tasks,
    Intent.SUMMARY: command_handlers.handle_summary,
}


async def handle_message(store: TaskStore, message: str) -> str:
    """Turn one free-text message into a reply.

    Unrecognized messages get the help text. Any other failure is logged and
    answered with a generic error reply, so this never raises.

    Args:
        store: Task store handle
        message: Raw chat message

    Returns:
        Non-empty reply text
    """
    with span("message_service.handle_message"):
        try:
            cmd = parse_command(message)
            log_with_context(logger, "info", "Handling command", intent=str(cmd.intent), owner=cmd.owner)
            return await HANDLERS[cmd.intent](store, cmd)
        except ParseError:
            return message_templates.not_understood()
        except Exception as e:
            error_response = classify_error(e)
            logger.error(
                "Command failed",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "category": error_response.category.value,
                },
            )
            return message_templates.unexpected_error(message=str(e))
