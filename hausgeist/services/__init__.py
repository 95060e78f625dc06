from hausgeist.services import command_handlers, command_parser, message_service, task_store


__all__ = [
    "command_handlers",
    "command_parser",
    "message_service",
    "task_store",
]
