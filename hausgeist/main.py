"""hausgeist - household task assistant command line."""

import argparse
import asyncio
import logging
import sys
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime

from hausgeist.agents.base import Deps
from hausgeist.core.db_client import DBClient
from hausgeist.core.logging import configure_logfire
from hausgeist.core.message_templates import NO_ALERTS
from hausgeist.core.schema import init_db, seed_sample_data
from hausgeist.rules.scheduler_jobs import run_daily_check, run_weekly_heartbeat
from hausgeist.services.message_service import handle_message
from hausgeist.services.task_store import TaskStore


logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_store(db_path: str | None = None) -> AsyncIterator[TaskStore]:
    """Open the database once and yield a task store over it."""
    db = await DBClient.connect(db_path)
    try:
        yield TaskStore(db)
    finally:
        await db.close()


async def _task(args: argparse.Namespace) -> str:
    async with open_store(args.db_path) as store:
        return await handle_message(store, " ".join(args.message))


async def _heartbeat(args: argparse.Namespace) -> str:
    async with open_store(args.db_path) as store:
        return await run_weekly_heartbeat(store)


async def _daily_check(args: argparse.Namespace) -> str:
    async with open_store(args.db_path) as store:
        alerts = await run_daily_check(store, args.rules)
    return "\n\n".join(alerts) if alerts else NO_ALERTS


async def _init_db(args: argparse.Namespace) -> str:
    db = await DBClient.connect(args.db_path)
    try:
        await init_db(db)
        if args.with_samples:
            count = await seed_sample_data(db)
            return f"Database ready at {db.db_path} ({count} sample items added)."
        return f"Database ready at {db.db_path}."
    finally:
        await db.close()


async def _chat(args: argparse.Namespace) -> str:
    from hausgeist.agents.hausgeist_agent import run_agent

    async with open_store(args.db_path) as store:
        deps = Deps(store=store, rules_config_path=args.rules, current_time=datetime.now())
        return await run_agent(user_message=" ".join(args.message), deps=deps)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hausgeist", description="Household task assistant")
    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help="Path to database file (default: uses settings.sqlite_db_path)",
    )
    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="Path to rules YAML (default: uses settings.rules_config_path)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    task = subparsers.add_parser("task", help='Handle a task message, e.g. "Add task for Ira: brush teeth"')
    task.add_argument("message", nargs="*", help="Message text")
    task.set_defaults(handler=_task, needs_message=True)

    heartbeat = subparsers.add_parser("heartbeat", help="Print the weekly report")
    heartbeat.set_defaults(handler=_heartbeat, needs_message=False)

    daily = subparsers.add_parser("daily-check", help="Run the daily chore rules")
    daily.set_defaults(handler=_daily_check, needs_message=False)

    init = subparsers.add_parser("init-db", help="Create the database schema")
    init.add_argument("--with-samples", action="store_true", help="Also add sample chores, inventory and documents")
    init.set_defaults(handler=_init_db, needs_message=False)

    chat = subparsers.add_parser("chat", help="Ask the chat agent")
    chat.add_argument("message", nargs="*", help="Message text")
    chat.set_defaults(handler=_chat, needs_message=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the hausgeist command."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    configure_logfire()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.needs_message and not args.message:
        print(f'Usage: hausgeist {args.command} "<message>"', file=sys.stderr)
        return 1

    handler: Callable[[argparse.Namespace], Awaitable[str]] = args.handler
    try:
        output = asyncio.run(handler(args))
    except Exception as e:
        logger.error("Command failed", extra={"command": args.command, "error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
