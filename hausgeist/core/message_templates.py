"""Centralized message templates for chat replies and reports.

All user-facing message strings are defined here so wording can be changed
in one place.
"""

HELP_TEXT = (
    "I can help with tasks! Try:\n"
    '- "Add task for Ira: brush teeth"\n'
    '- "Ira finished brushing teeth"\n'
    "- \"What's left for today?\"\n"
    '- "How did Ira do this week?"'
)

ADD_TASK_PROMPT = 'What\'s the task? Try something like: "Add task for Ira: brush teeth"'
COMPLETE_TASK_PROMPT = 'Which task was finished? Try: "Ira finished brushing teeth"'
NO_ALERTS = "No alerts — everything looks good! \U0001f47b"


def _tasks(count: int) -> str:
    return f"{count} task{'' if count == 1 else 's'}"


def not_understood() -> str:
    return f"I didn't quite get that. {HELP_TEXT}"


def unexpected_error(*, message: str) -> str:
    return f"Something went wrong: {message}\n\nPlease try again. \U0001f47b"


def task_added(*, title: str, owner: str, frequency: str | None = None) -> str:
    message = f'Got it! Added "{title}" for {owner}.'
    if frequency:
        message += f" It'll repeat {frequency}."
    return message + " \U0001f47b"


def task_not_found(*, identifier: str, owner: str | None = None) -> str:
    scope = f" for {owner}" if owner else ""
    return f'Couldn\'t find an open task matching "{identifier}"{scope}. Try "What\'s left?" to see open tasks.'


def task_completed(*, title: str, owner: str, points: int) -> str:
    return f'Nice! ✅ "{title}" is done. {owner} earned {points} points! ⭐'


def no_open_tasks(*, owner: str | None = None) -> str:
    if owner:
        return f"{owner} has no open tasks. All done! \U0001f389"
    return "No open tasks. The house spirit is pleased. \U0001f47b"


def task_list(*, groups: dict[str, list[str]], today_only: bool) -> str:
    """Build the grouped open-task listing.

    Args:
        groups: Owner name mapped to pre-rendered task lines (without bullets)
        today_only: Whether the listing covers tasks due today
    """
    message = "Here's what's on for today:\n\n" if today_only else "Here's what's open:\n\n"
    total = 0
    for owner, lines in groups.items():
        message += f"**{owner}:**\n"
        for line in lines:
            message += f"- {line}\n"
        message += "\n"
        total += len(lines)
    return message + f"{_tasks(total)} total."


def nothing_to_report(*, owner: str | None = None) -> str:
    return f"No completed tasks this week for {owner or 'everyone'} yet. Time to get going! \U0001f47b"


def weekly_summary(
    *,
    completed: int,
    points: int,
    owner: str | None,
    by_owner: dict[str, tuple[int, int]],
    overdue: list[tuple[str, str]],
    overdue_limit: int,
) -> str:
    """Build the chat reply for a summary request.

    Args:
        completed: Number of chores completed this week
        points: Points earned this week
        owner: Owner the summary is scoped to, or None for the whole family
        by_owner: Owner mapped to (count, points), shown when not scoped
        overdue: (title, owner) pairs of overdue chores
        overdue_limit: Maximum overdue chores to list before truncating
    """
    message = "\U0001f47b **Weekly Report**\n\n"

    if owner:
        message += f"**{owner}:**\n- Completed: {_tasks(completed)}\n- Points earned: {points} ⭐\n"
    else:
        message += f"**Completed:** {_tasks(completed)}\n**Points earned:** {points} ⭐\n"
        if by_owner:
            message += "\n"
            for name, (count, owner_points) in by_owner.items():
                message += f"**{name}:** {_tasks(count)} ({owner_points} pts)\n"

    if overdue:
        message += f"\n⚠️ **Overdue:** {_tasks(len(overdue))}\n"
        for title, task_owner in overdue[:overdue_limit]:
            message += f"- {title} ({task_owner})\n"
        if len(overdue) > overdue_limit:
            message += f"- ...and {len(overdue) - overdue_limit} more\n"

    return message
