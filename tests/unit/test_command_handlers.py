"""Unit tests for the intent handlers."""

from datetime import date

import pytest

from hausgeist.domain.task import ChoreStatus, Frequency
from hausgeist.services.command_handlers import (
    format_due_date,
    handle_add_task,
    handle_complete_task,
    handle_list_tasks,
    handle_summary,
)
from hausgeist.services.command_parser import Intent, ParsedCommand, Timeframe
from tests.unit.factories import LAST_WEEK, TODAY


def add_cmd(**slots) -> ParsedCommand:
    return ParsedCommand(intent=Intent.ADD_TASK, **slots)


def complete_cmd(**slots) -> ParsedCommand:
    return ParsedCommand(intent=Intent.COMPLETE_TASK, **slots)


def list_cmd(**slots) -> ParsedCommand:
    return ParsedCommand(intent=Intent.LIST_TASKS, **slots)


def summary_cmd(**slots) -> ParsedCommand:
    return ParsedCommand(intent=Intent.SUMMARY, timeframe=Timeframe.WEEK, **slots)


@pytest.mark.unit
class TestFormatDueDate:
    """Relative due date labels."""

    @pytest.mark.parametrize(
        ("due", "label"),
        [
            (date(2026, 10, 14), "today"),
            (date(2026, 10, 15), "tomorrow"),
            (date(2026, 10, 13), "yesterday"),
            (date(2026, 10, 11), "3 days ago"),
            (date(2026, 10, 17), "17 Oct"),
            (date(2026, 11, 2), "2 Nov"),
        ],
    )
    def test_labels(self, due, label):
        assert format_due_date(due, TODAY) == label


@pytest.mark.unit
class TestHandleAddTask:
    """Tests for handle_add_task."""

    async def test_missing_title_prompts_without_creating(self, store):
        reply = await handle_add_task(store, add_cmd(owner="Ira"))

        assert reply == 'What\'s the task? Try something like: "Add task for Ira: brush teeth"'
        assert await store.open_tasks() == []

    async def test_creates_todo_task(self, store):
        reply = await handle_add_task(store, add_cmd(owner="Ira", title="clean room"))

        assert reply == 'Got it! Added "clean room" for Ira. \U0001f47b'
        tasks = await store.open_tasks("Ira")
        assert [(t.title, t.status) for t in tasks] == [("clean room", ChoreStatus.TODO)]

    async def test_owner_defaults_to_family(self, store):
        reply = await handle_add_task(store, add_cmd(title="sweep hallway"))

        assert "for Family." in reply
        assert (await store.open_tasks("Family"))[0].title == "sweep hallway"

    async def test_recurring_reply_mentions_frequency(self, store):
        reply = await handle_add_task(
            store, add_cmd(owner="Isha", title="feed fish", recurring=True, frequency=Frequency.DAILY)
        )

        assert reply == 'Got it! Added "feed fish" for Isha. It\'ll repeat daily. \U0001f47b'
        task = (await store.open_tasks("Isha"))[0]
        assert task.recurring is True
        assert task.frequency == Frequency.DAILY

    async def test_recurring_without_frequency_has_no_repeat_line(self, store):
        reply = await handle_add_task(store, add_cmd(owner="Isha", title="feed fish", recurring=True))

        assert "repeat" not in reply


@pytest.mark.unit
class TestHandleCompleteTask:
    """Tests for handle_complete_task."""

    async def test_missing_identifier_prompts(self, store):
        reply = await handle_complete_task(store, complete_cmd(owner="Ira"))

        assert reply == 'Which task was finished? Try: "Ira finished brushing teeth"'

    async def test_no_match(self, store, add_task):
        await add_task("Tidy toys")

        reply = await handle_complete_task(store, complete_cmd(owner="Ira", task_identifier="walk the dog"))

        assert reply == (
            'Couldn\'t find an open task matching "walk the dog" for Ira. Try "What\'s left?" to see open tasks.'
        )
        assert len(await store.open_tasks()) == 1

    async def test_completes_with_default_points(self, store, add_task):
        task = await add_task("Brush teeth")

        reply = await handle_complete_task(store, complete_cmd(owner="Ira", task_identifier="brushing teeth"))

        assert reply == 'Nice! ✅ "Brush teeth" is done. Ira earned 5 points! ⭐'
        stored = await store.get(task.id)
        assert stored.status == ChoreStatus.DONE
        assert stored.points == 5

    async def test_completes_with_own_points(self, store, add_task):
        await add_task("Tidy toys", points=2)

        reply = await handle_complete_task(store, complete_cmd(task_identifier="tidy toys"))

        assert reply.endswith("Ira earned 2 points! ⭐")

    async def test_owner_scopes_candidates(self, store, add_task):
        await add_task("Feed fish", "Isha")
        ira_task = await add_task("Feed fish", "Ira")

        await handle_complete_task(store, complete_cmd(owner="Ira", task_identifier="feed fish"))

        assert (await store.get(ira_task.id)).status == ChoreStatus.DONE
        assert [t.owner for t in await store.open_tasks()] == ["Isha"]

    async def test_second_completion_is_not_found(self, store, add_task):
        await add_task("Water plants")
        cmd = complete_cmd(owner="Ira", task_identifier="water plants")

        await handle_complete_task(store, cmd)
        open_after_first = len(await store.open_tasks())
        reply = await handle_complete_task(store, cmd)

        assert reply.startswith("Couldn't find an open task matching")
        assert len(await store.open_tasks()) == open_after_first


@pytest.mark.unit
class TestHandleListTasks:
    """Tests for handle_list_tasks."""

    async def test_empty_without_owner(self, store):
        reply = await handle_list_tasks(store, list_cmd(timeframe=Timeframe.ALL))

        assert reply == "No open tasks. The house spirit is pleased. \U0001f47b"

    async def test_empty_with_owner(self, store):
        reply = await handle_list_tasks(store, list_cmd(owner="Ira", timeframe=Timeframe.ALL))

        assert reply == "Ira has no open tasks. All done! \U0001f389"

    async def test_groups_by_owner_with_due_labels(self, store, add_task):
        await add_task("Tidy toys", due_in=0)
        await add_task("Feed fish", "Isha", due_in=1)
        brush = await add_task("Brush teeth")
        await store.set_status(brush.id, ChoreStatus.DOING)

        reply = await handle_list_tasks(store, list_cmd(timeframe=Timeframe.ALL))

        assert reply == (
            "Here's what's open:\n\n"
            "**Ira:**\n"
            "- Tidy toys (due today)\n"
            "- Brush teeth \U0001f504\n"
            "\n"
            "**Isha:**\n"
            "- Feed fish (due tomorrow)\n"
            "\n"
            "3 tasks total."
        )

    async def test_owner_listing_excludes_done(self, store, add_task):
        done = await add_task("Tidy toys")
        await add_task("Help set table")
        await store.complete(done.id)

        reply = await handle_list_tasks(store, list_cmd(owner="Ira", timeframe=Timeframe.ALL))

        assert "Help set table" in reply
        assert "Tidy toys" not in reply
        assert reply.endswith("1 task total.")

    async def test_today_filters_by_owner(self, store, add_task):
        await add_task("Tidy toys", due_in=0)
        await add_task("Feed fish", "Isha", due_in=0)
        await add_task("Brush teeth", due_in=2)

        reply = await handle_list_tasks(store, list_cmd(owner="Ira", timeframe=Timeframe.TODAY))

        assert reply.startswith("Here's what's on for today:\n\n**Ira:**\n- Tidy toys (due today)\n")
        assert "Feed fish" not in reply
        assert "Brush teeth" not in reply


@pytest.mark.unit
class TestHandleSummary:
    """Tests for handle_summary."""

    async def test_nothing_to_report(self, store):
        reply = await handle_summary(store, summary_cmd())

        assert reply == "No completed tasks this week for everyone yet. Time to get going! \U0001f47b"

    async def test_nothing_to_report_for_owner(self, store):
        reply = await handle_summary(store, summary_cmd(owner="Ira"))

        assert "for Ira yet" in reply

    async def test_family_summary(self, store, add_task):
        first = await add_task("Tidy toys", points=2)
        second = await add_task("Brush teeth")
        third = await add_task("Feed fish", "Isha")
        await add_task("Water plants", "Papa", due_in=-2)
        for task in (first, second, third):
            await store.complete(task.id)

        reply = await handle_summary(store, summary_cmd())

        assert reply == (
            "\U0001f47b **Weekly Report**\n\n"
            "**Completed:** 3 tasks\n"
            "**Points earned:** 12 ⭐\n"
            "\n"
            "**Ira:** 2 tasks (7 pts)\n"
            "**Isha:** 1 task (5 pts)\n"
            "\n⚠️ **Overdue:** 1 task\n"
            "- Water plants (Papa)\n"
        )

    async def test_owner_summary(self, store, add_task):
        task = await add_task("Tidy toys", points=3)
        await store.complete(task.id)

        reply = await handle_summary(store, summary_cmd(owner="Ira"))

        assert reply == "\U0001f47b **Weekly Report**\n\n**Ira:**\n- Completed: 1 task\n- Points earned: 3 ⭐\n"

    async def test_overdue_list_is_truncated(self, store, add_task):
        for day in range(1, 6):
            await add_task(f"Chore {day}", due_in=-day)

        reply = await handle_summary(store, summary_cmd())

        assert "⚠️ **Overdue:** 5 tasks\n" in reply
        assert reply.count("(Ira)\n") == 3
        assert reply.endswith("- ...and 2 more\n")
        # Oldest first
        assert reply.index("Chore 5") < reply.index("Chore 4")

    async def test_completions_from_last_week_are_ignored(self, store, add_task, in_memory_db):
        task = await add_task("Tidy toys")
        await store.complete(task.id)
        in_memory_db.set_fields(task.id, updated_at=LAST_WEEK)

        reply = await handle_summary(store, summary_cmd())

        assert reply.startswith("No completed tasks this week")
