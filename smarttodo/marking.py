"""The mark command: completing, editing and bulk-handling tasks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from smarttodo.analysis import (
    completed_tasks,
    find_task,
    high_priority_pending_tasks,
    overdue_duration,
    pending_tasks,
    render_mark_suggestions,
    render_smart_analysis,
    today_tasks_for_completion,
    update_task,
)
from smarttodo.filters import overdue_tasks
from smarttodo.listing import HEAVY_RULE, NO_TASKS_MESSAGE
from smarttodo.store import Task, TaskError, TaskStore, validate_date, validate_priority

Ask = Callable[[str], str]
PathLike = Path | str | None

EDIT_RULE = "=" * 40
CLEANUP_SUGGESTION_THRESHOLD = 5

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class MarkRequest:
    """The options and argument given to the mark command."""

    identifier: str | None = None
    undone: bool = False
    force: bool = False
    overdue: bool = False
    smart: bool = False
    batch: bool = False
    cleanup: bool = False
    edit: bool = False
    due: str = ""
    priority: str = ""
    description: str = ""


def _join(lines: Iterable[str]) -> str:
    return "\n".join(lines) + "\n"


def _read(ask: Ask | None, prompt: str) -> str:
    reader = ask if ask is not None else input
    try:
        return reader(prompt)
    except EOFError:
        return ""


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def _save(store: TaskStore, path: PathLike) -> None:
    try:
        store.save(path)
    except TaskError as exc:
        raise TaskError(f"Error saving changes: {exc}") from exc


def confirm(message: str, ask: Ask | None = None) -> bool:
    """Ask a yes/no question; only 'y' or 'yes' (any case) count as yes."""
    response = _read(ask, f"❓ {message} (y/N): ").strip().lower()
    return response in ("y", "yes")


def parse_selection(text: str, count: int) -> list[int]:
    """Zero-based indices for the comma-separated 1-based numbers in range."""
    indices = []
    for part in text.split(","):
        part = part.strip()
        if not _INTEGER.fullmatch(part):
            continue
        number = int(part)
        if 0 < number <= count:
            indices.append(number - 1)
    return indices


def edit_task_properties(
    store: TaskStore,
    identifier: str,
    due: str = "",
    priority: str = "",
    description: str = "",
    path: PathLike = None,
) -> dict[str, str]:
    """Change due date, priority or description of a task and save; returns the changes."""
    task = find_task(store, identifier)
    if task is None:
        raise TaskError(f"Task not found: {identifier}")

    print(f"📝 Editing Task #{task.id}: {task.description}")
    print(EDIT_RULE)

    if due:
        try:
            validate_date(due)
        except TaskError as exc:
            raise TaskError(f"Invalid due date: {exc}") from exc
    if priority:
        try:
            validate_priority(priority)
        except TaskError as exc:
            raise TaskError(f"Invalid priority: {exc}") from exc

    changes: dict[str, str] = {}
    if due:
        changes["Due Date"] = f"{task.due_date} → {due}"
        update_task(store, task.id, due_date=due)
    if priority:
        lowered = priority.lower()
        changes["Priority"] = f"{task.priority} → {lowered}"
        update_task(store, task.id, priority=lowered)
    if description:
        changes["Description"] = f"{task.description} → {description}"
        update_task(store, task.id, description=description)

    if not changes:
        print("ℹ️  No changes specified. Use --due, --priority, or --desc flags to edit.")
        return changes

    _save(store, path)
    print("✅ Task updated successfully!")
    for name, change in changes.items():
        print(f"  {name}: {change}")
    return changes


def post_completion_suggestions(
    store: TaskStore, task: Task, now: datetime | None = None
) -> str:
    """Encouragement and next steps after a task has been completed."""
    moment = _now(now)
    lines = ["", f"🎉 Great job completing: {task.description}"]
    if pending_tasks(store.tasks):
        lines.append("💡 Next suggestions:")
        high = high_priority_pending_tasks(store.tasks)
        if high:
            lines.append(f"   🔴 High priority: {high[0].description}")
        today = today_tasks_for_completion(store.tasks, moment)
        if today:
            lines.append(f"   📅 Due today: {today[0].description}")
        if len(completed_tasks(store.tasks)) > CLEANUP_SUGGESTION_THRESHOLD:
            lines.append("   🧹 Consider running 'todo delete --completed' to clean up")
    return _join(lines)


def mark_task(
    store: TaskStore,
    identifier: str,
    undone: bool = False,
    force: bool = False,
    ask: Ask | None = None,
    path: PathLike = None,
    now: datetime | None = None,
) -> Task | None:
    """Mark one task done or undone after confirmation; None if cancelled."""
    task = find_task(store, identifier)
    if task is None:
        raise TaskError(f"Task not found: {identifier}")

    action = "mark as incomplete" if undone else "complete"
    if not force and not confirm(
        f"{action.title()} task #{task.id}: {task.description}", ask
    ):
        print("Operation cancelled.")
        return None

    try:
        update_task(store, task.id, completed=not undone)
    except TaskError as exc:
        raise TaskError(f"Error updating task: {exc}") from exc
    _save(store, path)

    status = "🔲 marked as incomplete" if undone else "✅ completed"
    print(f"✅ Task #{task.id} {status}: {task.description}")
    if not undone:
        print(post_completion_suggestions(store, task, now), end="")
    return task


def _delete(store: TaskStore, task_id: int) -> None:
    for position, candidate in enumerate(store.tasks):
        if candidate.id == task_id:
            del store.tasks[position]
            return


def _handle_overdue(store: TaskStore, tasks: list[Task], ask: Ask | None, path: PathLike) -> None:
    print("\n🎯 Taking action on overdue tasks...")
    for task in tasks:
        print(f"\nTask #{task.id}: {task.description} (due {task.due_date})")
        print("Actions: (c)omplete, (r)eschedule, (d)elete, (s)kip")
        action = _read(ask, "Choose action: ").strip().lower()
        if action in ("c", "complete"):
            update_task(store, task.id, completed=True)
            print(f"✅ Marked task #{task.id} as completed")
        elif action in ("r", "reschedule"):
            new_date = _read(ask, "New due date (YYYY-MM-DD): ").strip()
            try:
                validate_date(new_date)
            except TaskError:
                print("❌ Invalid date format")
            else:
                update_task(store, task.id, due_date=new_date)
                print(f"📅 Rescheduled task #{task.id} to {new_date}")
        elif action in ("d", "delete"):
            if confirm(f"Delete task #{task.id}", ask):
                _delete(store, task.id)
                print(f"🗑️  Deleted task #{task.id}")
        else:
            print(f"⏭️  Skipped task #{task.id}")
    _save(store, path)


def show_overdue_actions(
    store: TaskStore,
    now: datetime | None = None,
    ask: Ask | None = None,
    path: PathLike = None,
) -> None:
    """List overdue tasks and, if confirmed, act on each one interactively."""
    moment = _now(now)
    print("⚠️  Overdue Task Actions")
    print(HEAVY_RULE)

    overdue = overdue_tasks(store.tasks, moment)
    if not overdue:
        print("🎉 Great! No overdue tasks found.")
        return

    print(f"Found {len(overdue)} overdue task(s):\n")
    for number, task in enumerate(overdue, start=1):
        print(f"{number}. #{task.id}: {task.description}")
        print(f"   Due: {task.due_date} (overdue by {overdue_duration(task, moment)})")
        print(f"   Priority: {task.priority}")
        print()

    print("🎯 Suggested Actions:")
    print("1. Complete overdue tasks immediately")
    print("2. Reschedule to realistic dates")
    print("3. Mark as done if already completed")
    print("4. Delete if no longer relevant")

    if confirm("Would you like to take action on overdue tasks?", ask):
        _handle_overdue(store, overdue, ask, path)


def _mark_many(store: TaskStore, tasks: Iterable[Task], undone: bool, path: PathLike) -> int:
    count = 0
    for task in tasks:
        try:
            update_task(store, task.id, completed=not undone)
        except TaskError:
            continue
        count += 1
    _save(store, path)
    action = "marked as incomplete" if undone else "completed"
    print(f"✅ {action.title()} {count} task(s)")
    return count


def batch_operations(
    store: TaskStore,
    undone: bool = False,
    force: bool = False,
    ask: Ask | None = None,
    path: PathLike = None,
) -> int:
    """Mark several pending tasks at once; returns how many were updated."""
    print("📦 Batch Task Operations")
    print(HEAVY_RULE)

    pending = pending_tasks(store.tasks)
    if not pending:
        print("No pending tasks found.")
        return 0

    print(f"Found {len(pending)} pending task(s):\n")
    for number, task in enumerate(pending, start=1):
        status = "✅" if task.completed else "🔲"
        due_text = f" (due: {task.due_date})" if task.due_date else ""
        print(f"{number}. {status} #{task.id}: {task.description}{due_text}")

    if force:
        return _mark_many(store, pending, undone, path)

    answer = _read(
        ask, "\nEnter task numbers to mark (comma-separated, or 'all'): "
    ).strip()
    if answer == "all":
        return _mark_many(store, pending, undone, path)
    chosen = [pending[index] for index in parse_selection(answer, len(pending))]
    return _mark_many(store, chosen, undone, path)


def cleanup_operations() -> str:
    """The cleanup view: a scan for obvious completions and a pointer to delete."""
    return _join(
        [
            "🧹 Cleanup Operations",
            HEAVY_RULE,
            "🤖 Scanning for obvious completions...",
            "   (No obvious completions detected)",
            "",
            "🗑️  Cleanup Suggestions:",
            "Run 'todo delete --smart' for intelligent cleanup options",
        ]
    )


def run_mark(
    store: TaskStore,
    request: MarkRequest,
    now: datetime | None = None,
    ask: Ask | None = None,
    path: PathLike = None,
) -> None:
    """Carry out the mark command for the given request, printing its output."""
    moment = _now(now)
    if not store.tasks:
        print(NO_TASKS_MESSAGE)
        return
    try:
        if request.smart:
            print(render_smart_analysis(store, moment), end="")
        elif request.overdue:
            show_overdue_actions(store, moment, ask, path)
        elif request.batch:
            batch_operations(store, request.undone, request.force, ask, path)
        elif request.cleanup:
            print(cleanup_operations(), end="")
        elif request.identifier is None:
            print(render_mark_suggestions(store, moment), end="")
        elif request.edit or request.due or request.priority or request.description:
            edit_task_properties(
                store,
                request.identifier,
                request.due,
                request.priority,
                request.description,
                path,
            )
        else:
            mark_task(
                store, request.identifier, request.undone, request.force, ask, path, moment
            )
    except TaskError as exc:
        print(f"❌ {exc}")