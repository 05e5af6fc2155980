"""Task analysis used by the mark command: lookups, updates, scores and suggestion views."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Any, Iterable, Sequence

from smarttodo.filters import is_overdue, overdue_tasks, parse_due, quick_wins
from smarttodo.listing import HEAVY_RULE, LIGHT_RULE, PRIORITY_ICONS
from smarttodo.store import Task, TaskError, TaskStore

MAX_SHOWN = 3
UPCOMING_DAYS = 7
OVERDUE_PENALTY = 20
HIGH_PRIORITY_PENALTY = 10
UPDATABLE_FIELDS = frozenset({"description", "due_date", "priority", "completed"})

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def _naive(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None) if moment.tzinfo is not None else moment


def _join(lines: Iterable[str]) -> str:
    return "\n".join(lines) + "\n"


def is_task_due_today(task: Task, now: datetime) -> bool:
    """True when the task's due date falls on the same calendar day as now."""
    due = parse_due(task)
    if due is None:
        return False
    return due.date() == now.date()


def health_score(total: int, completed: int, overdue: int, high_priority_pending: int) -> int:
    """A 0-100 score: completion share minus penalties for overdue and high-priority work."""
    if total == 0:
        return 100
    score = (
        (completed * 100) // total
        - overdue * OVERDUE_PENALTY
        - high_priority_pending * HIGH_PRIORITY_PENALTY
    )
    return max(0, min(100, score))


def priority_distribution(tasks: Iterable[Task]) -> dict[str, int]:
    """Counts of pending tasks per priority; high, normal and low are always present."""
    dist = {"high": 0, "normal": 0, "low": 0}
    for task in tasks:
        if not task.completed:
            dist[task.priority] = dist.get(task.priority, 0) + 1
    return dist


def upcoming_deadlines(tasks: Iterable[Task], now: datetime) -> list[Task]:
    """Pending tasks due strictly after now and strictly before a week from now."""
    moment = _naive(now)
    limit = moment + timedelta(days=UPCOMING_DAYS)
    result = []
    for task in tasks:
        if task.completed:
            continue
        due = parse_due(task)
        if due is not None and moment < due < limit:
            result.append(task)
    return result


def pending_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if not task.completed]


def high_priority_pending_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if not task.completed and task.priority == "high"]


def today_tasks_for_completion(tasks: Iterable[Task], now: datetime) -> list[Task]:
    return [task for task in tasks if not task.completed and is_task_due_today(task, now)]


def stale_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Pending low-priority tasks without a due date."""
    return [
        task
        for task in tasks
        if not task.completed and not task.due_date and task.priority == "low"
    ]


def completed_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if task.completed]


def overdue_duration(task: Task, now: datetime) -> str:
    """How long ago the task fell due, in whole days, or 'unknown'."""
    due = parse_due(task)
    if due is None:
        return "unknown"
    elapsed = _naive(now) - due
    days = int(elapsed.total_seconds() / 86400)
    if days == 1:
        return "1 day"
    return f"{days} days"


def find_task(store: TaskStore, identifier: str) -> Task | None:
    """Find a task by numeric id, else by case-insensitive partial description match."""
    if _INTEGER.fullmatch(identifier):
        wanted = int(identifier)
        for task in store.tasks:
            if task.id == wanted:
                return task
    term = identifier.lower()
    for task in store.tasks:
        if term in task.description.lower():
            return task
    return None


def update_task(store: TaskStore, task_id: int, **kwargs: Any) -> Task:
    """Set the given fields on the task with this id and return it."""
    unknown = set(kwargs) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"cannot update task fields: {', '.join(sorted(unknown))}")
    for task in store.tasks:
        if task.id == task_id:
            for name, value in kwargs.items():
                setattr(task, name, value)
            return task
    raise TaskError("task not found")


def format_task_for_marking(task: Task) -> str:
    icon = PRIORITY_ICONS.get(task.priority, "")
    due_text = f" (due: {task.due_date})" if task.due_date else ""
    return f"  {icon} #{task.id}: {task.description}{due_text}"


def _pattern_analysis(store: TaskStore, now: datetime) -> list[str]:
    total = len(store.tasks)
    completed = overdue = due_today = high_pending = 0
    for task in store.tasks:
        if task.completed:
            completed += 1
            continue
        if task.priority == "high":
            high_pending += 1
        if is_overdue(task, now):
            overdue += 1
        if is_task_due_today(task, now):
            due_today += 1

    rate = completed / total * 100 if total else 0.0
    lines = [
        "",
        "📊 Task Pattern Analysis",
        LIGHT_RULE,
        f"📈 Completion Rate: {rate:.1f}% ({completed}/{total})",
    ]
    if overdue:
        lines.append(f"⚠️  Overdue Tasks: {overdue} (needs immediate attention)")
    if due_today:
        lines.append(f"🎯 Due Today: {due_today} tasks")
    if high_pending:
        lines.append(f"🔴 High Priority Pending: {high_pending} tasks")
    score = health_score(total, completed, overdue, high_pending)
    lines.append(f"💚 Task Health Score: {score}/100")
    return lines


def _optimal_focus(store: TaskStore, now: datetime) -> str:
    overdue = overdue_tasks(store.tasks, now)
    today = today_tasks_for_completion(store.tasks, now)
    high = high_priority_pending_tasks(store.tasks)
    if overdue:
        return f"🎯 Focus: Handle {len(overdue)} overdue task(s) first"
    if today:
        return f"🎯 Focus: Complete {len(today)} task(s) due today"
    if high:
        return f"🎯 Focus: Work on {len(high)} high-priority task(s)"
    return "🎯 Focus: Great job! Consider picking up some quick wins"


def _productivity_insights(store: TaskStore, now: datetime) -> list[str]:
    dist = priority_distribution(store.tasks)
    lines = [
        "",
        "💡 Productivity Insights",
        LIGHT_RULE,
        f"Priority Distribution: High:{dist['high']}, Normal:{dist['normal']}, Low:{dist['low']}",
    ]
    upcoming = upcoming_deadlines(store.tasks, now)
    if upcoming:
        lines.append(f"📅 Upcoming Deadlines ({len(upcoming)} tasks in next 7 days)")
    lines.append(_optimal_focus(store, now))
    return lines


def _bullets(tasks: Sequence[Task], with_due: bool = False) -> list[str]:
    return [
        f"  • #{task.id}: {task.description}" + (f" (due {task.due_date})" if with_due else "")
        for task in tasks[:MAX_SHOWN]
    ]


def _completion_recommendations(store: TaskStore, now: datetime) -> list[str]:
    lines = ["", "🎯 Completion Recommendations", LIGHT_RULE]
    wins = quick_wins(store.tasks)
    if wins:
        lines.append(f"⚡ Quick Wins ({len(wins)} tasks):")
        lines.extend(_bullets(wins))
    impact = high_priority_pending_tasks(store.tasks)
    if impact:
        lines.append(f"🎯 High Impact ({len(impact)} tasks):")
        lines.extend(_bullets(impact))
    overdue = overdue_tasks(store.tasks, now)
    if overdue:
        lines.append(f"🚨 Overdue Recovery ({len(overdue)} tasks):")
        lines.extend(_bullets(overdue, with_due=True))
    return lines


def _cleanup_suggestions(store: TaskStore) -> list[str]:
    lines = ["", "🧹 Cleanup Integration", LIGHT_RULE]
    done = completed_tasks(store.tasks)
    if done:
        lines.append(f"🗑️  Consider deleting {len(done)} old completed tasks")
        lines.append("   Run: todo delete --completed")
    stale = stale_tasks(store.tasks)
    if stale:
        lines.append(f"📋 Review {len(stale)} stale tasks (no due date, low priority)")
        lines.append("   Run: todo delete --old")
    return lines


def render_smart_analysis(store: TaskStore, now: datetime | None = None) -> str:
    """Pattern analysis, productivity insights, recommendations and cleanup hints."""
    moment = _now(now)
    lines = ["🧠 Smart Task Analysis", HEAVY_RULE]
    lines.extend(_pattern_analysis(store, moment))
    lines.extend(_productivity_insights(store, moment))
    lines.extend(_completion_recommendations(store, moment))
    lines.extend(_cleanup_suggestions(store))
    return _join(lines)


def render_mark_suggestions(store: TaskStore, now: datetime | None = None) -> str:
    """Tasks worth marking next: due today, high priority, quick wins and overdue."""
    moment = _now(now)
    lines = ["🎯 Smart Mark Suggestions", HEAVY_RULE]

    today = today_tasks_for_completion(store.tasks, moment)
    if today:
        lines.extend(["", f"📅 Due Today ({len(today)} tasks):"])
        lines.extend(format_task_for_marking(task) for task in today)
    high = high_priority_pending_tasks(store.tasks)
    if high:
        lines.extend(["", f"🔴 High Priority ({len(high)} tasks):"])
        lines.extend(format_task_for_marking(task) for task in high[:MAX_SHOWN])
    wins = quick_wins(store.tasks)
    if wins:
        lines.extend(["", f"⚡ Quick Wins ({len(wins)} tasks):"])
        lines.extend(format_task_for_marking(task) for task in wins[:MAX_SHOWN])
    overdue = overdue_tasks(store.tasks, moment)
    if overdue:
        lines.extend(["", f"⚠️  Overdue ({len(overdue)} tasks):"])
        lines.extend(format_task_for_marking(task) for task in overdue[:MAX_SHOWN])

    lines.extend(
        [
            "",
            "💡 Use 'todo mark <id>' to mark tasks as complete",
            "💡 Use 'todo mark --smart' for detailed analysis",
        ]
    )
    return _join(lines)