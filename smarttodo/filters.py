"""Date helpers, task filters and groupings used by the listing views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as _Date
from datetime import datetime, timedelta
from typing import Iterable

from smarttodo.store import Task

DATE_FORMAT = "%Y-%m-%d"
PRIORITY_ORDER = {"high": 3, "normal": 2, "low": 1}
PRIORITY_SHORTCUTS = {"h": "high", "n": "normal", "l": "low"}
DUE_SOON_DAYS = 3
WEEK_SPAN_DAYS = 6


@dataclass
class FilterOptions:
    """Which tasks a listing should include."""

    time_filter: str = "today"
    priority: str = ""
    show_completed: bool = False
    show_pending: bool = False
    show_overdue: bool = False
    show_due_soon: bool = False
    show_no_date: bool = False


def _naive(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None) if moment.tzinfo is not None else moment


def _day(value: _Date | datetime) -> _Date:
    return value.date() if isinstance(value, datetime) else value


def parse_due(task: Task) -> datetime | None:
    """Return the task's due date at midnight, or None if absent or malformed."""
    if not task.due_date:
        return None
    try:
        return datetime.strptime(task.due_date, DATE_FORMAT)
    except ValueError:
        return None


def time_filter_name(week: bool, month: bool, all_: bool) -> str:
    if week:
        return "week"
    if month:
        return "month"
    if all_:
        return "all"
    return "today"


def is_same_day(first: _Date | datetime, second: _Date | datetime) -> bool:
    return _day(first) == _day(second)


def is_in_week_range(date: _Date | datetime, now: _Date | datetime) -> bool:
    """True when the date falls on today or one of the six days after it."""
    start = _day(now)
    end = start + timedelta(days=WEEK_SPAN_DAYS)
    return start <= _day(date) <= end


def is_same_month(first: _Date | datetime, second: _Date | datetime) -> bool:
    return (first.year, first.month) == (second.year, second.month)


def is_overdue(task: Task, now: datetime) -> bool:
    """A pending task whose due day is strictly before today."""
    if task.completed:
        return False
    due = parse_due(task)
    if due is None:
        return False
    return due.date() < _day(now)


def is_due_soon(task: Task, now: datetime) -> bool:
    """A pending task due between now and three days from now, inclusive."""
    if task.completed:
        return False
    due = parse_due(task)
    if due is None:
        return False
    moment = _naive(now)
    return moment <= due <= moment + timedelta(days=DUE_SOON_DAYS)


def matches_time_filter(task: Task, time_filter: str, now: datetime) -> bool:
    if time_filter == "all":
        return True
    if not task.due_date:
        return True
    due = parse_due(task)
    if due is None:
        return False
    if time_filter == "today":
        return is_same_day(due, now)
    if time_filter == "week":
        return is_in_week_range(due, now)
    if time_filter == "month":
        return is_same_month(due, now)
    return True


def matches_priority(task: Task, priority: str) -> bool:
    wanted = priority.lower()
    wanted = PRIORITY_SHORTCUTS.get(wanted, wanted)
    return task.priority == wanted


def _sort_key(task: Task) -> tuple:
    return (
        task.completed,
        -PRIORITY_ORDER.get(task.priority, 0),
        task.due_date == "",
        task.due_date,
    )


def filter_tasks(
    tasks: Iterable[Task], options: FilterOptions, now: datetime | None = None
) -> list[Task]:
    """Select tasks by the options, pending first, then by priority and due date."""
    moment = now if now is not None else datetime.now()
    special = options.show_overdue or options.show_due_soon or options.show_no_date
    selected = []
    for task in tasks:
        if options.show_overdue and not is_overdue(task, moment):
            continue
        if options.show_due_soon and not is_due_soon(task, moment):
            continue
        if options.show_no_date and task.due_date:
            continue
        if not special and not matches_time_filter(task, options.time_filter, moment):
            continue
        if options.priority and not matches_priority(task, options.priority):
            continue
        if options.show_completed and not options.show_pending:
            if not task.completed:
                continue
        elif options.show_pending and not options.show_completed:
            if task.completed:
                continue
        selected.append(task)
    return sorted(selected, key=_sort_key)


def critical_tasks(tasks: Iterable[Task], now: datetime) -> list[Task]:
    """Pending tasks that are overdue, or high priority and due soon."""
    return [
        task
        for task in tasks
        if not task.completed
        and (is_overdue(task, now) or (task.priority == "high" and is_due_soon(task, now)))
    ]


def today_tasks(tasks: Iterable[Task], now: datetime) -> list[Task]:
    result = []
    for task in tasks:
        if task.completed:
            continue
        due = parse_due(task)
        if due is not None and is_same_day(due, now):
            result.append(task)
    return result


def due_soon_tasks(tasks: Iterable[Task], now: datetime) -> list[Task]:
    return [task for task in tasks if not task.completed and is_due_soon(task, now)]


def quick_wins(tasks: Iterable[Task]) -> list[Task]:
    """Pending low-priority tasks with no due date."""
    return [
        task
        for task in tasks
        if not task.completed and task.priority == "low" and not task.due_date
    ]


def overdue_tasks(tasks: Iterable[Task], now: datetime) -> list[Task]:
    return [task for task in tasks if is_overdue(task, now)]


def no_date_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if not task.completed and not task.due_date]


def high_priority_pending_count(tasks: Iterable[Task]) -> int:
    return sum(1 for task in tasks if not task.completed and task.priority == "high")


def priority_breakdown(tasks: Iterable[Task]) -> tuple[int, int, int]:
    """Counts of pending (high, normal, low) tasks."""
    counts = {"high": 0, "normal": 0, "low": 0}
    for task in tasks:
        if not task.completed and task.priority in counts:
            counts[task.priority] += 1
    return counts["high"], counts["normal"], counts["low"]