"""Text views for the list command: task tables, smart view, insights and statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from smarttodo.filters import (
    FilterOptions,
    critical_tasks,
    due_soon_tasks,
    filter_tasks,
    high_priority_pending_count,
    is_due_soon,
    is_in_week_range,
    is_overdue,
    is_same_day,
    is_same_month,
    no_date_tasks,
    overdue_tasks,
    parse_due,
    priority_breakdown,
    quick_wins,
    time_filter_name,
    today_tasks,
)
from smarttodo.store import Task, TaskStore

HEAVY_RULE = "=" * 50
LIGHT_RULE = "-" * 30
PRIORITY_ICONS = {"high": "🔴", "normal": "🟡", "low": "🟢"}
NO_TASKS_MESSAGE = "No tasks found. Use 'todo add \"task description\"' to add a task."
NO_MATCH_MESSAGE = "No tasks match the specified filters."
MAX_QUICK_WINS_SHOWN = 3
NO_DATE_WARNING_THRESHOLD = 5
HIGH_PRIORITY_WARNING_THRESHOLD = 3


@dataclass
class ListRequest:
    """The options given to the list command."""

    week: bool = False
    month: bool = False
    show_all: bool = False
    priority: str = ""
    completed: bool = False
    pending: bool = False
    overdue: bool = False
    due_soon: bool = False
    no_date: bool = False
    insights: bool = False
    smart: bool = False
    stats: bool = False


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def _join(lines: Iterable[str]) -> str:
    return "\n".join(lines) + "\n"


def _percent(part: int, total: int) -> float:
    return part / total * 100 if total else 0.0


def format_task(task: Task, now: datetime | None = None) -> str:
    """One display line for a task, with status, priority and due-date hints."""
    moment = _now(now)
    status = "✅" if task.completed else "🔲"
    icon = PRIORITY_ICONS.get(task.priority, "")
    due_text = ""
    due = parse_due(task)
    if due is not None:
        naive_now = moment.replace(tzinfo=None)
        if is_same_day(due, moment):
            due_text = " 📅 Today"
        elif due < naive_now and not task.completed:
            due_text = f" ⚠️  Overdue ({task.due_date})"
        else:
            due_text = f" 📅 {task.due_date}"
    return f"  {status} {icon} #{task.id}: {task.description}{due_text}"


def _section(title: str, tasks: Sequence[Task], now: datetime) -> list[str]:
    return ["", f"{title} ({len(tasks)})", LIGHT_RULE, *(format_task(t, now) for t in tasks)]


def render_tasks(tasks: Sequence[Task], time_filter: str, now: datetime | None = None) -> str:
    """A table of tasks grouped into pending and completed, with a total."""
    moment = _now(now)
    headers = {
        "today": f"📅 Today's Tasks ({moment.strftime('%Y-%m-%d')})",
        "week": "📅 This Week's Tasks",
        "month": "📅 This Month's Tasks",
        "all": "📅 All Tasks",
    }
    lines = []
    if time_filter in headers:
        lines.append(headers[time_filter])
    lines.append(HEAVY_RULE)

    pending = [task for task in tasks if not task.completed]
    completed = [task for task in tasks if task.completed]
    if pending:
        lines.extend(_section("🔲 Pending Tasks", pending, moment))
    if completed:
        lines.extend(_section("✅ Completed Tasks", completed, moment))
    lines.extend(["", f"Total: {len(tasks)} tasks"])
    return _join(lines)


def render_recommendations(store: TaskStore, now: datetime | None = None) -> str:
    """Suggestions about overdue, undated and high-priority work."""
    moment = _now(now)
    lines = ["", "💡 Smart Recommendations", LIGHT_RULE]

    overdue = overdue_tasks(store.tasks, moment)
    if overdue:
        lines.append(
            f"• You have {len(overdue)} overdue task(s). "
            "Consider rescheduling or completing them."
        )
    undated = no_date_tasks(store.tasks)
    if len(undated) > NO_DATE_WARNING_THRESHOLD:
        lines.append(
            f"• You have {len(undated)} tasks without due dates. "
            "Consider adding dates for better planning."
        )
    high = high_priority_pending_count(store.tasks)
    if high > HIGH_PRIORITY_WARNING_THRESHOLD:
        lines.append(
            f"• You have {high} high-priority tasks. Consider focusing on top 3 first."
        )
    return _join(lines)


def render_smart_view(store: TaskStore, now: datetime | None = None) -> str:
    """Critical, today, due-soon and quick-win sections followed by recommendations."""
    moment = _now(now)
    lines = ["🧠 Smart Task View", HEAVY_RULE]

    critical = critical_tasks(store.tasks, moment)
    if critical:
        lines.extend(_section("🚨 Critical Tasks", critical, moment))
    focus = today_tasks(store.tasks, moment)
    if focus:
        lines.extend(_section("🎯 Today's Focus", focus, moment))
    soon = due_soon_tasks(store.tasks, moment)
    if soon:
        lines.extend(_section("⏰ Due Soon (Next 3 Days)", soon, moment))
    wins = quick_wins(store.tasks)
    if 0 < len(wins) <= MAX_QUICK_WINS_SHOWN:
        lines.extend(_section("⚡ Quick Wins", wins, moment))

    return _join(lines) + render_recommendations(store, moment)


def render_insights(store: TaskStore, now: datetime | None = None) -> str:
    """Task counts, completion percentages and the pending priority breakdown."""
    moment = _now(now)
    total = len(store.tasks)
    completed = pending = overdue = due_soon = no_date = 0
    for task in store.tasks:
        if task.completed:
            completed += 1
            continue
        pending += 1
        if is_overdue(task, moment):
            overdue += 1
        elif is_due_soon(task, moment):
            due_soon += 1
        if not task.due_date:
            no_date += 1

    lines = [
        "📊 Task Insights",
        HEAVY_RULE,
        "",
        "📈 Task Overview",
        LIGHT_RULE,
        f"Total Tasks: {total}",
        f"Completed: {completed} ({_percent(completed, total):.1f}%)",
        f"Pending: {pending} ({_percent(pending, total):.1f}%)",
    ]
    if overdue:
        lines.append(f"⚠️  Overdue: {overdue}")
    if due_soon:
        lines.append(f"⏰ Due Soon: {due_soon}")
    if no_date:
        lines.append(f"📝 No Due Date: {no_date}")

    high, normal, low = priority_breakdown(store.tasks)
    lines.extend(
        [
            "",
            "🎯 Priority Breakdown",
            LIGHT_RULE,
            f"🔴 High: {high}",
            f"🟡 Normal: {normal}",
            f"🟢 Low: {low}",
        ]
    )
    return _join(lines)


def render_statistics(store: TaskStore, now: datetime | None = None) -> str:
    """Insights plus counts of pending tasks due today, this week and this month."""
    moment = _now(now)
    due_today = due_week = due_month = 0
    for task in store.tasks:
        if task.completed:
            continue
        due = parse_due(task)
        if due is None:
            continue
        due_today += is_same_day(due, moment)
        due_week += is_in_week_range(due, moment)
        due_month += is_same_month(due, moment)

    head = _join(["📊 Detailed Statistics", HEAVY_RULE])
    tail = _join(
        [
            "",
            "📅 Time-based Analysis",
            LIGHT_RULE,
            f"Due Today: {due_today}",
            f"Due This Week: {due_week}",
            f"Due This Month: {due_month}",
        ]
    )
    return head + render_insights(store, moment) + tail


def render_quick_insights(tasks: Iterable[Task], now: datetime | None = None) -> str:
    """A one-line summary of overdue and due-soon tasks, or an empty string."""
    moment = _now(now)
    overdue = due_soon = 0
    for task in tasks:
        if task.completed:
            continue
        if is_overdue(task, moment):
            overdue += 1
        elif is_due_soon(task, moment):
            due_soon += 1
    if not overdue and not due_soon:
        return ""
    parts = []
    if overdue:
        parts.append(f"{overdue} overdue")
    if due_soon:
        parts.append(f"{due_soon} due soon")
    return "\n💡 Quick Insights: " + ", ".join(parts) + "\n"


def _options(request: ListRequest) -> FilterOptions:
    return FilterOptions(
        time_filter=time_filter_name(request.week, request.month, request.show_all),
        priority=request.priority,
        show_completed=request.completed,
        show_pending=request.pending,
        show_overdue=request.overdue,
        show_due_soon=request.due_soon,
        show_no_date=request.no_date,
    )


def run_list(store: TaskStore, request: ListRequest, now: datetime | None = None) -> str:
    """Produce the full output of the list command for the given request."""
    moment = _now(now)
    if not store.tasks:
        return NO_TASKS_MESSAGE + "\n"
    if request.smart:
        return render_smart_view(store, moment)
    if request.insights:
        return render_insights(store, moment)
    if request.stats:
        return render_statistics(store, moment)

    options = _options(request)
    selected = filter_tasks(store.tasks, options, moment)
    if not selected:
        return NO_MATCH_MESSAGE + "\n"

    output = render_tasks(selected, options.time_filter, moment)
    if not (request.overdue or request.due_soon or request.no_date or request.completed):
        output += render_quick_insights(selected, moment)
    return output