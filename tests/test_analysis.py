from datetime import datetime

import pytest

from smarttodo.analysis import (
    completed_tasks,
    find_task,
    format_task_for_marking,
    health_score,
    high_priority_pending_tasks,
    is_task_due_today,
    overdue_duration,
    pending_tasks,
    priority_distribution,
    render_mark_suggestions,
    render_smart_analysis,
    stale_tasks,
    today_tasks_for_completion,
    upcoming_deadlines,
    update_task,
)
from smarttodo.store import Task, TaskError, TaskStore

NOW = datetime(2025, 7, 15, 10, 0)


def make_store():
    store = TaskStore()
    store.add_task("Buy groceries", "2025-07-15", "high")
    store.add_task("Write report", "2025-07-10", "normal")
    store.add_task("Tidy desk", "", "low")
    store.add_task("Call plumber", "2025-07-18", "high")
    done = store.add_task("Old chore", "", "normal")
    done.completed = True
    return store


def test_is_task_due_today():
    assert is_task_due_today(Task(1, "a", "2025-07-15"), NOW)
    assert not is_task_due_today(Task(1, "a", "2025-07-16"), NOW)
    assert not is_task_due_today(Task(1, "a", ""), NOW)
    assert not is_task_due_today(Task(1, "a", "bad"), NOW)


def test_health_score_bounds():
    assert health_score(0, 0, 0, 0) == 100
    assert health_score(4, 4, 0, 0) == 100
    assert health_score(1, 0, 5, 5) == 0
    assert 0 <= health_score(7, 3, 1, 1) <= 100


def test_health_score_penalties_lower_score():
    base = health_score(10, 10, 0, 0)
    assert health_score(10, 10, 1, 0) < base
    assert health_score(10, 10, 0, 1) < base


def test_priority_distribution_counts_pending_only():
    store = make_store()
    dist = priority_distribution(store.tasks)
    assert dist["high"] == len(high_priority_pending_tasks(store.tasks))
    assert sum(dist.values()) == len(pending_tasks(store.tasks))
    assert set(dist) == {"high", "normal", "low"}


def test_upcoming_deadlines_excludes_past_and_today_midnight():
    store = make_store()
    upcoming = upcoming_deadlines(store.tasks, NOW)
    assert [t.description for t in upcoming] == ["Call plumber"]


def test_groupings():
    store = make_store()
    assert [t.description for t in today_tasks_for_completion(store.tasks, NOW)] == [
        "Buy groceries"
    ]
    assert [t.description for t in stale_tasks(store.tasks)] == ["Tidy desk"]
    assert [t.description for t in completed_tasks(store.tasks)] == ["Old chore"]
    assert len(pending_tasks(store.tasks)) + len(completed_tasks(store.tasks)) == len(
        store.tasks
    )


def test_overdue_duration():
    assert overdue_duration(Task(1, "a", ""), NOW) == "unknown"
    assert overdue_duration(Task(1, "a", "nope"), NOW) == "unknown"
    assert overdue_duration(Task(1, "a", "2025-07-14"), NOW) == "1 day"
    assert overdue_duration(Task(1, "a", "2025-07-10"), NOW) == "5 days"


def test_find_task_by_id_and_name():
    store = make_store()
    assert find_task(store, "2").description == "Write report"
    assert find_task(store, "PLUMBER").id == 4
    assert find_task(store, "missing thing") is None


def test_find_task_number_falls_back_to_name():
    store = TaskStore()
    store.add_task("Room 42 cleanup")
    assert find_task(store, "42").description == "Room 42 cleanup"


def test_update_task_sets_fields():
    store = make_store()
    task = update_task(store, 3, priority="high", due_date="2025-08-01", completed=True)
    assert find_task(store, "3") is task
    assert (task.priority, task.due_date, task.completed) == ("high", "2025-08-01", True)


def test_update_task_errors():
    store = make_store()
    with pytest.raises(TaskError):
        update_task(store, 99, completed=True)
    with pytest.raises(TypeError):
        update_task(store, 1, colour="red")


def test_format_task_for_marking():
    line = format_task_for_marking(Task(7, "Pay bills", "2025-07-20", "high"))
    assert line == "  🔴 #7: Pay bills (due: 2025-07-20)"
    assert format_task_for_marking(Task(8, "Read", "", "low")) == "  🟢 #8: Read"


def test_render_smart_analysis_sections():
    text = render_smart_analysis(make_store(), NOW)
    assert text.startswith("🧠 Smart Task Analysis\n")
    assert "⚠️  Overdue Tasks: 1 (needs immediate attention)" in text
    assert "🎯 Focus: Handle 1 overdue task(s) first" in text
    assert "  • #2: Write report (due 2025-07-10)" in text
    assert "   Run: todo delete --completed" in text
    assert "   Run: todo delete --old" in text
    assert f"💚 Task Health Score: {health_score(5, 1, 1, 2)}/100" in text


def test_render_smart_analysis_empty_focus():
    store = TaskStore()
    store.add_task("Done thing").completed = True
    text = render_smart_analysis(store, NOW)
    assert "🎯 Focus: Great job! Consider picking up some quick wins" in text
    assert "Overdue Recovery" not in text


def test_render_mark_suggestions_limits_to_three():
    store = TaskStore()
    for index in range(5):
        store.add_task(f"urgent {index}", "", "high")
    text = render_mark_suggestions(store, NOW)
    assert "🔴 High Priority (5 tasks):" in text
    assert "urgent 2" in text
    assert "urgent 3" not in text
    assert text.endswith("💡 Use 'todo mark --smart' for detailed analysis\n")


def test_render_mark_suggestions_sections():
    text = render_mark_suggestions(make_store(), NOW)
    assert "📅 Due Today (1 tasks):" in text
    assert "⚠️  Overdue (1 tasks):" in text
    assert "  🟢 #3: Tidy desk" in text