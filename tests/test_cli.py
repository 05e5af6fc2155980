import pytest

from smarttodo.cli import build_parser, main, run_add, version_text
from smarttodo.store import TaskError, TaskStore, load_tasks


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def _data_file(home):
    return home / ".todo" / "tasks.json"


def test_run_add_saves_tasks(tmp_path, capsys):
    path = tmp_path / "tasks.json"
    store = TaskStore()
    added = run_add(store, ["write report", "call bob"], "2025-07-20", "HIGH", path)
    assert added == 2
    loaded = load_tasks(path)
    assert [task.description for task in loaded.tasks] == ["write report", "call bob"]
    assert all(task.priority == "high" for task in loaded.tasks)
    assert loaded.next_id == 3
    out = capsys.readouterr().out
    assert "Multiple tasks detected. Adding each task separately:" in out
    assert "✓ Added task #1: write report" in out
    assert "  Due date: 2025-07-20" in out
    assert "Successfully added 2 task(s) and saved to file." in out


def test_run_add_invalid_priority_saves_nothing(tmp_path, capsys):
    path = tmp_path / "tasks.json"
    store = TaskStore()
    assert run_add(store, ["thing"], "", "urgent", path) == 0
    assert not path.exists()
    assert store.tasks == []
    assert "Error adding task 'thing':" in capsys.readouterr().out


def test_run_add_invalid_date_reports_error(tmp_path, capsys):
    path = tmp_path / "tasks.json"
    assert run_add(TaskStore(), ["thing"], "2025-13-45", "normal", path) == 0
    assert "invalid date" in capsys.readouterr().out


def test_run_add_skips_empty_description(tmp_path, capsys):
    path = tmp_path / "tasks.json"
    store = TaskStore()
    assert run_add(store, ["", "real"], "", "normal", path) == 1
    assert [task.description for task in load_tasks(path).tasks] == ["real"]
    assert "Skipping empty task description." in capsys.readouterr().out


def test_run_add_without_descriptions(capsys):
    assert run_add(TaskStore(), []) == 0
    assert "Please provide a task description." in capsys.readouterr().out


def test_run_add_save_failure_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(TaskError):
        run_add(TaskStore(), ["a"], "", "normal", blocker / "tasks.json")


def test_version_text():
    assert version_text().startswith("Smart Todo CLI dev\n")
    assert "Built with ❤️ for productive developers" in version_text()


def test_main_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out == version_text()


def test_main_add_writes_home_file(home, capsys):
    assert main(["add", "buy milk", "-p", "high", "-d", "2025-07-20"]) == 0
    store = load_tasks(_data_file(home))
    assert len(store.tasks) == 1
    task = store.tasks[0]
    assert (task.description, task.priority, task.due_date) == ("buy milk", "high", "2025-07-20")
    assert task.completed is False


def test_main_add_without_description(home, capsys):
    assert main(["add"]) == 0
    assert "Please provide a task description." in capsys.readouterr().out
    assert not _data_file(home).exists()


def test_main_list_without_tasks(home, capsys):
    assert main(["list"]) == 0
    assert "No tasks found." in capsys.readouterr().out


def test_main_list_all_shows_task(home, capsys):
    main(["add", "water plants"])
    capsys.readouterr()
    assert main(["list", "-a"]) == 0
    out = capsys.readouterr().out
    assert "📅 All Tasks" in out
    assert "#1: water plants" in out
    assert "Total: 1 tasks" in out


def test_main_list_reports_corrupt_file(home, capsys):
    path = _data_file(home)
    path.parent.mkdir(parents=True)
    path.write_text("not json")
    assert main(["list"]) == 1
    assert "Error loading tasks:" in capsys.readouterr().out


def test_main_mark_force_completes(home, capsys):
    main(["add", "pay rent"])
    assert main(["mark", "1", "-f"]) == 0
    assert load_tasks(_data_file(home)).tasks[0].completed is True


def test_main_mark_edit_description(home, capsys):
    main(["add", "old name"])
    assert main(["mark", "1", "--desc", "Renamed", "-p", "LOW"]) == 0
    task = load_tasks(_data_file(home)).tasks[0]
    assert task.description == "Renamed"
    assert task.priority == "low"


def test_build_parser_list_flags():
    args = build_parser().parse_args(["list", "-w", "-p", "h", "--due-soon", "--no-date"])
    assert args.week is True
    assert args.priority == "h"
    assert args.due_soon is True
    assert args.no_date is True
    assert args.month is False


def test_build_parser_add_defaults():
    args = build_parser().parse_args(["add", "x"])
    assert args.priority == "normal"
    assert args.due == ""
    assert args.descriptions == ["x"]


def test_main_without_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: todo" in capsys.readouterr().out


def test_main_unknown_command_exits():
    with pytest.raises(SystemExit) as excinfo:
        main(["bogus"])
    assert excinfo.value.code == 2