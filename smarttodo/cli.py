"""Command-line entry point: the add, list, mark and version commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from smarttodo.listing import ListRequest, run_list
from smarttodo.marking import MarkRequest, run_mark
from smarttodo.store import TaskError, TaskStore, load_tasks

VERSION = "dev"
PROGRAM = "todo"
NO_DESCRIPTION_MESSAGE = "Please provide a task description."


def version_text() -> str:
    """The text shown by the version command."""
    return f"Smart Todo CLI {VERSION}\nBuilt with ❤️ for productive developers\n"


def run_add(
    store: TaskStore,
    descriptions: Sequence[str],
    due: str = "",
    priority: str = "normal",
    path: Path | str | None = None,
) -> int:
    """Add each description as a task, print a summary and save; returns how many were added."""
    if not descriptions:
        print(NO_DESCRIPTION_MESSAGE)
        return 0
    if len(descriptions) > 1:
        print("Multiple tasks detected. Adding each task separately:")

    added = 0
    for description in descriptions:
        if description == "":
            print("Skipping empty task description.")
            continue
        try:
            task = store.add_task(description, due, priority)
        except TaskError as exc:
            print(f"Error adding task '{description}': {exc}")
            continue

        print(f"✓ Added task #{task.id}: {task.description}")
        if task.due_date:
            print(f"  Due date: {task.due_date}")
        print(f"  Priority: {task.priority}")
        print(f"  Status: {'Completed' if task.completed else 'Pending'}")
        print()
        added += 1

    if added:
        try:
            store.save(path)
        except TaskError as exc:
            raise TaskError(f"Error saving tasks: {exc}") from exc
        print(f"Successfully added {added} task(s) and saved to file.")
    return added


def _load() -> TaskStore | None:
    try:
        return load_tasks()
    except TaskError as exc:
        print(f"Error loading tasks: {exc}")
        return None


def _cmd_add(args: argparse.Namespace) -> int:
    if not args.descriptions:
        print(NO_DESCRIPTION_MESSAGE)
        return 0
    store = _load()
    if store is None:
        return 1
    try:
        run_add(store, args.descriptions, args.due, args.priority)
    except TaskError as exc:
        print(exc)
        return 1
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    store = _load()
    if store is None:
        return 1
    request = ListRequest(
        week=args.week,
        month=args.month,
        show_all=args.all,
        priority=args.priority,
        completed=args.completed,
        pending=args.pending,
        overdue=args.overdue,
        due_soon=args.due_soon,
        no_date=args.no_date,
        insights=args.insights,
        smart=args.smart,
        stats=args.stats,
    )
    print(run_list(store, request), end="")
    return 0


def _cmd_mark(args: argparse.Namespace) -> int:
    store = _load()
    if store is None:
        return 1
    request = MarkRequest(
        identifier=args.targets[0] if args.targets else None,
        undone=args.undone,
        force=args.force,
        overdue=args.overdue,
        smart=args.smart,
        batch=args.batch,
        cleanup=args.cleanup,
        edit=args.edit,
        due=args.due,
        priority=args.priority,
        description=args.desc,
    )
    run_mark(store, request)
    return 0


def _cmd_version(args: argparse.Namespace) -> int:
    print(version_text(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the todo command and its subcommands."""
    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description=(
            "todo is a command-line application that helps you manage your tasks "
            "efficiently. You can add, remove, and list tasks, making it easier to "
            "keep track of what you need to do."
        ),
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command", metavar="command")

    add = commands.add_parser("add", help="add a new task to your todo list")
    add.add_argument("descriptions", nargs="*", metavar="description")
    add.add_argument("-d", "--due", default="", help="Due date for the task (format: YYYY-MM-DD)")
    add.add_argument(
        "-p",
        "--priority",
        default="normal",
        help="Priority level of the task (low, normal, high)",
    )
    add.set_defaults(handler=_cmd_add)

    listing = commands.add_parser("list", help="List your tasks with smart filtering and insights")
    listing.add_argument("-w", "--week", action="store_true", help="Show this week's tasks")
    listing.add_argument("-m", "--month", action="store_true", help="Show this month's tasks")
    listing.add_argument("-a", "--all", action="store_true", help="Show all tasks")
    listing.add_argument(
        "-p", "--priority", default="", help="Filter by priority (low/l, normal/n, high/h)"
    )
    listing.add_argument("--completed", action="store_true", help="Show only completed tasks")
    listing.add_argument("--pending", action="store_true", help="Show only pending tasks")
    listing.add_argument("--overdue", action="store_true", help="Show only overdue tasks")
    listing.add_argument(
        "--due-soon", dest="due_soon", action="store_true", help="Show tasks due in next 3 days"
    )
    listing.add_argument(
        "--no-date", dest="no_date", action="store_true", help="Show tasks without due dates"
    )
    listing.add_argument(
        "-i", "--insights", action="store_true", help="Show productivity insights"
    )
    listing.add_argument(
        "-s", "--smart", action="store_true", help="Smart view with recommendations"
    )
    listing.add_argument("--stats", action="store_true", help="Show detailed statistics")
    listing.set_defaults(handler=_cmd_list)

    mark = commands.add_parser(
        "mark", help="Smart task management - mark, edit, and analyze tasks"
    )
    mark.add_argument("targets", nargs="*", metavar="task_id_or_name")
    mark.add_argument("-u", "--undone", action="store_true", help="Mark task as incomplete/undone")
    mark.add_argument("-f", "--force", action="store_true", help="Skip confirmation prompts")
    mark.add_argument("--overdue", action="store_true", help="Show overdue tasks for action")
    mark.add_argument(
        "-s", "--smart", action="store_true", help="Smart-powered task analysis and suggestions"
    )
    mark.add_argument("--batch", action="store_true", help="Batch mark multiple tasks")
    mark.add_argument(
        "--cleanup", action="store_true", help="Mark and suggest cleanup operations"
    )
    mark.add_argument("-e", "--edit", action="store_true", help="Edit task properties")
    mark.add_argument("--due", default="", help="Change due date (YYYY-MM-DD)")
    mark.add_argument("-p", "--priority", default="", help="Change priority (low, normal, high)")
    mark.add_argument("-d", "--desc", default="", help="Change task description")
    mark.set_defaults(handler=_cmd_mark)

    version = commands.add_parser("version", help="Show version information")
    version.set_defaults(handler=_cmd_version)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the todo command line and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())