"""Task records and the JSON file that holds them."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import date as _Date
from pathlib import Path
from typing import Any

DATA_FILE_NAME = "tasks.json"
DATA_DIR_NAME = ".todo"
VALID_PRIORITIES = frozenset({"low", "normal", "high"})

_DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TaskError(Exception):
    """Raised for invalid task input or a store that cannot be read or written."""


@dataclass
class Task:
    """A single todo item."""

    id: int
    description: str
    due_date: str = ""
    priority: str = "normal"
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "due_date": self.due_date,
            "priority": self.priority,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        return cls(
            id=int(data.get("id") or 0),
            description=str(data.get("description") or ""),
            due_date=str(data.get("due_date") or ""),
            priority=str(data.get("priority") or ""),
            completed=bool(data.get("completed", False)),
        )


def validate_priority(priority: str) -> None:
    """Raise TaskError unless the priority is low, normal or high (any case)."""
    lowered = priority.lower()
    if lowered not in VALID_PRIORITIES:
        raise TaskError(
            f"invalid priority '{lowered}'. Valid priorities are: low, normal, high"
        )


def validate_date(date: str) -> None:
    """Raise TaskError unless the text is empty or a real YYYY-MM-DD date."""
    if date == "":
        return
    if not _DATE_SHAPE.fullmatch(date):
        raise TaskError(
            f"invalid date format '{date}'. Please use YYYY-MM-DD format"
        )
    try:
        _Date.fromisoformat(date)
    except ValueError:
        raise TaskError(
            f"invalid date '{date}'. Please provide a valid date in YYYY-MM-DD format"
        ) from None


def data_file_path() -> Path:
    """Return the default location of the tasks file."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return Path(DATA_FILE_NAME)
    return home / DATA_DIR_NAME / DATA_FILE_NAME


@dataclass
class TaskStore:
    """All tasks together with the next identifier to hand out."""

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "next_id": self.next_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskStore":
        if not isinstance(data, dict):
            raise TaskError("tasks data must be a JSON object")
        raw_tasks = data.get("tasks") or []
        return cls(
            tasks=[Task.from_dict(item) for item in raw_tasks],
            next_id=int(data.get("next_id") or 0),
        )

    def save(self, path: Path | str | None = None) -> None:
        """Write the store as indented JSON, creating the directory if needed."""
        target = Path(path) if path is not None else data_file_path()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TaskError(f"failed to create data directory: {exc}") from exc
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise TaskError(f"failed to write tasks file: {exc}") from exc

    def add_task(self, description: str, due_date: str = "", priority: str = "normal") -> Task:
        """Validate and append a new pending task, returning it."""
        validate_date(due_date)
        validate_priority(priority)
        task = Task(
            id=self.next_id,
            description=description,
            due_date=due_date,
            priority=priority.lower(),
            completed=False,
        )
        self.tasks.append(task)
        self.next_id += 1
        return task

    def complete_task(self, task_id: int) -> None:
        """Mark the task with this id as completed."""
        for task in self.tasks:
            if task.id == task_id:
                task.completed = True
                return
        raise TaskError(f"task with ID {task_id} not found")


def load_tasks(path: Path | str | None = None) -> TaskStore:
    """Read the store from disk; a missing file gives an empty store."""
    target = Path(path) if path is not None else data_file_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise TaskError(f"failed to create data directory: {exc}") from exc
    if not target.exists():
        return TaskStore()
    try:
        text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise TaskError(f"failed to read tasks file: {exc}") from exc
    try:
        return TaskStore.from_dict(json.loads(text))
    except (ValueError, TypeError, AttributeError, TaskError) as exc:
        raise TaskError(f"failed to parse tasks file: {exc}") from exc