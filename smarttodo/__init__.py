"""Command-line todo list manager with due dates, priorities, smart filtering and insights."""

__version__ = "0.1.0"