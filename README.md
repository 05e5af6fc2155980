# smarttodo

A command-line todo list manager. Each task has a number, a description, an
optional due date (`YYYY-MM-DD`), a priority (`low`, `normal` or `high`) and a
completed flag. Tasks are stored as indented JSON in `~/.todo/tasks.json`. If
the home directory cannot be found, `tasks.json` in the current directory is
used instead.

## Installation

```
pip install .
```

This installs the `todo` command. Running `todo` with no command prints the
help text.

## Adding tasks

```
todo add "buy groceries"
todo add "write report" --due 2025-07-20 --priority high
todo add "call plumber" "book dentist" -p low
```

Each description becomes its own task, all with the same due date and
priority. Priority defaults to `normal` and is accepted in any case. A due
date must be a real calendar date in `YYYY-MM-DD` form. A task whose date or
priority is invalid is reported and skipped, and the others are still added.

## Listing tasks

With no options, `todo list` shows the tasks due today. Tasks without a due
date are always included.

```
todo list                 # due today
todo list -w              # due today or in the next six days
todo list -m              # due this calendar month
todo list -a              # every task
todo list -w -p h         # high-priority tasks this week (h, n, l or the full word)
todo list --completed     # completed tasks only
todo list --pending       # pending tasks only
todo list --overdue       # pending tasks due before today
todo list --due-soon      # pending tasks due between now and three days from now
todo list --no-date       # tasks without a due date
todo list --insights      # counts by status and by priority
todo list --stats         # insights plus pending tasks due today, this week, this month
todo list --smart         # critical, today, due-soon and quick-win sections with recommendations
```

`--overdue`, `--due-soon` and `--no-date` replace the time filter. A due
date counts from midnight, so tasks due today are not counted as due soon.
Results are sorted with pending tasks first, then by priority (high, normal,
low), then by the earliest due date. Tasks without a date come after dated
tasks. A short line counting overdue and due-soon tasks follows the plain
listings.

## Marking and editing tasks

A task can be named by its number or by part of its description. The
description match ignores case, and the first match is used.

```
todo mark                        # suggestions: due today, high priority, quick wins, overdue
todo mark 5                      # mark task #5 as done (asks y/N first)
todo mark 5 -f                   # mark it without asking
todo mark "groceries" --undone   # mark a task as not done
todo mark 5 --due 2025-07-20     # change the due date
todo mark 5 -p high              # change the priority (low, normal or high)
todo mark 5 -d "new description" # change the description
todo mark --overdue              # go through overdue tasks: complete, reschedule, delete or skip
todo mark --batch                # pick pending tasks by number (e.g. "1,3") or "all"
todo mark --batch -f             # mark every pending task
todo mark --smart                # completion rate, health score and recommendations
todo mark --cleanup              # cleanup suggestions
```

After a task is completed, the command suggests what to do next.

## Version

```
todo version
```

## Using it from Python

`smarttodo.store` provides `Task`, `TaskStore`, `load_tasks(path)`,
`validate_date` and `validate_priority`. Invalid input and storage failures
raise `TaskError`. `smarttodo.listing.run_list` and the `render_*` functions
return the text of each view as a string. `smarttodo.marking.run_mark` carries
out a `MarkRequest`. Its `ask` argument takes a function that replaces
`input` for prompts.

## What it does not do

- There is no `delete` command. Some views suggest running `todo delete ...`,
  but the only way to remove a task is the delete choice in
  `todo mark --overdue`.
- Completion times are not recorded, so no view reports tasks completed today.
- `todo mark --cleanup` only prints suggestions. It changes no tasks.
- The `-t/--toggle` option of `todo` is accepted but has no effect.