# src/taskshell/cli.py

"""
Command-line interface for taskshell.

This module:
- defines argument parsing and subcommands,
- loads settings and configures logging,
- delegates storage and domain logic to engine modules,
- prints what the engine returns.

KISS rule: keep commands small and predictable.
"""

import argparse
import logging
from pathlib import Path

from taskshell.config import ConfigError, Settings, ensure_files, load_settings
from taskshell.engine import actions
from taskshell.engine.categories import list_categories
from taskshell.engine.dates import NO_DATE
from taskshell.engine.errors import StorageError
from taskshell.engine.model import sort_tasks
from taskshell.engine.query import selection_date
from taskshell.engine.render import render_categories, render_detailed, render_simple, render_table
from taskshell.engine.validate import validate_store
from taskshell.logging_setup import setup_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskshell")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: ~/.taskshell.yml if present)",
    )
    parser.add_argument("--tasks-file", type=str, default=None, help="Task file (JSON)")
    parser.add_argument("--categories-file", type=str, default=None, help="Category file (one per line)")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    p_list = sub.add_parser(
        "list",
        help="List tasks; without options lists today's tasks",
    )
    p_list.add_argument("-a", "--all", action="store_true", help="List all tasks")
    p_list.add_argument(
        "--date",
        type=str,
        default=NO_DATE,
        help="List tasks due on this date (dd/mm/yyyy, 'today' or 'tomorrow')",
    )
    p_list.add_argument("--tomorrow", action="store_true", help="List tomorrow's tasks")
    p_list.add_argument("-c", "--category", type=str, default=None, help="Only this category")
    view = p_list.add_mutually_exclusive_group()
    view.add_argument("-t", "--table", action="store_true", help="Display a table of tasks")
    view.add_argument("-d", "--detailed", action="store_true", help="Display a detailed list")
    p_list.set_defaults(func=cmd_list)

    p_cats = sub.add_parser("categories", help="List categories")
    p_cats.set_defaults(func=cmd_categories)

    p_validate = sub.add_parser(
        "validate",
        help="Check the task file for duplicate ids, bad dates and unknown categories",
    )
    p_validate.set_defaults(func=cmd_validate)

    # ------------------------------------------------------------------
    # Write commands
    # ------------------------------------------------------------------

    p_add = sub.add_parser("add", help="Create a task")
    p_add.add_argument("description", help="Task description")
    p_add.add_argument(
        "--date",
        type=str,
        default=NO_DATE,
        help="Due date (dd/mm/yyyy, 'today' or 'tomorrow'; default: today)",
    )
    p_add.add_argument("--tomorrow", action="store_true", help="Due tomorrow")
    p_add.add_argument("-s", "--status", type=str, default="TODO", help="Initial status (TODO or DONE)")
    p_add.add_argument("-c", "--category", type=str, default=None, help="Category name")
    p_add.set_defaults(func=cmd_add)

    p_update = sub.add_parser("update", help="Update a task by ID")
    p_update.add_argument("task_id", help="Task id")
    p_update.add_argument("--description", type=str, default=None, help="New description")
    p_update.add_argument("--date", type=str, default=NO_DATE, help="New due date (dd/mm/yyyy)")
    p_update.set_defaults(func=cmd_update)

    p_done = sub.add_parser("done", help="Mark a task by ID as DONE")
    p_done.add_argument("task_id", help="Task id")
    p_done.set_defaults(func=cmd_status, status="DONE")

    p_todo = sub.add_parser("todo", help="Mark a task by ID as TODO")
    p_todo.add_argument("task_id", help="Task id")
    p_todo.set_defaults(func=cmd_status, status="TODO")

    p_delete = sub.add_parser("delete", help="Delete a task by ID")
    p_delete.add_argument("task_id", help="Task id")
    p_delete.set_defaults(func=cmd_delete)

    p_move = sub.add_parser(
        "move",
        help="Copy undone tasks from one date to another (default: today to tomorrow)",
    )
    p_move.add_argument("--from", dest="from_date", type=str, default=NO_DATE, help="Source date")
    p_move.add_argument("--to", dest="to_date", type=str, default=NO_DATE, help="Target date")
    p_move.set_defaults(func=cmd_move)

    p_cat = sub.add_parser("categorize", help="Assign a category to a task")
    p_cat.add_argument("task_id", help="Task id")
    p_cat.add_argument("category", help="Category name")
    p_cat.set_defaults(func=cmd_categorize)

    p_cat_add = sub.add_parser("category-add", help="Create a category")
    p_cat_add.add_argument("name", help="Category name")
    p_cat_add.set_defaults(func=cmd_category_add)

    p_cat_del = sub.add_parser("category-delete", help="Delete a category (tasks keep their label)")
    p_cat_del.add_argument("name", help="Category name")
    p_cat_del.set_defaults(func=cmd_category_delete)

    return parser


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def _print_result(result: actions.ActionResult) -> int:
    print(result.message)
    return 0 if result.ok else 1


def cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    result = actions.list_tasks(
        settings.tasks_file,
        show_all=bool(args.all),
        date=args.date,
        tomorrow=bool(args.tomorrow),
        category=args.category,
    )
    if not result.ok:
        print(result.message)
        return 1

    tasks = sort_tasks(result.tasks)
    if args.detailed:
        print(render_detailed(tasks, color=settings.color), end="")
    elif args.table:
        print(render_table(tasks, color=settings.color), end="")
    else:
        if args.all:
            title = "all dates"
        else:
            title = selection_date(args.date, tomorrow=bool(args.tomorrow))
        print(render_simple(tasks, title, color=settings.color), end="")

    return 0


def cmd_categories(args: argparse.Namespace, settings: Settings) -> int:
    try:
        names = list_categories(settings.categories_file)
    except StorageError as e:
        logger.warning("%s", e)
        print(StorageError.user_message)
        return 1

    print(render_categories(names, color=settings.color), end="")
    return 0


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    res = validate_store(settings.tasks_file, settings.categories_file)
    if res.ok:
        print(f"{res.path}: {res.task_count} task(s), no issues")
        return 0

    print(f"{res.path}")
    for issue in res.issues:
        print(f"  - {issue.code}: {issue.message}")
    return 1


def cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    result = actions.create_task(
        settings.tasks_file,
        args.description,
        date=args.date,
        tomorrow=bool(args.tomorrow),
        status=args.status,
        category=args.category,
        categories_file=settings.categories_file,
    )
    return _print_result(result)


def cmd_update(args: argparse.Namespace, settings: Settings) -> int:
    if args.description is None and args.date == NO_DATE:
        print("Error: nothing to update (use --description and/or --date)")
        return 1

    result = actions.update_fields(
        settings.tasks_file,
        args.task_id,
        description=args.description,
        date=args.date,
    )
    return _print_result(result)


def cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    return _print_result(actions.set_status(settings.tasks_file, args.task_id, args.status))


def cmd_delete(args: argparse.Namespace, settings: Settings) -> int:
    return _print_result(actions.delete_task(settings.tasks_file, args.task_id))


def cmd_move(args: argparse.Namespace, settings: Settings) -> int:
    result = actions.move_incomplete(settings.tasks_file, args.from_date, args.to_date)
    return _print_result(result)


def cmd_categorize(args: argparse.Namespace, settings: Settings) -> int:
    result = actions.set_category(
        settings.tasks_file,
        settings.categories_file,
        args.task_id,
        args.category,
    )
    return _print_result(result)


def cmd_category_add(args: argparse.Namespace, settings: Settings) -> int:
    return _print_result(actions.add_category(settings.categories_file, args.name))


def cmd_category_delete(args: argparse.Namespace, settings: Settings) -> int:
    return _print_result(actions.remove_category(settings.categories_file, args.name))


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def _settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    return settings.override(
        tasks_file=Path(args.tasks_file) if args.tasks_file else None,
        categories_file=Path(args.categories_file) if args.categories_file else None,
        color=False if args.no_color else None,
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    try:
        settings = _settings(args)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=settings.log_file,
    )

    try:
        ensure_files(settings)
    except OSError as e:
        logger.error("Cannot create data files: %s", e)
        print(StorageError.user_message)
        return 1

    return func(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
