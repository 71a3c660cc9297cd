# src/taskshell/engine/actions.py

"""
Task mutation actions.

This module contains *all* state-changing operations on the task and
category stores, plus the listing entry point used by the CLI.

Design principles:
- Every public action returns an ActionResult / ListResult; engine
  errors are caught here and reported, never raised to the caller.
- Input is validated before anything is read or written.
- Every task mutation goes through ops.modify (full read, change in
  memory, full write).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from . import categories, dates, ops
from .errors import (
    DeserializationError,
    EmptyStoreError,
    InvalidInputError,
    NoTasksError,
    NotFoundError,
    StorageError,
    TaskShellError,
)
from .model import Status, Task
from .parse import parse_status
from .prompt import ConsoleReader, LineReader, ask_yes_no, confirm
from .query import find_by_id, select_tasks

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

class Outcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    MOVED = "moved"
    NOT_FOUND = "not found"
    ABORTED = "aborted"
    REJECTED = "rejected"
    INVALID = "invalid"
    FAILED = "failed"


_SUCCESS = frozenset({Outcome.CREATED, Outcome.UPDATED, Outcome.DELETED, Outcome.MOVED})


@dataclass(frozen=True, slots=True)
class ActionResult:
    """
    Outcome of a single action.

    `tasks` holds the tasks the action produced or touched (the created
    task, the updated task, the clones made by a move).
    """

    outcome: Outcome
    message: str
    tasks: tuple[Task, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome in _SUCCESS


@dataclass(frozen=True, slots=True)
class ListResult:
    """
    Tasks selected for display, or the reason there are none.

    `store_empty` separates "nothing was ever created" from "nothing
    matches this selection".
    """

    tasks: tuple[Task, ...] = ()
    message: str = ""
    store_empty: bool = False
    failed: bool = False

    @property
    def ok(self) -> bool:
        return bool(self.tasks)


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _report(e: TaskShellError) -> ActionResult:
    """Convert an engine error into a reported result."""
    if isinstance(e, NotFoundError):
        return ActionResult(Outcome.NOT_FOUND, str(e))

    if isinstance(e, InvalidInputError):
        return ActionResult(Outcome.INVALID, str(e))

    if isinstance(e, DeserializationError):
        logger.warning("Task file unreadable: %s", e)
        return ActionResult(Outcome.FAILED, f"Task file is corrupted: {e}")

    if isinstance(e, StorageError):
        logger.warning("Storage failure: %s", e)
        return ActionResult(Outcome.FAILED, StorageError.user_message)

    logger.warning("Action failed: %s", e)
    return ActionResult(Outcome.FAILED, str(e))


def _require_text(value: Optional[str], what: str) -> str:
    s = (value or "").strip()
    if not s:
        raise InvalidInputError(f"{what} must not be empty")
    return s


def _update_one(tasks_file: str | Path, task_id: str, change: Callable[[Task], None]) -> Task:
    """
    Locate a task by id, apply `change`, persist.

    Raises NotFoundError (before any write) if the id is unknown.
    """
    found: list[Task] = []

    def fn(tasks: list[Task]) -> list[Task]:
        task = find_by_id(tasks, task_id)
        if task is None:
            raise NotFoundError(task_id)
        change(task)
        found.append(task)
        return tasks

    ops.modify(tasks_file, fn)
    return found[0]


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------

def verify_category(categories_file: str | Path, name: str, reader: Optional[LineReader] = None) -> bool:
    """
    Make sure `name` is a known category, offering to create it.

    Returns True if the category exists (or was just created), False if
    the user declined. Re-asks until the answer is yes or no.
    """
    if categories.category_exists(categories_file, name):
        return True

    reader = reader or ConsoleReader()
    prompt = f"Category '{name}' does not exist. Do you want to create it (y/n) "
    if not ask_yes_no(reader, prompt):
        return False

    categories.create_category(categories_file, name)
    return True


def add_category(categories_file: str | Path, name: str) -> ActionResult:
    try:
        name = _require_text(name, "Category name")
        categories.create_category(categories_file, name)
    except TaskShellError as e:
        return _report(e)

    return ActionResult(Outcome.CREATED, "Category created successfully")


def remove_category(categories_file: str | Path, name: str) -> ActionResult:
    """
    Delete a category by name.

    Tasks still pointing at it keep their category string.
    """
    try:
        removed = categories.delete_category(categories_file, name)
    except TaskShellError as e:
        return _report(e)

    if not removed:
        return ActionResult(Outcome.NOT_FOUND, f"Category '{name}' doesn't exist")
    return ActionResult(Outcome.DELETED, "Category deleted successfully")


# ---------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------

def list_tasks(
    tasks_file: str | Path,
    *,
    show_all: bool = False,
    date: Optional[str] = dates.NO_DATE,
    tomorrow: bool = False,
    category: Optional[str] = None,
) -> ListResult:
    """
    Load the store and apply the listing policy (see query.select_tasks).
    """
    try:
        if not dates.is_unset(date):
            date = dates.resolve_date(date)
        tasks = select_tasks(
            ops.load(tasks_file),
            show_all=show_all,
            date=date,
            tomorrow=tomorrow,
            category=category,
        )
    except NoTasksError as e:
        return ListResult(message=str(e), store_empty=isinstance(e, EmptyStoreError))
    except TaskShellError as e:
        return ListResult(message=_report(e).message, failed=True)

    return ListResult(tasks=tuple(tasks))


# ---------------------------------------------------------------------
# Task actions
# ---------------------------------------------------------------------

def create_task(
    tasks_file: str | Path,
    description: str,
    *,
    date: Optional[str] = dates.NO_DATE,
    tomorrow: bool = False,
    status: Optional[str | Status] = None,
    category: Optional[str] = None,
    categories_file: Optional[str | Path] = None,
    reader: Optional[LineReader] = None,
) -> ActionResult:
    """
    Create a task and add it to the store.

    - date: explicit date wins, then the tomorrow flag/keyword, then today;
    - status: defaults to TODO;
    - category: verified first; if the user declines to create it the
      task is still created, without a category.
    """
    category = (category or "").strip() or None
    if category and categories_file is None:
        raise ValueError("categories_file is required when a category is given")

    try:
        description = _require_text(description, "Description")
        task_date = dates.resolve_date(date, tomorrow_flag=tomorrow)
        task_status = status if isinstance(status, Status) else parse_status(status)

        task_category = None
        if category:
            # The category file must not change if the task file is unusable.
            ops.load(tasks_file)
            if verify_category(categories_file, category, reader):
                task_category = category

        task = Task(
            description=description,
            status=task_status,
            date=task_date,
            category=task_category,
        )
        ops.append(tasks_file, task)
    except TaskShellError as e:
        return _report(e)

    logger.info("Task created id=%s date=%s category=%s", task.id, task.date, task.category)

    if category and task.category is None:
        return ActionResult(Outcome.CREATED, "Task created successfully (without category)", (task,))
    return ActionResult(Outcome.CREATED, "Task created successfully", (task,))


def update_fields(
    tasks_file: str | Path,
    task_id: str,
    *,
    description: Optional[str] = None,
    date: Optional[str] = dates.NO_DATE,
) -> ActionResult:
    """
    Change the description and/or date of a task.

    Fields left as None / NO_DATE are kept.
    """
    try:
        new_description = None if description is None else _require_text(description, "Description")
        new_date = None if dates.is_unset(date) else dates.resolve_date(date)

        def change(task: Task) -> None:
            if new_description is not None:
                task.description = new_description
            if new_date is not None:
                task.date = new_date

        task = _update_one(tasks_file, task_id, change)
    except TaskShellError as e:
        return _report(e)

    logger.info("Task updated id=%s", task.id)
    return ActionResult(Outcome.UPDATED, "Task modified successfully", (task,))


def set_status(tasks_file: str | Path, task_id: str, status: str | Status) -> ActionResult:
    try:
        new_status = status if isinstance(status, Status) else parse_status(status)

        def change(task: Task) -> None:
            task.status = new_status

        task = _update_one(tasks_file, task_id, change)
    except TaskShellError as e:
        return _report(e)

    logger.info("Task status id=%s status=%s", task.id, task.status.value)
    return ActionResult(Outcome.UPDATED, f"Task marked as {task.status.value}", (task,))


def set_category(
    tasks_file: str | Path,
    categories_file: str | Path,
    task_id: str,
    category: str,
    reader: Optional[LineReader] = None,
) -> ActionResult:
    """
    Assign a category to a task, offering to create unknown categories.

    Declining the creation leaves the task unchanged (ABORTED).
    """
    try:
        category = _require_text(category, "Category")
        if find_by_id(ops.load(tasks_file), task_id) is None:
            raise NotFoundError(task_id)

        if not verify_category(categories_file, category, reader):
            return ActionResult(Outcome.ABORTED, "Aborted")

        def change(task: Task) -> None:
            task.category = category

        task = _update_one(tasks_file, task_id, change)
    except TaskShellError as e:
        return _report(e)

    logger.info("Task category id=%s category=%s", task.id, task.category)
    return ActionResult(Outcome.UPDATED, f"Task moved to category '{category}'", (task,))


def delete_task(tasks_file: str | Path, task_id: str) -> ActionResult:
    """
    Remove a task by id.

    An unknown id is a no-op: nothing is written and NOT_FOUND is
    reported.
    """
    removed: list[Task] = []

    def fn(tasks: list[Task]) -> Optional[list[Task]]:
        keep = [t for t in tasks if t.id != task_id]
        removed.extend(t for t in tasks if t.id == task_id)
        return keep if removed else None

    try:
        ops.modify(tasks_file, fn)
    except TaskShellError as e:
        return _report(e)

    if not removed:
        return ActionResult(Outcome.NOT_FOUND, f"Task of ID {task_id} doesn't exist")

    logger.info("Task deleted id=%s", task_id)
    return ActionResult(Outcome.DELETED, "Task deleted successfully", tuple(removed))


def move_incomplete(
    tasks_file: str | Path,
    from_date: Optional[str] = dates.NO_DATE,
    to_date: Optional[str] = dates.NO_DATE,
    *,
    reader: Optional[LineReader] = None,
) -> ActionResult:
    """
    Copy every TODO task due on `from_date` onto `to_date`.

    Defaults: today -> tomorrow. Each copy keeps description, status and
    category, and gets a new id. The source tasks stay where they are,
    unchanged: despite the name this duplicates rather than moves.

    Steps:
    1. confirm with the user (anything but y/yes aborts);
    2. reject from_date later than to_date;
    3. clone the matching tasks and persist the whole collection.
    """
    src = dates.today() if dates.is_unset(from_date) else from_date.strip()
    dst = dates.tomorrow() if dates.is_unset(to_date) else to_date.strip()

    reader = reader or ConsoleReader()
    if not confirm(reader, f"Do you want to move undone tasks from {src} to {dst}? (y/n) "):
        return ActionResult(Outcome.ABORTED, "Aborted")

    clones: list[Task] = []

    def fn(tasks: list[Task]) -> Optional[list[Task]]:
        for task in list(tasks):
            if task.date == src and task.status is Status.TODO:
                clones.append(task.clone_to(dst))
        if not clones:
            return None
        return tasks + clones

    try:
        if dates.parse_date(src) > dates.parse_date(dst):
            return ActionResult(Outcome.REJECTED, "'From' date should be earlier than 'To' date")
        ops.modify(tasks_file, fn)
    except TaskShellError as e:
        return _report(e)

    logger.info("Moved %d undone task(s) from %s to %s", len(clones), src, dst)
    return ActionResult(Outcome.MOVED, f"{len(clones)} task(s) moved from {src} to {dst}", tuple(clones))
