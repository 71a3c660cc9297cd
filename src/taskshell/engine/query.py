# src/taskshell/engine/query.py

"""
Read-only queries over an in-memory task collection.

Nothing here touches the filesystem; callers load tasks via ops.py.
"""

from typing import Iterable, Optional

from . import dates
from .errors import EmptySelectionError, EmptyStoreError
from .model import Task


# ---------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------

def filter_by_date(tasks: Iterable[Task], date: str) -> list[Task]:
    return [t for t in tasks if t.date == date]


def filter_today(tasks: Iterable[Task]) -> list[Task]:
    return filter_by_date(tasks, dates.today())


def filter_tomorrow(tasks: Iterable[Task]) -> list[Task]:
    return filter_by_date(tasks, dates.tomorrow())


def filter_by_category(tasks: Iterable[Task], category: str) -> list[Task]:
    """
    Keep tasks in `category`.

    DEFAULT_CATEGORY also matches tasks that have no category set.
    """
    return [t for t in tasks if t.display_category == category]


def find_by_id(tasks: Iterable[Task], task_id: str) -> Optional[Task]:
    """Return the first task with this id, or None."""
    for t in tasks:
        if t.id == task_id:
            return t
    return None


# ---------------------------------------------------------------------
# Listing policy
# ---------------------------------------------------------------------

def selection_date(date: Optional[str] = dates.NO_DATE, *, tomorrow: bool = False) -> str:
    """
    The date a non-"all" listing filters on.

    An explicit date (or the "today" / "tomorrow" keyword) wins, then the
    tomorrow flag, then today. Same precedence as a new task's date.
    """
    return dates.resolve_date(date, tomorrow_flag=tomorrow)


def select_tasks(
    tasks: list[Task],
    *,
    show_all: bool = False,
    date: Optional[str] = dates.NO_DATE,
    tomorrow: bool = False,
    category: Optional[str] = None,
) -> list[Task]:
    """
    Apply the listing policy.

    - show_all: no date filter;
    - otherwise exactly one of explicit date / tomorrow / today;
    - category, when given, narrows the result further.

    Raises EmptyStoreError when there are no tasks at all and
    EmptySelectionError when tasks exist but none match.
    """
    if not tasks:
        raise EmptyStoreError("No tasks have been created yet")

    selected = list(tasks)
    if not show_all:
        selected = filter_by_date(selected, selection_date(date, tomorrow=tomorrow))

    if category:
        selected = filter_by_category(selected, category)

    if not selected:
        if category:
            raise EmptySelectionError(f"No tasks found for category '{category}'")
        raise EmptySelectionError("No tasks found for the specified date")

    return selected
