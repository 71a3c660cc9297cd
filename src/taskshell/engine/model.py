# src/taskshell/engine/model.py

"""
Core domain models.

This module defines the in-memory representation of tasks, along with
their default ordering rules. Store-level checks live in validate.py.

No filesystem access should happen here.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Final, Iterable, Optional

from .dates import parse_date, today
from .errors import DateFormatError


# Display name for tasks without a category.
DEFAULT_CATEGORY: Final[str] = "Other"


def new_task_id() -> str:
    """Return a fresh random 128-bit identifier in canonical string form."""
    return str(uuid.uuid4())


# ---------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------

class Status(str, Enum):
    """
    Task completion status.

    Stored verbatim ("TODO" / "DONE") in the task file.
    """

    TODO = "TODO"
    DONE = "DONE"

    @classmethod
    def sort_key(cls, status: "Status") -> int:
        """Open work first."""
        return 0 if status is cls.TODO else 1


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - id is unique within a store and never reused.
    - date is always a dd/mm/yyyy string.
    - category None means "uncategorised" (shown as DEFAULT_CATEGORY).
    """

    description: str
    id: str = field(default_factory=new_task_id)
    status: Status = Status.TODO
    date: str = field(default_factory=today)
    category: Optional[str] = None

    # -----------------------------------------------------------------
    # Convenience
    # -----------------------------------------------------------------

    @property
    def is_done(self) -> bool:
        return self.status is Status.DONE

    @property
    def display_category(self) -> str:
        return self.category or DEFAULT_CATEGORY

    def clone_to(self, date: str) -> "Task":
        """
        Copy this task onto another date under a brand-new id.

        Description, status and category are carried over unchanged.
        """
        return replace(self, id=new_task_id(), date=date)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "date": self.date,
        }
        if self.category is not None:
            data["category"] = self.category
        return data


# ---------------------------------------------------------------------
# Ordering helpers
# ---------------------------------------------------------------------

def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """
    Display ordering:

    1. date (chronological)
    2. status (TODO before DONE)
    3. description (stable tie-breaker)

    Tasks with an unparseable date sort last.
    """

    def key(t: Task) -> tuple:
        try:
            d = parse_date(t.date).toordinal()
        except DateFormatError:
            d = 10**9
        return (d, Status.sort_key(t.status), t.description.lower())

    return sorted(tasks, key=key)
