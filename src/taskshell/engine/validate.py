# src/taskshell/engine/validate.py

"""
Store validation rules.

This module checks a whole task file against the store invariants that
parsing alone does not enforce.

Responsibilities:
- id uniqueness and shape,
- date format,
- non-empty descriptions,
- dangling category references (optional).

It does NOT modify anything.
"""

import uuid
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from . import ops
from .categories import list_categories
from .dates import parse_date
from .errors import DateFormatError, TaskShellError
from .model import Task


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single validation problem.

    `code` is a stable identifier suitable for tests and future filtering.
    """

    code: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Aggregated validation result for a task file.
    """

    path: str
    issues: Sequence[ValidationIssue]
    task_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues


# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------

def validate_tasks(
    tasks: Sequence[Task],
    *,
    known_categories: Optional[Sequence[str]] = None,
) -> list[ValidationIssue]:
    """
    Validate an in-memory collection.

    Category references are only checked when `known_categories` is given.
    Tasks without a category are always fine.
    """
    issues: list[ValidationIssue] = []

    # -----------------------------------------------------------------
    # Identity checks
    # -----------------------------------------------------------------

    counts = Counter(t.id for t in tasks)
    for task_id, n in counts.items():
        if n > 1:
            issues.append(
                ValidationIssue(
                    code="duplicate_id",
                    message=f"Id '{task_id}' is used by {n} tasks",
                )
            )

    for i, task in enumerate(tasks, start=1):
        if not _is_uuid(task.id):
            issues.append(
                ValidationIssue(
                    code="bad_id",
                    message=f"Task {i}: id '{task.id}' is not a UUID",
                )
            )

        # -------------------------------------------------------------
        # Field checks
        # -------------------------------------------------------------

        if not task.description.strip():
            issues.append(
                ValidationIssue(
                    code="empty_description",
                    message=f"Task {i} ({task.id}): description is empty",
                )
            )

        try:
            parse_date(task.date)
        except DateFormatError:
            issues.append(
                ValidationIssue(
                    code="bad_date",
                    message=f"Task {i} ({task.id}): date '{task.date}' is not dd/mm/yyyy",
                )
            )

        if known_categories is not None and task.category is not None:
            if task.category not in known_categories:
                issues.append(
                    ValidationIssue(
                        code="unknown_category",
                        message=f"Task {i} ({task.id}): category '{task.category}' does not exist",
                    )
                )

    return issues


def validate_store(
    tasks_file: str | Path,
    categories_file: Optional[str | Path] = None,
) -> ValidationResult:
    """
    Load and validate a task file.

    Unreadable or malformed files produce a single `unreadable` issue
    instead of raising.
    """
    p = Path(tasks_file)

    try:
        tasks = ops.load(p)
        known = list_categories(categories_file) if categories_file is not None else None
    except TaskShellError as e:
        return ValidationResult(
            path=str(p),
            issues=(ValidationIssue(code="unreadable", message=str(e)),),
        )

    issues = validate_tasks(tasks, known_categories=known)
    return ValidationResult(path=str(p), issues=tuple(issues), task_count=len(tasks))


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        return False
    return True
