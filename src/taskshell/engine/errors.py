# src/taskshell/engine/errors.py

"""
Error taxonomy for the task engine.

Everything raised by the engine derives from TaskShellError.
Public actions (see actions.py) catch these at their boundary and
turn them into result values; only lower-level helpers let them escape.
"""

from dataclasses import dataclass


class TaskShellError(Exception):
    """Base class for all engine errors."""


# ---------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------

class StorageError(TaskShellError):
    """
    A task or category file could not be read or written.

    Wraps the underlying OSError (available as __cause__).
    """

    user_message = "An error occurred while accessing tasks file. Try again later."

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


@dataclass(frozen=True, slots=True)
class DeserializationError(TaskShellError):
    """
    Raised when a task file is not a valid JSON array of tasks.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Lookup / input
# ---------------------------------------------------------------------

class NotFoundError(TaskShellError):
    """No task carries the requested identifier."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task of ID {task_id} doesn't exist")
        self.task_id = task_id


class InvalidInputError(TaskShellError, ValueError):
    """A value supplied by the caller is malformed."""


class InvalidStatusError(InvalidInputError):
    """A status string did not name a known Status."""


class DateFormatError(InvalidInputError):
    """A date string is not a real date in dd/mm/yyyy form."""


# ---------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------

class NoTasksError(TaskShellError):
    """A listing produced nothing to show."""


class EmptyStoreError(NoTasksError):
    """The store holds no tasks at all."""


class EmptySelectionError(NoTasksError):
    """The store has tasks, but none matched the filter."""
