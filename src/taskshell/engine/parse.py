# src/taskshell/engine/parse.py

"""
Task file parser.

Turns the text of a task file (a JSON array of task objects) into Task
models. Files written by earlier releases of the tool are accepted as
long as each object carries the expected fields.

This module performs *structural* parsing only: it does not read files
(see ops.py) and does not check store-wide rules such as id uniqueness
(see validate.py).
"""

import json
from typing import Any, Optional

from .errors import DeserializationError, InvalidStatusError
from .model import Status, Task


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def parse_tasks(text: str, path: str = "<string>") -> list[Task]:
    """
    Parse task-file text into a list of tasks.

    Raises DeserializationError if the text is not a JSON array of task
    objects.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DeserializationError(path, f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError(path, "JSON root must be an array of tasks")

    return [_parse_task(path, i, item) for i, item in enumerate(data, start=1)]


def parse_status(raw: Optional[str]) -> Status:
    """
    Parse a status string (case-insensitive).

    Empty or None means the default, TODO.
    """
    s = (raw or "").strip()
    if not s:
        return Status.TODO

    try:
        return Status(s.upper())
    except ValueError as e:
        allowed = ", ".join([st.value for st in Status])
        raise InvalidStatusError(f"Invalid status '{raw}' (allowed: {allowed})") from e


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _parse_task(path: str, idx: int, item: Any) -> Task:
    if not isinstance(item, dict):
        raise DeserializationError(path, f"tasks[{idx}] must be an object")

    task_id = _require_str_field(path, idx, item, "id")
    description = _require_str_field(path, idx, item, "description")
    date = _require_str_field(path, idx, item, "date")

    raw_status = _require_str_field(path, idx, item, "status")
    try:
        status = Status(raw_status)
    except ValueError as e:
        raise DeserializationError(path, f"tasks[{idx}] has invalid status '{raw_status}'") from e

    category = item.get("category")
    if category is not None and not isinstance(category, str):
        raise DeserializationError(path, f"tasks[{idx}] key 'category' must be a string")

    return Task(
        id=task_id,
        description=description,
        status=status,
        date=date,
        category=category or None,
    )


def _require_str_field(path: str, idx: int, data: dict[str, Any], key: str) -> str:
    if key not in data:
        raise DeserializationError(path, f"tasks[{idx}] is missing required key: {key}")

    value = data[key]
    if not isinstance(value, str):
        raise DeserializationError(path, f"tasks[{idx}] key '{key}' must be a string")

    return value
