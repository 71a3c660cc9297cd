# src/taskshell/engine/ops.py

"""
Filesystem-level operations for the task file.

This module contains:
- reading the task file into Task models,
- serialisation of the full collection back to disk,
- the append fast path used when adding a single task,
- `modify`, the one read-modify-write primitive every mutation uses.

There is no locking: two processes modifying the same file race and the
last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
import textwrap
from pathlib import Path
from typing import Callable, Iterable, Optional

from .errors import DeserializationError, StorageError
from .model import Task
from .parse import parse_tasks

logger = logging.getLogger(__name__)

_INDENT = 2


# ---------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------

def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(str(path), f"Cannot read file: {e}") from e


def is_empty(path: str | Path) -> bool:
    """
    Return True if the task file holds no content yet.

    A freshly created (zero-length or whitespace-only) file means
    "no tasks yet", not a parse error.
    """
    return not _read_text(Path(path)).strip()


def read_all(path: str | Path) -> list[Task]:
    """
    Deserialise the whole task file.

    Callers are expected to check `is_empty` first; an empty file is not
    valid JSON and raises DeserializationError here.
    """
    p = Path(path)
    tasks = parse_tasks(_read_text(p), str(p))
    logger.debug("Read %d task(s) from %s", len(tasks), p)
    return tasks


def load(path: str | Path) -> list[Task]:
    """Read all tasks, treating an empty file as an empty collection."""
    if is_empty(path):
        return []
    return read_all(path)


# ---------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------

def render_tasks(tasks: Iterable[Task]) -> str:
    """Render the pretty-printed JSON array stored on disk."""
    data = [t.to_dict() for t in tasks]
    return json.dumps(data, indent=_INDENT, ensure_ascii=False) + "\n"


def _render_element(task: Task) -> str:
    body = json.dumps(task.to_dict(), indent=_INDENT, ensure_ascii=False)
    return textwrap.indent(body, " " * _INDENT)


def _replace_text(path: Path, text: str) -> None:
    """
    Write `text` to a sibling temp file, then swap it into place.

    Either the old content or the complete new content is on disk,
    never a truncated mix.
    """
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise StorageError(str(path), f"Cannot write file: {e}") from e


def write_all(path: str | Path, tasks: Iterable[Task]) -> None:
    """
    Overwrite the task file with the full given collection.

    This is the only primitive that rewrites existing task data.
    """
    p = Path(path)
    tasks = list(tasks)
    _replace_text(p, render_tasks(tasks))
    logger.debug("Wrote %d task(s) to %s", len(tasks), p)


def append(path: str | Path, task: Task) -> None:
    """
    Add one task without re-serialising the existing ones.

    Behaviour:
    - empty file: a new single-element array is written;
    - existing `[]`: falls back to write_all;
    - otherwise the trailing `]` is replaced textually by `,` + the new
      element + `]`.

    The existing content is parsed first; if it is not a valid task
    array (or does not end with `]`) nothing is written and
    DeserializationError is raised.
    """
    p = Path(path)
    content = _read_text(p).rstrip()

    if not content:
        write_all(p, [task])
        return

    if not content.endswith("]"):
        raise DeserializationError(str(p), "Task file does not end with ']'; refusing to append")

    parse_tasks(content, str(p))

    head = content[:-1].rstrip()
    if head == "[":
        write_all(p, [task])
        return

    _replace_text(p, f"{head},\n{_render_element(task)}\n]\n")
    logger.debug("Appended task id=%s to %s", task.id, p)


# ---------------------------------------------------------------------
# Read-modify-write
# ---------------------------------------------------------------------

def modify(path: str | Path, fn: Callable[[list[Task]], Optional[list[Task]]]) -> list[Task]:
    """
    Load all tasks, let `fn` transform them, persist the result.

    `fn` receives the loaded list and returns the collection to store,
    or None to skip the write. Exceptions raised by `fn` abort the
    operation before anything is written.

    Returns the collection now on disk.
    """
    tasks = load(path)
    updated = fn(tasks)
    if updated is None:
        return tasks

    write_all(path, updated)
    return updated
