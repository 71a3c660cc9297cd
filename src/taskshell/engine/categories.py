# src/taskshell/engine/categories.py

"""
Category store.

Categories live in a plain UTF-8 text file, one name per line, in
insertion order. Tasks refer to categories by name only; deleting a
category leaves tasks that mention it untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)


def list_categories(path: str | Path) -> list[str]:
    """
    Return category names in file order.

    Blank lines are skipped. A missing file is a StorageError: callers
    create the file before first use.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(str(p), f"Cannot read file: {e}") from e

    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]


def category_exists(path: str | Path, name: str) -> bool:
    return name in list_categories(path)


def create_category(path: str | Path, name: str) -> None:
    """
    Append a category name.

    No uniqueness check is made; adding an existing name twice stores it
    twice.
    """
    name = (name or "").strip()
    if not name:
        raise ValueError("category name must be a non-empty string")

    p = Path(path)
    try:
        empty = p.stat().st_size == 0
        with p.open("a", encoding="utf-8") as f:
            f.write(name if empty else "\n" + name)
    except OSError as e:
        raise StorageError(str(p), f"Cannot write file: {e}") from e

    logger.info("Category created: %s", name)


def delete_category(path: str | Path, name: str) -> bool:
    """
    Remove the first entry equal to `name`.

    Returns False (and writes nothing) if the name is not present.
    """
    names = list_categories(path)
    if name not in names:
        return False

    names.remove(name)

    p = Path(path)
    try:
        p.write_text("".join(n + "\n" for n in names), encoding="utf-8")
    except OSError as e:
        raise StorageError(str(p), f"Cannot write file: {e}") from e

    logger.info("Category deleted: %s", name)
    return True
