# src/taskshell/engine/render.py

"""
Rendering helpers for CLI output.

This module is responsible for:
- the simple checklist view (default `list`),
- the table view,
- the detailed per-task view,
- the category list.

It is presentation-only: every function returns a string and nothing
here reads or writes files.
"""

from __future__ import annotations

import re
import shutil
from typing import Iterable, Sequence

from .model import Status, Task


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\033[0m"
_RED = "\033[31m"
_GREEN = "\033[32m"

_COLOR = {
    Status.TODO: _RED,
    Status.DONE: _GREEN,
}

_BOX_WIDTH = 57


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    import sys

    return sys.stdout.isatty()


def _visible_len(s: str) -> int:
    """Return string length without ANSI colour escapes."""
    return len(_ANSI_RE.sub("", s))


def _paint(s: str, code: str, color: bool) -> str:
    if color and _supports_color():
        return f"{code}{s}{_RESET}"
    return s


def _fit(s: str, width: int) -> str:
    """Truncate or pad to exactly `width` visible characters."""
    if len(s) > width:
        return s[: max(0, width - 1)] + "…"
    return s + " " * (width - len(s))


# ---------------------------------------------------------------------
# Simple view
# ---------------------------------------------------------------------

def render_header(title: str, *, color: bool = True) -> str:
    """Boxed, centred title."""
    inner = _BOX_WIDTH - 2
    text = title.strip()[:inner]
    left = (inner - len(text)) // 2
    right = inner - len(text) - left

    lines = [
        "┌" + "─" * inner + "┐",
        "│" + " " * inner + "│",
        "│" + " " * left + text + " " * right + "│",
        "│" + " " * inner + "│",
        "└" + "─" * inner + "┘",
    ]
    return "\n".join(_paint(ln, _GREEN, color) for ln in lines)


def render_simple(tasks: Iterable[Task], date: str, *, color: bool = True) -> str:
    """
    Checklist for one date.

    Format:
      [ ] Category: description
    """
    out = [render_header(f"Tasks Due {date}", color=color)]

    for task in tasks:
        mark = "[x]" if task.is_done else "[ ]"
        mark = _paint(mark, _COLOR[task.status], color)
        category = _paint(task.display_category, _GREEN, color)
        out.append(f" {mark} {category}: {task.description}")

    return "\n".join(out) + "\n"


# ---------------------------------------------------------------------
# Table view
# ---------------------------------------------------------------------

def render_table(tasks: Sequence[Task], *, color: bool = True) -> str:
    """
    One row per task: id, description, status, category, date.

    The description column absorbs whatever width is left in the
    terminal (capped at 120 columns).
    """
    width = min(120, shutil.get_terminal_size(fallback=(100, 24)).columns)

    id_w, status_w, date_w = 36, 6, 10
    cat_w = max([len("Category")] + [len(t.display_category) for t in tasks])
    cat_w = min(cat_w, 16)
    fixed = id_w + status_w + cat_w + date_w + 16
    desc_w = max(16, width - fixed)

    def row(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    header = row([
        _fit("ID", id_w),
        _fit("Description", desc_w),
        _fit("Status", status_w),
        _fit("Category", cat_w),
        _fit("Due Date", date_w),
    ])
    rule = "-" * _visible_len(header)

    out = [rule, header, rule]
    for task in tasks:
        status = _paint(_fit(task.status.value, status_w), _COLOR[task.status], color)
        out.append(
            row([
                _fit(task.id, id_w),
                _fit(task.description, desc_w),
                status,
                _fit(task.display_category, cat_w),
                _fit(task.date, date_w),
            ])
        )
    out.append(rule)

    return "\n".join(out) + "\n"


# ---------------------------------------------------------------------
# Detailed view
# ---------------------------------------------------------------------

def render_detailed(tasks: Iterable[Task], *, color: bool = True) -> str:
    out: list[str] = []

    for task in tasks:
        out.append(f"Task ID: {task.id}")
        out.append(f"Description: {task.description}")
        out.append(f"Status: {_paint(task.status.value, _COLOR[task.status], color)}")
        out.append(f"Category: {task.display_category}")
        out.append(f"Date: {task.date}")
        out.append("-" * 49)

    return "\n".join(out) + "\n" if out else ""


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------

def render_categories(names: Sequence[str], *, color: bool = True) -> str:
    if not names:
        return "No categories yet\n"

    out = [render_header("Categories", color=color)]
    for i, name in enumerate(names, start=1):
        out.append(f" {i}) {name}")
    return "\n".join(out) + "\n"
