# src/taskshell/engine/dates.py

"""
Calendar date helpers.

All task dates are plain strings in the fixed `dd/mm/yyyy` form.
Filtering compares those strings directly; ordering parses them first.
"""

import re
from datetime import date, datetime, timedelta
from typing import Final, Optional

from .errors import DateFormatError


DATE_FORMAT: Final[str] = "%d/%m/%Y"

# Marker passed by the command layer when no date option was given.
NO_DATE: Final[str] = "no date"

_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def _local_today() -> date:
    """Return today's local date (isolated for testability)."""
    return date.today()


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def today() -> str:
    return format_date(_local_today())


def tomorrow() -> str:
    return format_date(_local_today() + timedelta(days=1))


def parse_date(value: str) -> date:
    """
    Parse a `dd/mm/yyyy` string.

    Raises DateFormatError if the text is not zero-padded in that exact
    shape or does not name a real calendar day (e.g. 31/02/2024).
    """
    s = (value or "").strip()
    if not _DATE_RE.match(s):
        raise DateFormatError(f"Invalid date format: '{value}' (expected dd/mm/yyyy)")

    try:
        return datetime.strptime(s, DATE_FORMAT).date()
    except ValueError as e:
        raise DateFormatError(f"Invalid date: '{value}'") from e


def require_date(value: str) -> str:
    """Validate a date string and return it normalised (stripped)."""
    parse_date(value)
    return value.strip()


def is_unset(value: Optional[str]) -> bool:
    return value is None or value.strip() in ("", NO_DATE)


def resolve_date(value: Optional[str], *, tomorrow_flag: bool = False) -> str:
    """
    Resolve the effective date for a new task.

    Precedence:
    1. explicit date (validated), or the keywords "today" / "tomorrow";
    2. the tomorrow flag;
    3. today.
    """
    if not is_unset(value):
        keyword = value.strip().lower()
        if keyword == "today":
            return today()
        if keyword == "tomorrow":
            return tomorrow()
        return require_date(value)

    if tomorrow_flag:
        return tomorrow()

    return today()
