"""Date normalization and display formatting for content records."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from .errors import InvalidDateError

# English names keep output identical regardless of the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Year-month-day without zero padding, optionally with a naive H:MM[:SS] time.
LOOSE_DATE_RE = re.compile(
    r"(?P<year>\d{4})[-/](?P<month>\d{1,2})[-/](?P<day>\d{1,2})"
    r"(?:[T ](?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?)?"
)


def normalize_date(value: Any, source_path: str | Path | None = None) -> datetime:
    """Coerce a front matter date into an aware UTC ``datetime``.

    Accepts ``date`` and ``datetime`` objects (as produced by YAML) and
    ISO-8601 strings with or without a time or offset. Dates without zero
    padding (``2024-4-3``, ``2024/4/3 9:05``) are accepted too. Naive values
    are interpreted as UTC.
    """
    if isinstance(value, bool):
        raise InvalidDateError(value, source_path=source_path)
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        moment = _parse_iso(value, source_path)
    else:
        raise InvalidDateError(value, source_path=source_path)

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_date(value: datetime) -> str:
    """Format as 'Month D, YYYY', e.g. 'April 3, 2024'."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def _parse_iso(raw: str, source_path: str | Path | None) -> datetime:
    text = raw.strip()
    if not text:
        raise InvalidDateError(raw, source_path=source_path)
    if text[-1] in "Zz":
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    match = LOOSE_DATE_RE.fullmatch(text)
    if match is None:
        raise InvalidDateError(raw, source_path=source_path)
    parts = {name: int(value) for name, value in match.groupdict().items() if value is not None}
    try:
        return datetime(**parts)
    except ValueError:
        raise InvalidDateError(raw, source_path=source_path) from None
