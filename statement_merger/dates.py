"""Date normalization to the ``"Mon D, YYYY"`` display form.

``format_date`` never raises. When no rule can make sense of the input the
raw string is returned unchanged, so anything that sorts or groups by date
must tolerate non-canonical values (see :func:`parse_display_date`).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from dateutil import parser as date_parser

MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# Year dateutil fills in when the input has none. Treated as "no year given".
SENTINEL_YEAR = 2001
_PARSE_DEFAULT = datetime(SENTINEL_YEAR, 1, 1)

_LONG_MONTHS_RE = re.compile(
    r"\b(january|february|march|april|june|july|august|september|october|"
    r"november|december)\b",
    re.IGNORECASE,
)
_MONTH_NAME_RE = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)", re.IGNORECASE)
_DIGIT_RUN_RE = re.compile(r"\d+")
_LITERAL_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")
_YMD_RE = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})\b")
_ABY_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4}|\d{2})\b")
_DISPLAY_RE = re.compile(r"^([A-Z][a-z]{2}) (\d{1,2}), (\d{4})$")


def _display(d: date) -> str:
    return f"{MONTH_ABBREVIATIONS[d.month - 1]} {d.day}, {d.year}"


def _abbreviate_months(text: str) -> str:
    return _LONG_MONTHS_RE.sub(lambda m: m.group(1)[:3].title(), text)


def _generic_parse(text: str) -> date | None:
    # dateutil happily turns a lone number into a day of the default month;
    # require a month name or at least two numeric components.
    if not _MONTH_NAME_RE.search(text) and len(_DIGIT_RUN_RE.findall(text)) < 2:
        return None
    try:
        return date_parser.parse(text, default=_PARSE_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def _numeric_parse(text: str) -> date | None:
    s = text.strip()
    m = _YMD_RE.match(s)
    if m:
        year, month, day = (int(g) for g in m.groups())
    else:
        m = _ABY_RE.match(s)
        if not m:
            return None
        month, day = int(m.group(1)), int(m.group(2))
        if month > 12:
            month, day = day, month
        year_raw = m.group(3)
        year = int(f"20{year_raw}") if len(year_raw) == 2 else int(year_raw)
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _with_year(d: date, year: int) -> date:
    try:
        return d.replace(year=year)
    except ValueError:  # Feb 29 into a non-leap year
        return d


def _correct_year(parsed: date, raw: str, today: date) -> date:
    literal = _LITERAL_YEAR_RE.search(raw)
    if literal:
        year = int(literal.group(1))
        return parsed if parsed.year == year else _with_year(parsed, year)
    if parsed.year == SENTINEL_YEAR or parsed.year > today.year + 1:
        return _with_year(parsed, today.year)
    return parsed


def format_date(raw: str | None, *, today: date | None = None) -> str:
    """Normalize ``raw`` to ``"Mon D, YYYY"``; return it verbatim on failure.

    Rules, in order:

    1. ``today`` / ``yesterday`` resolve against the wall clock (or the
       ``today`` argument).
    2. Long English month names are shortened to three letters.
    3. A generic calendar parse, then explicit ``Y-M-D`` and ``A/B/Y``
       patterns. For ``A/B/Y`` a first component above 12 means day-first;
       two-digit years get a ``20`` prefix.
    4. A literal 4-digit year in ``raw`` wins over the parsed year. Without
       one, a sentinel or far-future year becomes the current year.
    """

    if not raw:
        return ""
    current = today or date.today()
    lowered = raw.strip().lower()
    if "today" in lowered:
        return _display(current)
    if "yesterday" in lowered:
        return _display(current - timedelta(days=1))

    text = _abbreviate_months(raw.strip())
    parsed = _generic_parse(text) or _numeric_parse(text)
    if parsed is None:
        return raw
    return _display(_correct_year(parsed, raw, current))


def parse_display_date(value: str) -> date | None:
    """Parse a ``"Mon D, YYYY"`` value back to a date; ``None`` otherwise."""

    m = _DISPLAY_RE.match((value or "").strip())
    if not m or m.group(1) not in MONTH_ABBREVIATIONS:
        return None
    try:
        return date(int(m.group(3)), MONTH_ABBREVIATIONS.index(m.group(1)) + 1, int(m.group(2)))
    except ValueError:
        return None


__all__ = ["MONTH_ABBREVIATIONS", "SENTINEL_YEAR", "format_date", "parse_display_date"]
