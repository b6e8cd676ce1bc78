"""Amount normalization and display formatting.

``parse_amount`` never raises: empty or malformed input normalizes to zero so
one bad cell cannot abort a whole statement.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_ZERO = Decimal("0")
_CENT = Decimal("0.01")

# Unicode minus, en dash and em dash all appear in exported amounts.
_MINUS_VARIANTS_RE = re.compile("[−–—]")
_CURRENCY_SYMBOLS_RE = re.compile(r"[$€£¥]")
_LEADING_LETTERS_RE = re.compile(r"^([+-]?)[A-Za-z]+")
_WHITESPACE_RE = re.compile(r"\s+")
# Longest leading number, the way a spreadsheet or parseFloat reads "45.00EUR".
_NUMERIC_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
# Decimal's default 28-digit context must hold the value at cent precision.
_MAX_ADJUSTED_EXPONENT = 25


def parse_amount(raw: str | None) -> Decimal:
    """Return the signed decimal value of ``raw``, or ``0`` when unparseable.

    Accounting-style parentheses mark a negative value. The marker is
    applied after the inner value is parsed.
    """

    if not raw or not isinstance(raw, str):
        return _ZERO
    s = raw.strip()

    multiplier = 1
    if len(s) >= 2 and s.startswith("(") and s.endswith(")"):
        multiplier = -1
        s = s[1:-1]

    s = _MINUS_VARIANTS_RE.sub("-", s)
    s = _CURRENCY_SYMBOLS_RE.sub("", s)
    s = s.replace(",", "")
    s = _WHITESPACE_RE.sub("", s)
    # Currency codes (CAD, EUR, ...) lead or trail the number.
    s = _LEADING_LETTERS_RE.sub(r"\1", s)

    m = _NUMERIC_PREFIX_RE.match(s)
    if not m:
        return _ZERO
    try:
        value = Decimal(m.group(0))
    except InvalidOperation:
        return _ZERO
    if not value.is_finite() or (value and value.adjusted() > _MAX_ADJUSTED_EXPONENT):
        return _ZERO
    return value * multiplier


def _quantize(value: Decimal | float | int) -> Decimal:
    try:
        q = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return _ZERO
    return q if q.is_finite() else _ZERO


def format_amount(value: Decimal | float | int) -> str:
    """Render ``value`` as ``"$X.XX"`` or ``"-$X.XX"`` (no grouping)."""

    q = _quantize(value)
    if q < 0:
        return f"-${-q:.2f}"
    return f"${abs(q):.2f}"


def format_amount_display(value: Decimal | float | int) -> str:
    """Render ``value`` like :func:`format_amount` with thousands grouping."""

    q = _quantize(value)
    if q < 0:
        return f"-${-q:,.2f}"
    return f"${abs(q):,.2f}"


__all__ = ["format_amount", "format_amount_display", "parse_amount"]
