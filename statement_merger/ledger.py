"""Ledger merge, deduplication and ordering.

Overlapping statement exports repeat the same transactions, so every merge
re-sorts the combined rows newest first and keeps only the first row per
composite key ``date|description|amount|account`` (case-insensitive).
Category is not part of the key: re-importing a transaction
that a rule change now classifies differently yields no duplicate, and the
classification of the row that sorts first wins.

Dates that never normalized (the raw value was passed through) sort after
every real date. Python's sort is stable, so ties keep concatenation order
and rows already in the ledger win over newly ingested ones.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date

from .amounts import parse_amount
from .dates import parse_display_date
from .models import CSV_HEADERS, CanonicalTransaction, Ledger


def dedupe_key(tx: CanonicalTransaction) -> str:
    """Return the composite identity key used for deduplication."""

    return f"{tx.date}|{tx.description}|{tx.amount}|{tx.account}".lower().strip()


def _date_sort_key(tx: CanonicalTransaction) -> tuple[int, int]:
    parsed = parse_display_date(tx.date)
    # Group 0 holds real dates; unparseable dates form group 1 and go last.
    return (0, -parsed.toordinal()) if parsed is not None else (1, 0)


def merge(existing: Iterable[CanonicalTransaction], batch: Iterable[CanonicalTransaction]) -> Ledger:
    """Merge ``batch`` into ``existing`` and return a new deduplicated ledger.

    Inputs are not mutated. The result is sorted by date descending with
    unparseable dates last, and re-merging an identical batch is a no-op.
    """

    combined = [*existing, *batch]
    combined.sort(key=_date_sort_key)

    seen: set[str] = set()
    out: Ledger = []
    for tx in combined:
        key = dedupe_key(tx)
        if key in seen:
            continue
        seen.add(key)
        out.append(tx)
    return out


# Column name → per-row sort key. Dates and amounts compare by value.
_FIELD_BY_HEADER: dict[str, str] = dict(
    zip(
        CSV_HEADERS,
        ("date", "description", "category", "sub_category", "amount", "account"),
        strict=True,
    )
)


def sort_ledger(
    ledger: Iterable[CanonicalTransaction],
    key: str = "Date",
    *,
    descending: bool = True,
) -> Ledger:
    """Return ``ledger`` sorted on one canonical column.

    ``key`` is a header from ``CSV_HEADERS`` (e.g. ``"Amount"``). Rows with an
    unparseable date always sort last when ordering by date, in either
    direction.
    """

    if key not in _FIELD_BY_HEADER:
        raise ValueError(f"unknown sort key: {key!r}. Allowed: {list(CSV_HEADERS)}")
    rows = list(ledger)

    if key == "Date":
        dated = [(parse_display_date(tx.date), tx) for tx in rows]
        known: list[tuple[date, CanonicalTransaction]] = [
            (d, tx) for d, tx in dated if d is not None
        ]
        unknown = [tx for d, tx in dated if d is None]
        known.sort(key=lambda pair: pair[0], reverse=descending)
        return [tx for _, tx in known] + unknown

    field = _FIELD_BY_HEADER[key]
    sort_key: Callable[[CanonicalTransaction], object]
    if key == "Amount":
        sort_key = lambda tx: parse_amount(tx.amount)  # noqa: E731
    else:
        sort_key = lambda tx: getattr(tx, field).lower()  # noqa: E731
    return sorted(rows, key=sort_key, reverse=descending)


__all__ = ["Ledger", "dedupe_key", "merge", "sort_ledger"]
