"""Ledger → delimited text.

Quoting is minimal: only values containing a comma are wrapped in double
quotes, and embedded double quotes are written as-is (not doubled). Values
with a literal ``"`` therefore do not survive a round trip through
:func:`statement_merger.reader.parse`.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import CSV_HEADERS, CanonicalTransaction


def _quote(value: str) -> str:
    return f'"{value}"' if "," in value else value


def serialize(ledger: Iterable[CanonicalTransaction]) -> str:
    """Render ``ledger`` with the canonical header; empty ledger → ``""``."""

    rows = list(ledger)
    if not rows:
        return ""
    lines = [",".join(CSV_HEADERS)]
    for tx in rows:
        row = tx.as_row()
        lines.append(",".join(_quote(row[h] or "") for h in CSV_HEADERS))
    return "\n".join(lines)


__all__ = ["serialize"]
