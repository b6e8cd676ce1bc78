"""Delimited text reader with a repair pass for unquoted commas.

Statement exports are not reliably RFC 4180: some banks write dates such as
``Jan 5, 2026`` and amounts such as ``$1,045.00`` without quoting them, which
splits one field into two. The stdlib :mod:`csv` module would faithfully
reproduce those extra columns, so this module scans lines itself and then
applies a narrow repair heuristic for the one shape observed in practice:
four declared headers and five raw tokens. Other shapes pass through
unrepaired.
"""

from __future__ import annotations

import re

from .logging_setup import get_logger
from .models import RawRecord

_logger = get_logger("statement_merger.reader")

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_BARE_YEAR_RE = re.compile(r"^\d{4}$")
_CURRENCY_SYMBOL_RE = re.compile(r"[$€£¥]")
_CURRENCY_CODE_RE = re.compile(r"\b[A-Z]{3}\b")
_NUMERIC_RE = re.compile(r"^\d+(?:\.\d+)?$")

_REPAIR_HEADER_COUNT = 4
_REPAIR_TOKEN_COUNT = 5


def _strip_quotes(value: str) -> str:
    return re.sub(r"^[\"']|[\"']$", "", value.strip())


def split_line(line: str) -> list[str]:
    """Split one line on commas that are not inside double quotes.

    Quote characters toggle the quoted state and are not copied into the
    token. Tokens are whitespace-trimmed.
    """

    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            tokens.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    tokens.append("".join(current).strip())
    return tokens


def repair_tokens(headers: list[str], tokens: list[str]) -> list[str]:
    """Re-merge tokens split by an unquoted comma in a date or amount.

    Fires only for exactly four headers and exactly five tokens:

    (a) ``tokens[1]`` is a bare 4-digit year: re-join it to ``tokens[0]`` as
        ``"Mon D, YYYY"``.
    (b) when five tokens still remain and ``tokens[2]`` carries a currency
        symbol, or ``tokens[3]`` carries a currency code or is purely
        numeric: re-join them with the thousands separator restored.
    """

    if len(headers) != _REPAIR_HEADER_COUNT or len(tokens) != _REPAIR_TOKEN_COUNT:
        return tokens

    out = list(tokens)
    if _BARE_YEAR_RE.match(out[1]):
        out = [f"{out[0]}, {out[1]}", *out[2:]]
        _logger.debug("reader:repair_date merged=%r", out[0])

    if len(out) == _REPAIR_TOKEN_COUNT and (
        _CURRENCY_SYMBOL_RE.search(out[2])
        or _CURRENCY_CODE_RE.search(out[3])
        or _NUMERIC_RE.match(out[3])
    ):
        out = [out[0], out[1], f"{out[2]},{out[3]}", *out[4:]]
        _logger.debug("reader:repair_amount merged=%r", out[2])

    return out


def parse(text: str) -> list[RawRecord]:
    """Parse delimited ``text`` into header-keyed raw records.

    The first non-empty line is the header. Blank data lines are skipped.
    Missing trailing fields default to ``""``; surplus tokens are ignored. No
    row is dropped for having the wrong field count, and nothing raises.
    """

    stripped = (text or "").strip()
    if not stripped:
        return []

    lines = _LINE_SPLIT_RE.split(stripped)
    headers = [_strip_quotes(h) for h in split_line(lines[0])]

    records: list[RawRecord] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        tokens = repair_tokens(headers, split_line(line))
        record: RawRecord = {}
        for i, header in enumerate(headers):
            record[header] = _strip_quotes(tokens[i]) if i < len(tokens) else ""
        records.append(record)

    _logger.debug("reader:parsed headers=%d rows=%d", len(headers), len(records))
    return records


__all__ = ["parse", "repair_tokens", "split_line"]
