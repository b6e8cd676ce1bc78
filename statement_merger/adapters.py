"""Raw record → Canonical Transaction adapter.

One adapter serves every origin; the per-origin differences are small and
live in lookup tables here:

- BankB (CIBC) exports list purchases as positive numbers. Amounts are
  forced negative and card-payment boilerplate rows are dropped.
- BankC (PC Financial) exports carry a ``Type`` column; ``payment`` rows
  are dropped.
- WalletProvider (Wealthsimple) rows are always labeled ``Wealthsimple``,
  as are rows from any origin whose own account column names it.

Header names vary by export, so every field is resolved from the first
present of several accepted header variants.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

from .amounts import format_amount, parse_amount
from .dates import format_date
from .logging_setup import get_logger
from .models import CanonicalTransaction, Origin, Suppressed
from .rules import categorize

_logger = get_logger("statement_merger.adapters")

DESCRIPTION_PLACEHOLDER = "No Description"
WALLET_LABEL = "Wealthsimple"

DESCRIPTION_HEADERS: tuple[str, ...] = ("Description", "description")
AMOUNT_HEADERS: tuple[str, ...] = ("Amount", "amount")
DATE_HEADERS: tuple[str, ...] = (
    "Date",
    "date",
    "Transfer date",
    "Transfer Date",
    "Transaction Date",
    "Posted Date",
)
TYPE_HEADERS: tuple[str, ...] = ("Type", "type")
ACCOUNT_HEADERS: tuple[str, ...] = ("Account", "Account/Card")

# Upper-cased description fragments dropped per origin.
_SUPPRESSED_DESCRIPTIONS: dict[Origin, tuple[str, ...]] = {
    Origin.BANK_B: ("ROYAL BANK OF CANADA MONTREAL", "PAYMENT THANK YOU"),
}
# Lower-cased ``Type`` values dropped per origin.
_SUPPRESSED_TYPES: dict[Origin, tuple[str, ...]] = {
    Origin.BANK_C: ("payment",),
}
_FORCED_DEBIT_ORIGINS: frozenset[Origin] = frozenset({Origin.BANK_B})

_WHITESPACE_RE = re.compile(r"\s+")


def _first_present(record: Mapping[str, str], headers: Sequence[str]) -> str:
    """Return the first non-empty value among ``headers``; ``""`` if none."""

    for h in headers:
        v = record.get(h)
        if v:
            return v
    return ""


def _clean_description(value: str) -> str:
    cleaned = _WHITESPACE_RE.sub(" ", value).strip()
    return cleaned or DESCRIPTION_PLACEHOLDER


def _origin_filter(record: Mapping[str, str], origin: Origin) -> Suppressed | None:
    desc_upper = _first_present(record, DESCRIPTION_HEADERS).upper()
    for fragment in _SUPPRESSED_DESCRIPTIONS.get(origin, ()):
        if fragment in desc_upper:
            return Suppressed(f"{origin.value} boilerplate: {fragment.lower()}")
    row_type = _first_present(record, TYPE_HEADERS).strip().lower()
    if row_type and row_type in _SUPPRESSED_TYPES.get(origin, ()):
        return Suppressed(f"{origin.value} row type: {row_type}")
    return None


def _resolve_account(record: Mapping[str, str], origin: Origin, account_label: str) -> str:
    incoming = _first_present(record, ACCOUNT_HEADERS).lower()
    if origin is Origin.WALLET or "wealthsimple" in incoming:
        return WALLET_LABEL
    return account_label


def adapt(
    record: Mapping[str, str], origin: Origin, account_label: str
) -> CanonicalTransaction | Suppressed:
    """Map one raw record onto a canonical transaction.

    Returns :class:`~statement_merger.models.Suppressed` when either the
    origin filter or the categorization engine vetoes the row.
    """

    vetoed = _origin_filter(record, origin)
    if vetoed is not None:
        return vetoed

    amount = parse_amount(_first_present(record, AMOUNT_HEADERS))
    if origin in _FORCED_DEBIT_ORIGINS:
        amount = -abs(amount)

    description = _clean_description(_first_present(record, DESCRIPTION_HEADERS))
    result = categorize(description, amount)
    if isinstance(result, Suppressed):
        return result

    return CanonicalTransaction(
        date=format_date(_first_present(record, DATE_HEADERS)),
        description=result.description_override or description,
        category=result.category,
        sub_category=result.sub_category,
        amount=format_amount(amount),
        account=_resolve_account(record, origin, account_label),
    )


def process_records(
    records: Iterable[Mapping[str, str]], origin: Origin, account_label: str
) -> list[CanonicalTransaction]:
    """Adapt a batch of raw records, dropping suppressed rows."""

    out: list[CanonicalTransaction] = []
    suppressed = 0
    for record in records:
        result = adapt(record, origin, account_label)
        if isinstance(result, Suppressed):
            suppressed += 1
            _logger.debug("adapt:suppressed origin=%s reason=%s", origin.value, result.reason)
            continue
        out.append(result)
    _logger.info(
        "adapt:batch origin=%s account=%r kept=%d suppressed=%d",
        origin.value,
        account_label,
        len(out),
        suppressed,
    )
    return out


__all__ = [
    "DESCRIPTION_PLACEHOLDER",
    "WALLET_LABEL",
    "adapt",
    "process_records",
]
