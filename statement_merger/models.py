"""Data models and type aliases for ``statement_merger``.

Raw records stay opaque (header → string mappings) because every bank export
uses its own column names. Everything downstream of the source adapter works
on :class:`CanonicalTransaction`, whose fields are display strings so the
ledger stays CSV-friendly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------------------

type RawRecord = dict[str, str]
"""A single data row keyed by the original header strings.

Values are trimmed and quote-stripped; missing trailing fields are ``""``.
Records are ephemeral and scoped to one ingested file or pasted blob.
"""


class Origin(StrEnum):
    """Bank/provider tag that drives adapter filtering, signs and labels."""

    BANK_A = "EQ"
    BANK_B = "CIBC"
    BANK_C = "PC"
    WALLET = "WS"
    OTHER = "OTHER"


# ---------------------------------------------------------------------------
# Canonical ledger
# ---------------------------------------------------------------------------

CSV_HEADERS: tuple[str, ...] = (
    "Date",
    "Description",
    "Category",
    "SubCategory",
    "Amount",
    "Account/Card",
)


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A normalized, categorized transaction.

    Attributes
    ----------
    date:
        ``"Mon D, YYYY"`` when the raw value parsed, otherwise the raw value
        passed through unchanged.
    description:
        Whitespace-collapsed description; never empty.
    category, sub_category:
        Assigned by the categorization engine.
    amount:
        Signed amount rendered as ``"$X.XX"`` or ``"-$X.XX"``.
    account:
        Display label of the account/card the row came from.
    """

    date: str
    description: str
    category: str
    sub_category: str
    amount: str
    account: str

    def as_row(self) -> dict[str, str]:
        """Return the row keyed by :data:`CSV_HEADERS`."""

        return dict(
            zip(
                CSV_HEADERS,
                (
                    self.date,
                    self.description,
                    self.category,
                    self.sub_category,
                    self.amount,
                    self.account,
                ),
                strict=True,
            )
        )

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> CanonicalTransaction:
        """Build a transaction from a mapping keyed by :data:`CSV_HEADERS`."""

        return cls(
            date=row.get("Date", ""),
            description=row.get("Description", ""),
            category=row.get("Category", ""),
            sub_category=row.get("SubCategory", ""),
            amount=row.get("Amount", ""),
            account=row.get("Account/Card", ""),
        )


type Ledger = list[CanonicalTransaction]
"""Ordered, deduplicated transactions for one working session."""


# ---------------------------------------------------------------------------
# Categorization results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Classified:
    """A category assignment, optionally rewriting the displayed description."""

    category: str
    sub_category: str
    description_override: str | None = None


@dataclass(frozen=True, slots=True)
class Suppressed:
    """Deliberate exclusion of a row from the ledger (not an error)."""

    reason: str


type Classification = Classified | Suppressed


# ---------------------------------------------------------------------------
# Ingestion bookkeeping
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileStatus:
    """Outcome of ingesting one file or pasted blob."""

    name: str
    status: Literal["processed", "skipped"]
    count: int
    reason: str | None = None


# ---------------------------------------------------------------------------
# AI summary (external collaborator output)
# ---------------------------------------------------------------------------


class CategoryAmount(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    category: str
    amount: float


class AiSummary(BaseModel):
    """Structured overview returned by the summary collaborator."""

    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, str_strip_whitespace=True
    )

    overview: str
    top_categories: list[CategoryAmount] = Field(alias="topCategories")
    savings_advice: str = Field(alias="savingsAdvice")


__all__ = [
    "AiSummary",
    "CSV_HEADERS",
    "CanonicalTransaction",
    "CategoryAmount",
    "Classification",
    "Classified",
    "FileStatus",
    "Ledger",
    "Origin",
    "RawRecord",
    "Suppressed",
]
