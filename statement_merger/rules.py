"""Rule-based categorization engine.

Categories come from an ordered table of declarative :class:`Rule` entries.
Evaluation is first-match-wins in table order with no backtracking, so the
position of a rule in :data:`RULES` is part of its meaning: rules keyed on a
specific counterparty or amount fingerprint sit above the broad keyword
rules that would otherwise shadow them (for example the Child Benefit
deposit above the generic ``direct deposit from`` rule).

Each rule may constrain the lower-cased description (``prefixes``,
``contains``, ``exact``) and the signed amount (``amounts``, ``sign``).
Within one predicate kind any listed value may match; every non-empty kind
must match for the rule to fire.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from .models import Classification, Classified, Suppressed

type Sign = Literal["positive", "negative", "non_negative"]

# Amount fingerprints are compared on absolute value with a cent tolerance.
_AMOUNT_TOLERANCE = 0.005

FALLBACK = Classified("Transfers", "Other transfer")
NOT_USER_SPENDING = Suppressed("not user spending")


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    result: Classification
    prefixes: tuple[str, ...] = ()
    contains: tuple[str, ...] = ()
    exact: tuple[str, ...] = ()
    amounts: tuple[float, ...] = ()
    sign: Sign | None = None

    def matches(self, text: str, amount: Decimal | float) -> bool:
        """Return True when every configured predicate holds for the input.

        ``text`` must already be lower-cased and trimmed.
        """

        if self.prefixes and not any(text.startswith(p) for p in self.prefixes):
            return False
        if self.contains and not any(c in text for c in self.contains):
            return False
        if self.exact and text not in self.exact:
            return False
        value = float(amount)
        if self.amounts and not any(
            math.isclose(abs(value), a, abs_tol=_AMOUNT_TOLERANCE) for a in self.amounts
        ):
            return False
        if self.sign == "positive" and not value > 0:
            return False
        if self.sign == "negative" and not value < 0:
            return False
        if self.sign == "non_negative" and not value >= 0:
            return False
        return True


_MATERNITY_AMOUNTS: tuple[float, ...] = (1246.84, 1252.00, 1267.59, 1246.00, 1211.00, 1257.85, 1256.00)


def _c(category: str, sub_category: str, override: str | None = None) -> Classified:
    return Classified(category, sub_category, override)


RULES: tuple[Rule, ...] = (
    # Account-level movements that are not spending at all.
    Rule("payment_to", NOT_USER_SPENDING, prefixes=("payment to",)),
    # Named counterparties take precedence over amount fingerprints.
    Rule(
        "araujo_full_name_in",
        _c("Transfers", "Other transfer"),
        contains=("luiz fernando pinheiros de araujo",),
        sign="positive",
    ),
    Rule(
        "araujo_simplii_in",
        _c("Transfers", "Transfer in", "Simplii"),
        contains=("luiz araujo",),
        sign="positive",
    ),
    # 1211.00 outgoing is an internal transfer; incoming it is a benefit payment.
    Rule(
        "internal_1211_out",
        _c("Transfers", "Internal transfer"),
        amounts=(1211.00,),
        sign="negative",
    ),
    Rule(
        "maternity_transfer",
        _c("Income", "Maternity Leave"),
        prefixes=("transfer from 111431248 to 114728209",),
    ),
    Rule(
        "maternity_amounts",
        _c("Income", "Maternity Leave"),
        amounts=_MATERNITY_AMOUNTS,
        sign="positive",
    ),
    Rule(
        "internal_transfer",
        _c("Transfers", "Internal transfer"),
        prefixes=(
            "transfer from 111195544 to 114728209",
            "transfer from 114728209 to 111195544",
        ),
    ),
    Rule(
        "transfer_in_other",
        _c("Transfers", "Transfer in (other bank/internal)"),
        prefixes=(
            "transfer from 200225325 to 114728209",
            "transfer from 115853228 to 114728209",
        ),
    ),
    Rule(
        "transfer_out_other",
        _c("Transfers", "Transfer out (other bank/internal)"),
        prefixes=("transfer from 114728209 to 200225325",),
    ),
    Rule(
        "international_transfer",
        _c("Transfers", "International Transfer"),
        contains=("international transfer",),
    ),
    # Income
    Rule("salary", _c("Income", "Salary"), contains=("long view",)),
    Rule("interest", _c("Income", "Interest"), contains=("interest",)),
    Rule(
        "child_benefit",
        _c("Income", "Child Benefit"),
        prefixes=("direct deposit from canada",),
        amounts=(295.04,),
    ),
    Rule("direct_deposit", _c("Income", "Direct deposit"), prefixes=("direct deposit from",)),
    # Auto-withdrawals and debt
    Rule(
        "car_payment",
        _c("Transport", "Car payment"),
        prefixes=("auto-withdrawal by rbc loan pymt",),
    ),
    Rule(
        "rent",
        _c("Household", "Rent/strata (Solaro Apartment)"),
        prefixes=("auto-withdrawal by solaro apartmen",),
    ),
    Rule("utilities", _c("Household", "Utilities"), prefixes=("auto-withdrawal by b c hydro pap",)),
    Rule(
        "credit_card_payment",
        _c("Debt & credit", "Credit card/line of credit payment (PC Financial)"),
        prefixes=("transfer to pc financial",),
    ),
    # Retail and merchants; gas before the broader wholesale store.
    Rule("costco_gas", _c("Transport", "Gas"), contains=("costco gas w259",)),
    Rule("costco_wholesale", _c("Household", "Groceries"), contains=("costco wholesale w259",)),
    Rule("produce", _c("Household", "Groceries"), contains=("willowbrook produce",)),
    Rule("furniture", _c("Household", "Furniture"), contains=("ikea",)),
    Rule("veterinary", _c("Education", "Vet validation"), contains=("associated veterinary",)),
    Rule("supplements", _c("Health & Wellness", "Supplement"), contains=("fullscript.com",)),
    Rule("laundry", _c("Household", "Laundry"), contains=("kim's coin laundry",)),
    Rule("kids_clothes", _c("Kids", "Clothes/Toys"), contains=("once upon a child",)),
    Rule("pharmacy", _c("Personal", "Health & Personal Care"), contains=("shoppers",)),
    Rule("beauty", _c("Personal", "Beauty"), contains=("andreia depila", "dolce lounge")),
    Rule("haircut", _c("Personal", "Haircut"), contains=("great clips",)),
    Rule("car_insurance", _c("Transport", "Car Insurance"), contains=("icbc", "max insurance")),
    Rule("car_wash", _c("Transport", "Car wash"), contains=("magic wand car wash",)),
    Rule("pet_supplies", _c("Pets", "Pet supplies"), contains=("homes alive pet centre",)),
    Rule("gym", _c("Health & wellness", "Gym & Club"), contains=("fit4less", "club16")),
    Rule("walmart", _c("Household", "Groceries"), contains=("wal-mart", "walmart")),
    Rule("superstore", _c("Household", "Groceries"), contains=("superstore",)),
    Rule("fast_food", _c("Pleasure", "Fast food"), contains=("subway",)),
    Rule("restaurant", _c("Pleasure", "Restaurant/cafe"), contains=("hard bean brunch",)),
    # Online marketplaces: purchases by vendor, credits share one bucket.
    Rule(
        "aliexpress",
        _c("Shopping", "Online (Aliexpress)"),
        contains=("aliexpress",),
        sign="negative",
    ),
    Rule("temu", _c("Household", "Misc shopping"), contains=("temu.com",), sign="negative"),
    Rule("amazon", _c("Shopping", "Online (Amazon)"), contains=("amazon",), sign="negative"),
    Rule(
        "marketplace_refund",
        _c("Shopping", "Refund/credit"),
        contains=("amazon", "temu.com", "aliexpress"),
        sign="non_negative",
    ),
)


def first_match(
    description: str, amount: Decimal | float, *, rules: Sequence[Rule] = RULES
) -> Rule | None:
    """Return the first rule in ``rules`` matching the input, if any."""

    text = (description or "").lower().strip()
    for rule in rules:
        if rule.matches(text, amount):
            return rule
    return None


def categorize(
    description: str, amount: Decimal | float, *, rules: Sequence[Rule] = RULES
) -> Classification:
    """Classify a transaction or suppress it.

    Returns :class:`~statement_merger.models.Suppressed` only when a
    suppression rule fires; otherwise the first matching rule's
    :class:`~statement_merger.models.Classified` result, or :data:`FALLBACK`.
    """

    rule = first_match(description, amount, rules=rules)
    return FALLBACK if rule is None else rule.result


__all__ = ["FALLBACK", "NOT_USER_SPENDING", "RULES", "Rule", "categorize", "first_match"]
