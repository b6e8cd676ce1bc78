from decimal import Decimal

import pytest

from statement_merger import RULES, Classified, Rule, Suppressed, categorize
from statement_merger.rules import FALLBACK, first_match


def _rule_index(name: str) -> int:
    return [r.name for r in RULES].index(name)


def test_payment_to_prefix_is_suppressed():
    result = categorize("  Payment to Landlord Inc", Decimal("-900"))

    assert isinstance(result, Suppressed)


def test_unmatched_description_falls_back_to_generic_pair():
    assert categorize("Random Shop 42", Decimal("-10")) == FALLBACK
    assert FALLBACK == Classified("Transfers", "Other transfer")


def test_specific_benefit_amount_beats_generic_deposit_keyword():
    desc = "DIRECT DEPOSIT FROM CANADA CCB"

    assert categorize(desc, Decimal("295.04")) == Classified("Income", "Child Benefit")
    assert categorize(desc, Decimal("100.00")) == Classified("Income", "Direct deposit")
    assert first_match(desc, Decimal("295.04")).name == "child_benefit"


def test_amount_fingerprint_uses_cent_tolerance():
    assert categorize("DIRECT DEPOSIT FROM CANADA", 295.041) == Classified(
        "Income", "Child Benefit"
    )


def test_named_counterparty_beats_amount_fingerprint():
    result = categorize("E-TRANSFER LUIZ ARAUJO", Decimal("1211.00"))

    assert result == Classified("Transfers", "Transfer in", "Simplii")


def test_same_amount_splits_on_sign():
    assert categorize("E-TRANSFER", Decimal("1211.00")) == Classified("Income", "Maternity Leave")
    assert categorize("E-TRANSFER", Decimal("-1211.00")) == Classified(
        "Transfers", "Internal transfer"
    )


def test_maternity_account_transfer_matches_regardless_of_amount():
    result = categorize("Transfer from 111431248 to 114728209", Decimal("-50"))

    assert result == Classified("Income", "Maternity Leave")


@pytest.mark.parametrize(
    ("description", "amount", "expected"),
    [
        ("COSTCO GAS W259 LANGLEY", "-60.00", ("Transport", "Gas")),
        ("COSTCO WHOLESALE W259", "-45.00", ("Household", "Groceries")),
        ("IKEA COQUITLAM", "-120.00", ("Household", "Furniture")),
        ("AUTO-WITHDRAWAL BY B C HYDRO PAP", "-80.00", ("Household", "Utilities")),
        ("SHOPPERS DRUG MART #2211", "-15.00", ("Personal", "Health & Personal Care")),
        ("INTEREST PAID", "3.10", ("Income", "Interest")),
        ("INTERNATIONAL TRANSFER TO BR", "-500.00", ("Transfers", "International Transfer")),
        ("AMAZON.CA MKTPLACE", "-20.00", ("Shopping", "Online (Amazon)")),
        ("AMAZON.CA MKTPLACE", "20.00", ("Shopping", "Refund/credit")),
        ("TEMU.COM", "-9.99", ("Household", "Misc shopping")),
        ("FIT4LESS BURNABY", "-14.99", ("Health & wellness", "Gym & Club")),
        ("FULLSCRIPT.COM", "-60.00", ("Health & Wellness", "Supplement")),
    ],
)
def test_merchant_rules(description, amount, expected):
    result = categorize(description, Decimal(amount))

    assert isinstance(result, Classified)
    assert (result.category, result.sub_category) == expected


def test_rule_table_keeps_specific_rules_above_broad_ones():
    assert _rule_index("child_benefit") < _rule_index("direct_deposit")
    assert _rule_index("internal_1211_out") < _rule_index("maternity_amounts")
    assert _rule_index("araujo_simplii_in") < _rule_index("maternity_amounts")
    assert _rule_index("costco_gas") < _rule_index("costco_wholesale")
    assert _rule_index("amazon") < _rule_index("marketplace_refund")


def test_rule_names_are_unique():
    names = [r.name for r in RULES]

    assert len(names) == len(set(names))


def test_exact_predicate_composes_with_sign():
    rules = (
        Rule(
            "coffee_refund",
            Classified("Pleasure", "Coffee refund"),
            exact=("coffee",),
            sign="positive",
        ),
        Rule("coffee", Classified("Pleasure", "Coffee"), exact=("coffee",)),
    )

    assert categorize(" Coffee ", 4, rules=rules) == Classified("Pleasure", "Coffee refund")
    assert categorize("coffee", -4, rules=rules) == Classified("Pleasure", "Coffee")
    assert categorize("coffee shop", -4, rules=rules) == FALLBACK


def test_first_match_returns_none_when_nothing_fires():
    assert first_match("Random Shop 42", Decimal("-10")) is None
