from decimal import Decimal

import pytest

from statement_merger import format_amount, format_amount_display, parse_amount


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("($198.52)", Decimal("-198.52")),
        ("$1,234.56 CAD", Decimal("1234.56")),
        ("−$45.00", Decimal("-45.00")),
        ("–12.10", Decimal("-12.10")),
        ("+12.5", Decimal("12.5")),
        ("  -$3.00  ", Decimal("-3.00")),
        ("1 000.00 usd", Decimal("1000.00")),
        ("$45.00 EUR", Decimal("45.00")),
        ("12.00 GBP", Decimal("12.00")),
        ("EUR 7.25", Decimal("7.25")),
        ("-CHF 3", Decimal("-3")),
    ],
)
def test_parse_amount_normalizes_bank_notations(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "garbage", "nan", "Infinity", "()", "n/a", None])
def test_parse_amount_never_raises_and_defaults_to_zero(raw):
    assert parse_amount(raw) == 0


def test_format_amount_renders_sign_before_currency_symbol():
    assert format_amount(Decimal("-45")) == "-$45.00"
    assert format_amount(Decimal("1234.5")) == "$1234.50"
    assert format_amount(0.125) == "$0.13"


def test_format_amount_never_renders_negative_zero():
    assert format_amount(Decimal("-0.001")) == "$0.00"


def test_format_amount_display_groups_thousands():
    assert format_amount_display(Decimal("-1234.5")) == "-$1,234.50"
    assert format_amount_display(Decimal("987")) == "$987.00"


@pytest.mark.parametrize("raw", ["1e30", "123456789012345678901234567890", "-" + "9" * 40])
def test_amounts_too_large_for_cent_precision_become_zero(raw):
    value = parse_amount(raw)

    assert value == 0
    assert format_amount(value) == "$0.00"


def test_format_amount_tolerates_values_it_cannot_quantize():
    assert format_amount(Decimal("1e30")) == "$0.00"
    assert format_amount(float("inf")) == "$0.00"
    assert format_amount_display(Decimal("NaN")) == "$0.00"
