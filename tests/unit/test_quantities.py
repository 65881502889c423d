from decimal import Decimal

import pytest

from inventory_api.core.quantities import from_milli, round_to_milli, to_milli


def test_to_milli_scales_exact_values():
    assert to_milli(Decimal("10")) == 10000
    assert to_milli(Decimal("-0.25")) == -250
    assert to_milli(Decimal("0.001")) == 1


@pytest.mark.parametrize("value", [Decimal("0.0005"), Decimal("1.2345"), Decimal("Infinity")])
def test_to_milli_rejects_values_it_cannot_store(value):
    with pytest.raises(ValueError):
        to_milli(value)


def test_round_to_milli_rounds_half_even():
    assert round_to_milli(Decimal("0.0125")) == 12
    assert round_to_milli(Decimal("0.0135")) == 14
    assert round_to_milli(Decimal("-0.5")) == -500


def test_from_milli_returns_three_decimal_places():
    assert from_milli(9500) == Decimal("9.5")
    assert str(from_milli(-250)) == "-0.250"


@pytest.mark.parametrize("value", [Decimal("1e17"), Decimal("-9223372036854776")])
def test_to_milli_rejects_values_beyond_int64(value):
    with pytest.raises(ValueError, match="out of range"):
        to_milli(value)


def test_round_to_milli_rejects_values_beyond_int64():
    with pytest.raises(ValueError, match="out of range"):
        round_to_milli(Decimal("1e30"))
    assert round_to_milli(Decimal("9223372036854775.807")) == 2**63 - 1
