from decimal import Decimal

import pytest

from inkextrinsics.balance import BalanceVariant
from inkextrinsics.units import DenominatedBalance, TokenMetadata, UnitPrefix


@pytest.fixture
def dot10():
    return TokenMetadata(token_decimals=10, symbol="DOT")


@pytest.fixture
def dot6():
    return TokenMetadata(token_decimals=6, symbol="DOT")


def test_correct_balances_parse():
    assert BalanceVariant.parse("500DOT").is_denominated
    assert BalanceVariant.parse("500") == BalanceVariant(500)
    assert BalanceVariant.parse("1.0DOT").is_denominated


def test_fraction_without_units_fails():
    with pytest.raises(ValueError):
        BalanceVariant.parse("1.0")


def test_incorrect_balance():
    with pytest.raises(ValueError):
        BalanceVariant.parse("500%")


def test_underscores_are_ignored():
    assert BalanceVariant.parse("1_000") == BalanceVariant(1000)


def test_denominated_success(dot10):
    bv = BalanceVariant.parse("500MDOT")
    assert bv.denominate_balance(dot10) == 500 * 1_000_000 * 10_000_000_000


@pytest.mark.parametrize(
    "text, expected",
    [
        ("500.5MDOT", 5_005_000_000_000_000_000),
        ("500.5μDOT", 5_005_000),
        ("0.1nDOT", 1),
        ("500.5GDOT", 5_005_000_000_000_000_000_000),
        ("500.5kDOT", 5_005_000_000_000_000),
        ("500.5DOT", 5_005_000_000_000),
        ("500.5mDOT", 5_005_000_000),
        ("500.5nDOT", 5_005),
        ("523.545621kDOT", 5_235_456_210_000_000),
        ("5001.5DOT", 50_015_000_000_000),
    ],
)
def test_denominate_values(dot10, text, expected):
    assert BalanceVariant.parse(text).denominate_balance(dot10) == expected


def test_value_less_than_precision(dot10):
    bv = BalanceVariant.parse("0.01546nDOT")
    with pytest.raises(ValueError, match="precision"):
        bv.denominate_balance(dot10)


def test_small_number_of_decimals_zero(dot6):
    bv = BalanceVariant.parse("0.4μDOT")
    with pytest.raises(ValueError):
        bv.denominate_balance(dot6)


def test_micro_with_six_decimals(dot6):
    assert BalanceVariant.parse("4123μDOT").denominate_balance(dot6) == 4123


def test_nano_with_six_decimals_fails(dot6):
    with pytest.raises(ValueError):
        BalanceVariant.parse("5nDOT").denominate_balance(dot6)


def test_default_variant_returns_raw(dot10):
    assert BalanceVariant(42).denominate_balance(dot10) == 42


def test_big_input_to_denominate():
    with pytest.raises(ValueError):
        BalanceVariant.parse("79_228_162_514_264_337_593_543_950_336DOT")


def test_big_input_to_raw():
    bv = BalanceVariant.parse("79_228_162_514_264_337_593_543_950_336")
    assert bv == BalanceVariant(79_228_162_514_264_337_593_543_950_336)


def test_from_value_round_trip(dot10):
    sample = BalanceVariant.parse("500.5MDOT")
    converted = BalanceVariant.from_value(5_005_000_000_000_000_000, dot10)
    assert converted == sample
    assert str(converted) == "500.5MDOT"


def test_convert_from_u128(dot6):
    converted = BalanceVariant.from_value(532_500_000_000, dot6)
    assert converted == BalanceVariant(
        DenominatedBalance(Decimal("532.5"), UnitPrefix.KILO, "DOT")
    )


def test_convert_one_from_u128(dot10):
    converted = BalanceVariant.from_value(532_500_000_000, dot10)
    assert converted == BalanceVariant(
        DenominatedBalance(Decimal("53.25"), UnitPrefix.ONE, "DOT")
    )


def test_convert_small_from_u128(dot10):
    converted = BalanceVariant.from_value(532_500, dot10)
    assert converted == BalanceVariant(
        DenominatedBalance(Decimal("53.25"), UnitPrefix.MICRO, "DOT")
    )
    assert str(converted) == "53.25μDOT"


def test_from_value_zero(dot10):
    converted = BalanceVariant.from_value(0, dot10)
    assert converted == BalanceVariant(
        DenominatedBalance(Decimal(0), UnitPrefix.ONE, "DOT")
    )
    assert str(converted) == "0DOT"


def test_from_value_without_metadata():
    converted = BalanceVariant.from_value(1234, None)
    assert converted == BalanceVariant(1234)
    assert str(converted) == "1234"


def test_from_value_whole_number_display(dot10):
    assert str(BalanceVariant.from_value(5_000_000_000_000, dot10)) == "500DOT"


def test_from_value_invalid_denomination():
    metadata = TokenMetadata(token_decimals=4, symbol="DOT")
    with pytest.raises(ValueError, match="Invalid denomination"):
        BalanceVariant.from_value(5, metadata)


def test_from_value_negative_rejected(dot10):
    with pytest.raises(ValueError):
        BalanceVariant.from_value(-1, dot10)