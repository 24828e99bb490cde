"""Balances given either as raw integers or with a unit prefix and symbol."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, localcontext

from .units import (
    MAX_MANTISSA,
    DenominatedBalance,
    TokenMetadata,
    UnitPrefix,
    _normalize,
)

MAX_BALANCE = 2**128 - 1

_RAW_BALANCE_RE = re.compile(r"\+?[0-9]+")


def _parse_raw(text: str) -> int | None:
    """Return the text as an unsigned 128-bit integer, or None if it is not one."""
    if _RAW_BALANCE_RE.fullmatch(text) is None:
        return None
    number = int(text)
    if number > MAX_BALANCE:
        return None
    return number


def _power_of_ten(zeros: int) -> Decimal:
    """Return 10**zeros, refusing values a 96-bit mantissa cannot hold."""
    if zeros < 0:
        raise ValueError("number of zeros cannot be negative")
    multiple = 10**zeros
    if multiple > MAX_MANTISSA:
        raise ValueError("decimal value is too large to be represented")
    return Decimal(multiple)


def _scale(value: Decimal) -> int:
    """Number of fractional digits in the value's representation."""
    exponent = value.as_tuple().exponent
    if not isinstance(exponent, int):
        raise ValueError("balance value is not a finite number")
    return max(0, -exponent)


@dataclass(frozen=True)
class BalanceVariant:
    """A balance: a raw integer, or a ``DenominatedBalance`` such as ``500MDOT``."""

    value: int | DenominatedBalance

    @property
    def is_denominated(self) -> bool:
        """True when the balance carries a unit prefix and symbol."""
        return isinstance(self.value, DenominatedBalance)

    @classmethod
    def parse(cls, text: str) -> BalanceVariant:
        """Parse a raw integer balance, or failing that a denominated one."""
        cleaned = text.replace("_", "")
        raw = _parse_raw(cleaned)
        if raw is not None:
            return cls(raw)
        return cls(DenominatedBalance.parse(cleaned))

    @classmethod
    def from_value(
        cls, value: int, token_metadata: TokenMetadata | None
    ) -> BalanceVariant:
        """Express a raw balance in the largest fitting unit of the token."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("balance must be an integer")
        if value < 0 or value > MAX_BALANCE:
            raise ValueError("balance does not fit an unsigned 128-bit integer")
        if token_metadata is None:
            return cls(value)

        symbol = token_metadata.symbol
        if value == 0:
            return cls(DenominatedBalance(Decimal(0), UnitPrefix.ONE, symbol))

        digits = len(str(value))
        decimals = token_metadata.token_decimals
        giga = decimals + 9
        mega = decimals + 6
        kilo = decimals + 3
        one = decimals
        milli = decimals - 3 if decimals >= 3 else None
        micro = decimals - 6 if decimals >= 6 else None
        nano = decimals - 9 if decimals >= 9 else None

        if digits > giga:
            zeros, unit = giga, UnitPrefix.GIGA
        elif mega < digits <= giga:
            zeros, unit = mega, UnitPrefix.MEGA
        elif kilo < digits <= mega:
            zeros, unit = kilo, UnitPrefix.KILO
        elif one < digits <= kilo:
            zeros, unit = one, UnitPrefix.ONE
        elif milli is not None and milli < digits <= one:
            zeros, unit = milli, UnitPrefix.MILLI
        elif milli is not None and micro is not None and micro < digits <= milli:
            zeros, unit = micro, UnitPrefix.MICRO
        elif nano is not None:
            zeros, unit = nano, UnitPrefix.NANO
        else:
            raise ValueError("Invalid denomination")

        multiple = _power_of_ten(zeros)
        if value > MAX_MANTISSA:
            raise ValueError("value can not be converted into decimal")
        with localcontext() as ctx:
            ctx.prec = 80
            amount = Decimal(value) / multiple
        return cls(DenominatedBalance(_normalize(amount), unit, symbol))

    def denominate_balance(self, token_metadata: TokenMetadata) -> int:
        """Return the raw integer balance, scaling a denominated value as needed."""
        if not isinstance(self.value, DenominatedBalance):
            return self.value

        balance = self.value
        zeros = token_metadata.token_decimals + balance.unit.exponent
        if zeros < 0:
            raise ValueError("the unit prefix is smaller than the token allows")
        multiple = _power_of_ten(zeros)
        if zeros - _scale(balance.value) < 0:
            raise ValueError(
                "Given precision of a Balance value is higher than allowed"
            )
        with localcontext() as ctx:
            ctx.prec = 100
            product = balance.value * multiple
        if abs(product) > MAX_MANTISSA:
            raise ValueError(
                "error while converting balance to raw format. "
                "Overflow during multiplication!"
            )
        if product < 0 or product != product.to_integral_value():
            raise ValueError("balance cannot be converted to an unsigned integer")
        return int(product)

    def __str__(self) -> str:
        return str(self.value)