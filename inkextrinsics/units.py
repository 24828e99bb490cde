"""Token metadata and balances written with a metric unit prefix."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any, Mapping

DEFAULT_TOKEN_DECIMALS = 12
DEFAULT_TOKEN_SYMBOL = "UNIT"

# Limits of a 96-bit mantissa decimal with at most 28 fractional digits.
MAX_SCALE = 28
MAX_MANTISSA = 2**96 - 1

_DECIMAL_RE = re.compile(r"([+-]?)([0-9_]*)(?:\.([0-9_]*))?")
_TRAILING_LETTERS_RE = re.compile(r"[^\W\d_]+\Z")


class UnitPrefix(Enum):
    """Metric prefix of a denominated balance."""

    GIGA = "G"
    MEGA = "M"
    KILO = "k"
    ONE = ""
    MILLI = "m"
    MICRO = "\u03bc"
    NANO = "n"

    @property
    def exponent(self) -> int:
        """Power of ten that the prefix stands for."""
        return _EXPONENTS[self]

    @classmethod
    def from_char(cls, char: str) -> UnitPrefix:
        """Return the prefix for a character; anything unknown means ONE."""
        if not char:
            return cls.ONE
        try:
            return cls(char)
        except ValueError:
            return cls.ONE


_EXPONENTS = {
    UnitPrefix.GIGA: 9,
    UnitPrefix.MEGA: 6,
    UnitPrefix.KILO: 3,
    UnitPrefix.ONE: 0,
    UnitPrefix.MILLI: -3,
    UnitPrefix.MICRO: -6,
    UnitPrefix.NANO: -9,
}


@dataclass(frozen=True)
class TokenMetadata:
    """Decimals and symbol of the chain's native token."""

    token_decimals: int
    symbol: str

    @classmethod
    def from_system_properties(cls, properties: Mapping[str, Any]) -> TokenMetadata:
        """Build metadata from a node's ``system_properties`` answer."""
        decimals = properties.get("tokenDecimals", DEFAULT_TOKEN_DECIMALS)
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            raise ValueError("error converting decimal to u64")
        symbol = properties.get("tokenSymbol", DEFAULT_TOKEN_SYMBOL)
        if not isinstance(symbol, str):
            raise ValueError("error converting symbol to string")
        return cls(token_decimals=decimals, symbol=symbol)


def _parse_exact_decimal(text: str) -> Decimal:
    """Parse a decimal that must fit a 96-bit mantissa and 28 digit scale exactly."""
    match = _DECIMAL_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid decimal: {text!r}")
    sign = match.group(1)
    whole = match.group(2).replace("_", "")
    fraction = (match.group(3) or "").replace("_", "")
    if not whole and not fraction:
        raise ValueError(f"invalid decimal: {text!r}")
    if len(fraction) > MAX_SCALE:
        raise ValueError("decimal has more fractional digits than can be represented")
    if int(whole + fraction) > MAX_MANTISSA:
        raise ValueError("decimal value is too large to be represented")
    literal = sign + (whole or "0") + (f".{fraction}" if fraction else "")
    return Decimal(literal)


def _normalize(value: Decimal) -> Decimal:
    """Strip trailing zeros without losing any digits."""
    if value == 0:
        return Decimal(0)
    with localcontext() as ctx:
        ctx.prec = 80
        return value.normalize()


def _format_decimal(value: Decimal) -> str:
    """Render a decimal in plain positional notation."""
    return format(value, "f")


@dataclass(frozen=True)
class DenominatedBalance:
    """A balance such as ``500.5MDOT``: value, unit prefix and symbol."""

    value: Decimal
    unit: UnitPrefix
    symbol: str

    @classmethod
    def parse(cls, value: str) -> DenominatedBalance:
        """Parse a denominated balance; raise ValueError when malformed."""
        symbols = "".join(
            itertools.dropwhile(lambda ch: ch.isnumeric() or ch in ".,", value)
        )
        if not symbols:
            raise ValueError("no units or symbols present")
        unit = UnitPrefix.from_char(symbols[0])
        if unit is UnitPrefix.ONE:
            symbol = ""
        else:
            if len(symbols) < 2:
                raise ValueError("cannot find the first char's index")
            symbol = symbols[1:]
        number = _TRAILING_LETTERS_RE.sub("", value)
        try:
            parsed = _parse_exact_decimal(number)
        except ValueError as exc:
            raise ValueError(
                "Error while parsing the value. "
                "Please denominate and normalize the balance first."
            ) from exc
        return cls(value=_normalize(parsed), unit=unit, symbol=symbol)

    def __str__(self) -> str:
        return f"{_format_decimal(self.value)}{self.unit.value}{self.symbol}"