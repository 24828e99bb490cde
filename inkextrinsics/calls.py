"""Payloads for the contracts pallet's dispatchable calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PALLET = "Contracts"

MAX_U64 = 2**64 - 1
MAX_U128 = 2**128 - 1


def _check_uint(name: str, value: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer")
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} is out of range: {value}")
    return value


def _check_optional_balance(name: str, value: int | None) -> int | None:
    if value is None:
        return None
    return _check_uint(name, value, MAX_U128)


@dataclass(frozen=True)
class Weight:
    """Computation time and proof size charged for a call."""

    ref_time: int
    proof_size: int

    def __post_init__(self) -> None:
        _check_uint("ref_time", self.ref_time, MAX_U64)
        _check_uint("proof_size", self.proof_size, MAX_U64)

    def __str__(self) -> str:
        return f"Weight(ref_time: {self.ref_time}, proof_size: {self.proof_size})"


@dataclass
class Payload:
    """A call ready to be signed: pallet, call name and its named fields."""

    pallet: str
    call: str
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RemoveCode:
    """A call to ``remove_code``."""

    code_hash: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "code_hash", bytes(self.code_hash))

    def build(self) -> Payload:
        """Return the payload of the call."""
        return Payload(PALLET, "remove_code", {"code_hash": self.code_hash})


@dataclass(frozen=True)
class InstantiateWithCode:
    """A call to ``instantiate_with_code``."""

    value: int
    gas_limit: Weight
    storage_deposit_limit: int | None
    code: bytes
    data: bytes
    salt: bytes

    def __post_init__(self) -> None:
        _check_uint("value", self.value, MAX_U128)
        _check_optional_balance("storage_deposit_limit", self.storage_deposit_limit)
        for name in ("code", "data", "salt"):
            object.__setattr__(self, name, bytes(getattr(self, name)))

    def build(self) -> Payload:
        """Return the payload of the call."""
        return Payload(
            PALLET,
            "instantiate_with_code",
            {
                "value": self.value,
                "gas_limit": self.gas_limit,
                "storage_deposit_limit": self.storage_deposit_limit,
                "code": self.code,
                "data": self.data,
                "salt": self.salt,
            },
        )


@dataclass(frozen=True)
class Instantiate:
    """A call to ``instantiate`` from code already stored on chain."""

    value: int
    gas_limit: Weight
    storage_deposit_limit: int | None
    code_hash: bytes
    data: bytes
    salt: bytes

    def __post_init__(self) -> None:
        _check_uint("value", self.value, MAX_U128)
        _check_optional_balance("storage_deposit_limit", self.storage_deposit_limit)
        for name in ("code_hash", "data", "salt"):
            object.__setattr__(self, name, bytes(getattr(self, name)))

    def build(self) -> Payload:
        """Return the payload of the call."""
        return Payload(
            PALLET,
            "instantiate",
            {
                "value": self.value,
                "gas_limit": self.gas_limit,
                "storage_deposit_limit": self.storage_deposit_limit,
                "code_hash": self.code_hash,
                "data": self.data,
                "salt": self.salt,
            },
        )


@dataclass(frozen=True)
class Call:
    """A call to a contract message."""

    dest: bytes
    value: int
    gas_limit: Weight
    storage_deposit_limit: int | None
    data: bytes

    def __post_init__(self) -> None:
        _check_uint("value", self.value, MAX_U128)
        _check_optional_balance("storage_deposit_limit", self.storage_deposit_limit)
        object.__setattr__(self, "dest", bytes(self.dest))
        object.__setattr__(self, "data", bytes(self.data))

    def build(self) -> Payload:
        """Return the payload of the call; the destination is an account id address."""
        return Payload(
            PALLET,
            "call",
            {
                "dest": {"Id": self.dest},
                "value": self.value,
                "gas_limit": self.gas_limit,
                "storage_deposit_limit": self.storage_deposit_limit,
                "data": self.data,
            },
        )