"""Contract information as read from the contracts pallet's storage."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional

ACCOUNT_ID_LEN = 32
# Length of the Twox64 hash that precedes the account id in a concatenated key.
_TWOX64_LEN = 8
MAX_U32 = 2**32 - 1

_REQUIRED_FIELDS = ("trie_id", "code_hash", "storage_items", "storage_item_deposit")


@dataclass(frozen=True)
class TrieId:
    """The id of a contract's child trie."""

    raw: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", bytes(self.raw))

    def to_hex(self) -> str:
        """Encode the trie id as a 0x-prefixed hex string."""
        return f"0x{self.raw.hex()}"

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True)
class AccountData:
    """Free and reserved balance of an account."""

    free: int
    reserved: int


@dataclass(frozen=True)
class ContractInfo:
    """Trie id, code hash and storage deposits of a contract."""

    trie_id: TrieId
    code_hash: bytes
    storage_items: int
    storage_items_deposit: int
    storage_total_deposit: int

    def to_dict(self) -> dict[str, Any]:
        """Return the contract info as a serialisable mapping."""
        return {
            "trie_id": self.trie_id.to_hex(),
            "code_hash": f"0x{bytes(self.code_hash).hex()}",
            "storage_items": self.storage_items,
            "storage_items_deposit": self.storage_items_deposit,
            "storage_total_deposit": self.storage_total_deposit,
        }

    def to_json(self) -> str:
        """Return the contract info as pretty-printed JSON."""
        return json.dumps(self.to_dict(), indent=2)


def _as_bytes(name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)) and all(
        isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in value
    ):
        return bytes(value)
    raise ValueError(f"field `{name}` cannot be decoded as bytes")


def _as_uint(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{name}` cannot be decoded as an unsigned integer")
    return value


@dataclass(frozen=True)
class ContractInfoRaw:
    """Contract info together with the account that holds its storage deposit.

    Some pallet versions keep the deposit as free balance of a separate
    deposit account; the others keep it reserved on the contract's account.
    """

    deposit_account: bytes
    trie_id: bytes
    code_hash: bytes
    storage_items: int
    storage_item_deposit: int
    deposit_on_main_account: bool

    @classmethod
    def from_decoded(
        cls, contract_account: bytes, decoded: Mapping[str, Any]
    ) -> ContractInfoRaw:
        """Build from a decoded ``ContractInfoOf`` storage value."""
        missing = [name for name in _REQUIRED_FIELDS if name not in decoded]
        if missing:
            raise ValueError(f"contract info is missing field `{missing[0]}`")
        storage_items = _as_uint("storage_items", decoded["storage_items"])
        if storage_items > MAX_U32:
            raise ValueError("field `storage_items` does not fit an unsigned 32-bit integer")
        fields = {
            "trie_id": _as_bytes("trie_id", decoded["trie_id"]),
            "code_hash": _as_bytes("code_hash", decoded["code_hash"]),
            "storage_items": storage_items,
            "storage_item_deposit": _as_uint(
                "storage_item_deposit", decoded["storage_item_deposit"]
            ),
        }
        deposit_account: Optional[bytes]
        try:
            deposit_account = _as_bytes("deposit_account", decoded["deposit_account"])
        except (KeyError, ValueError):
            deposit_account = None
        if deposit_account is not None:
            return cls(
                deposit_account=deposit_account,
                deposit_on_main_account=False,
                **fields,
            )
        return cls(
            deposit_account=bytes(contract_account),
            deposit_on_main_account=True,
            **fields,
        )

    def into_contract_info(self, deposit: AccountData) -> ContractInfo:
        """Combine with the deposit account's data into a ``ContractInfo``."""
        total = deposit.reserved if self.deposit_on_main_account else deposit.free
        return ContractInfo(
            trie_id=TrieId(self.trie_id),
            code_hash=self.code_hash,
            storage_items=self.storage_items,
            storage_items_deposit=self.storage_item_deposit,
            storage_total_deposit=total,
        )


def parse_contract_account_address(storage_key: bytes, root_key_len: int) -> bytes:
    """Extract the account id from a ``ContractInfoOf`` storage key.

    The key is the map's root key, a Twox64 hash and the account id.
    """
    start = root_key_len + _TWOX64_LEN
    if start > len(storage_key):
        raise ValueError("Unexpected storage key size")
    account = bytes(storage_key[start:start + ACCOUNT_ID_LEN])
    if len(account) < ACCOUNT_ID_LEN:
        raise ValueError(
            "AccountId deserialization error: Not enough data to fill buffer"
        )
    return account