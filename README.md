# inkextrinsics

Helpers for tools that work with ink! smart contracts on Substrate chains.
The package uses only the standard library.

## Modules

- `inkextrinsics.units` holds the basic balance types.
  - `UnitPrefix` covers the prefixes G, M, k, none, m, μ and n, with their
    exponents.
  - `TokenMetadata` gives a token's decimals and symbol.
    `TokenMetadata.from_system_properties` reads them from a node's
    `system_properties` mapping. When values are missing it uses the defaults:
    12 decimals and the symbol `UNIT`.
  - `DenominatedBalance` parses and prints values such as `500.5MDOT`.
- `inkextrinsics.balance` provides `BalanceVariant`, which holds either a raw
  integer or a `DenominatedBalance`.
  - `BalanceVariant.parse` accepts either form. Underscores are ignored.
  - `BalanceVariant.from_value` writes a raw integer in the largest unit that
    fits the token.
  - `BalanceVariant.denominate_balance` turns a balance back into a raw
    integer. It raises `ValueError` if the value is more precise than the
    token allows.
- `inkextrinsics.urls` provides `url_to_string`. It formats a node URL and
  always writes out the port, for example `wss://test.io/test/1` becomes
  `wss://test.io:443/test/1`.
- `inkextrinsics.calls` defines call payloads for the `Contracts` pallet.
  - `Weight` is one of the call fields.
  - The calls are `Call`, `Instantiate`, `InstantiateWithCode` and
    `RemoveCode`.
  - Each call's `build()` method returns a `Payload` that holds the pallet
    name, the call name and the named fields.
- `inkextrinsics.env_check` checks a contract's environment types against the
  node's.
  - It includes a small type registry: `PortableRegistry`, `RegistryType`,
    `Composite`, `ArrayDef`, `Primitive`, `Field` and `TypeParam`.
  - `EnvironmentSpec` holds the contract's environment types.
  - `resolve_type_definition` resolves a type to its definition.
  - `compare_node_env_with_contract` raises `ValueError` when the node's
    environment types and the contract's do not match. If the node has no
    `pallet_contracts::Environment` type, it prints a warning to stderr,
    unless `Verbosity.QUIET` is set.
- `inkextrinsics.contract_storage` decodes raw contract storage.
  - Storage layouts are described with `RootLayout`, `StructLayout`,
    `EnumLayout`, `FieldLayout`, `LeafLayout`, `ArrayLayout` and
    `HashLayout`.
  - `ContractStorageLayout` takes `ContractStorageData` and groups the raw
    entries by root key. It then decodes them into `Mapping`, `Lazy`,
    `StorageVec` and `Packed` cells, sorted by path.
  - `key_parts` splits a storage key into its root key and mapping key.
- `inkextrinsics.contract_info` works with contract info read from storage.
  - It provides `TrieId`, `AccountData` and `ContractInfo`, which has a
    `to_json()` method.
  - `ContractInfoRaw.from_decoded` builds contract info from a decoded
    `ContractInfoOf` mapping, and `ContractInfoRaw.into_contract_info` turns
    it into a `ContractInfo`. The storage deposit is taken from the deposit
    account's free balance when the info has a `deposit_account` field.
    Otherwise it is the reserved balance of the contract's own account.
  - `parse_contract_account_address` reads the account id from a
    `ContractInfoOf` storage key.

## Example

```python
from inkextrinsics.balance import BalanceVariant
from inkextrinsics.units import TokenMetadata

tm = TokenMetadata(token_decimals=10, symbol="DOT")
raw = BalanceVariant.parse("500.5MDOT").denominate_balance(tm)
assert raw == 5_005_000_000_000_000_000
print(BalanceVariant.from_value(raw, tm))  # 500.5MDOT
```

## Decoding storage

`ContractStorageLayout(data, decoder)` requires a decoder object that provides:

- a `layout` property, holding the contract's root storage layout;
- a `registry` property, holding a `PortableRegistry`;
- a `decode(type_id, data)` method, which decodes the bytes of a value of that
  type.

The package does not decode SCALE values on its own.

## What the package does not do

- It does not connect to a node. It has no RPC or websocket client.
- It does not sign, submit or watch transactions. The call classes only build
  `Payload` values.
- It does not fetch storage, account data or code from a chain. Callers pass in
  values that have already been fetched and decoded.
- It does not provide a command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```