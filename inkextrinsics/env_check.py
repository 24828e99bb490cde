"""Checks that a contract's environment types match those of the target chain."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union


class Verbosity(Enum):
    """How much is reported to the user."""

    DEFAULT = "default"
    VERBOSE = "verbose"
    QUIET = "quiet"

    @property
    def is_verbose(self) -> bool:
        """True unless the output is silenced."""
        return self is not Verbosity.QUIET


class Primitive(Enum):
    """Primitive type definitions of a type registry."""

    BOOL = "bool"
    CHAR = "char"
    STR = "str"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    I256 = "i256"


@dataclass(frozen=True)
class Field:
    """A field of a composite type."""

    name: Optional[str]
    type_id: int
    type_name: Optional[str] = None


@dataclass(frozen=True)
class Composite:
    """A struct-like type definition."""

    fields: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class ArrayDef:
    """A fixed-length array type definition."""

    len: int
    type_param: int


TypeDef = Union[Primitive, Composite, ArrayDef]


@dataclass(frozen=True)
class TypeParam:
    """A generic parameter; ``type_id`` is None when it is not concrete."""

    name: str
    type_id: Optional[int]


@dataclass(frozen=True)
class RegistryType:
    """A type entry of a registry."""

    type_def: TypeDef
    path: tuple[str, ...] = ()
    type_params: tuple[TypeParam, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "type_params", tuple(self.type_params))


@dataclass(frozen=True)
class PortableRegistry:
    """Types addressed by their position in the registry."""

    types: tuple[RegistryType, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(self.types))

    def resolve(self, type_id: int) -> Optional[RegistryType]:
        """Return the type with the given id, or None when absent."""
        if 0 <= type_id < len(self.types):
            return self.types[type_id]
        return None


@dataclass(frozen=True)
class EnvironmentSpec:
    """Type ids of a contract's environment types in its own registry."""

    account_id: int
    balance: int
    hash: int
    timestamp: int
    block_number: int


_ENV_PATH = ("pallet_contracts", "Environment")
_ENV_TYPE_NAMES = ("account_id", "balance", "hash", "timestamp", "block_number")


def _node_env_fields(
    registry: PortableRegistry, verbosity: Verbosity
) -> Optional[Sequence[Field]]:
    env_type = next((t for t in registry.types if t.path[-2:] == _ENV_PATH), None)
    if env_type is None:
        if verbosity.is_verbose:
            print(
                "Warning: This chain does not yet support checking for "
                "compatibility of your contract types.",
                file=sys.stderr,
            )
        return None
    if not isinstance(env_type.type_def, Composite):
        raise ValueError("`Environment` type definition is in the wrong format")
    return env_type.type_def.fields


def resolve_type_definition(registry: PortableRegistry, type_id: int) -> TypeDef:
    """Follow wrappers and generic parameters down to the underlying definition."""
    ty = registry.resolve(type_id)
    if ty is None:
        raise ValueError("Type is not present in registry")
    if not ty.type_params:
        if isinstance(ty.type_def, Composite):
            if len(ty.type_def.fields) != 1:
                raise ValueError("Composite field has incorrect composite type format")
            return resolve_type_definition(registry, ty.type_def.fields[0].type_id)
        return ty.type_def
    param_id = ty.type_params[0].type_id
    if param_id is None:
        raise ValueError("concrete type is not present")
    return resolve_type_definition(registry, param_id)


def _compare_type(
    type_name: str,
    type_def: TypeDef,
    contract_registry: PortableRegistry,
    environment: EnvironmentSpec,
    node_registry: PortableRegistry,
) -> bool:
    if type_name not in _ENV_TYPE_NAMES:
        raise ValueError("Trying to resolve unknown environment type")
    contract_def = resolve_type_definition(
        contract_registry, getattr(environment, type_name)
    )
    if isinstance(type_def, ArrayDef) and isinstance(contract_def, ArrayDef):
        node_elem = resolve_type_definition(node_registry, type_def.type_param)
        if type_def.len != contract_def.len:
            raise ValueError("Mismatch in array lengths")
        contract_elem = resolve_type_definition(
            contract_registry, contract_def.type_param
        )
        return contract_elem == node_elem
    if isinstance(type_def, ArrayDef):
        resolve_type_definition(node_registry, type_def.type_param)
    return type_def == contract_def


def compare_node_env_with_contract(
    node_registry: PortableRegistry,
    contract_registry: PortableRegistry,
    environment: EnvironmentSpec,
    verbosity: Verbosity = Verbosity.DEFAULT,
) -> None:
    """Raise ValueError if the node's environment types differ from the contract's."""
    env_fields = _node_env_fields(node_registry, verbosity)
    if env_fields is None:
        return
    for env_field in env_fields:
        if env_field.name is None:
            raise ValueError("Field does not have a name")
        if env_field.name == "hasher":
            continue
        field_def = resolve_type_definition(node_registry, env_field.type_id)
        if not _compare_type(
            env_field.name, field_def, contract_registry, environment, node_registry
        ):
            raise ValueError(f"Failed to validate the field: {env_field.name}")