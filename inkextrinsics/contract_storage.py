"""Decoding of a contract's raw storage into cells described by its layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping as MappingType, Optional, Protocol, Union

from .env_check import PortableRegistry, RegistryType

MAPPING_TYPE_PATH = "ink_storage::lazy::mapping::Mapping"
STORAGE_VEC_TYPE_PATH = "ink_storage::lazy::vec::StorageVec"
LAZY_TYPE_PATH = "ink_storage::lazy::Lazy"

_HASH_PREFIX_LEN = 16
_ROOT_KEY_END = 20


@dataclass(frozen=True)
class LeafLayout:
    """A value stored directly under a key."""

    key: int
    type_id: int


@dataclass(frozen=True)
class ArrayLayout:
    """A fixed-size array of cells."""

    offset: int
    len: int
    layout: "Layout"


@dataclass(frozen=True)
class HashLayout:
    """A hashed layout; contracts do not currently produce it."""

    offset: int
    layout: "Layout"


@dataclass(frozen=True)
class FieldLayout:
    """A named field of a struct layout."""

    name: str
    layout: "Layout"


@dataclass(frozen=True)
class StructLayout:
    """A struct and the layouts of its fields."""

    name: str
    fields: tuple[FieldLayout, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class EnumLayout:
    """An enum and the struct layout of each variant, keyed by discriminant."""

    name: str
    variants: MappingType[int, StructLayout] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", dict(sorted(dict(self.variants).items())))


@dataclass(frozen=True)
class RootLayout:
    """A storage root: a layout stored under its own root key."""

    root_key: int
    layout: "Layout"
    type_id: int


Layout = Union[RootLayout, StructLayout, EnumLayout, HashLayout, ArrayLayout, LeafLayout]


class StorageDecoder(Protocol):
    """What the storage layout needs from a contract's metadata."""

    @property
    def layout(self) -> Layout: ...

    @property
    def registry(self) -> PortableRegistry: ...

    def decode(self, type_id: int, data: bytes) -> Any: ...


@dataclass(frozen=True)
class RootKeyEntry:
    """A root key of the layout, the path leading to it and its type."""

    root_key: int
    path: tuple[str, ...]
    type_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    @property
    def root_key_hex(self) -> str:
        """The root key SCALE encoded and written as hex, without prefix."""
        return self.root_key.to_bytes(4, "little").hex()

    def to_dict(self) -> dict[str, Any]:
        """Return the entry as a serialisable mapping."""
        return {
            "root_key": f"0x{self.root_key_hex}",
            "path": list(self.path),
            "type_id": self.type_id,
        }


@dataclass
class StorageCell:
    """A decoded storage cell under one root key."""

    root: RootKeyEntry

    def path(self) -> str:
        """The path of the cell joined with ``::``."""
        return "::".join(self.root.path)

    def parent(self) -> str:
        """The last segment of the path, or an empty string."""
        return self.root.path[-1] if self.root.path else ""

    def root_key(self) -> str:
        """The root key as a hex string."""
        return self.root.root_key_hex

    def to_dict(self) -> dict[str, Any]:
        """Return the cell as a tagged, serialisable mapping."""
        return {type(self).__name__: {**self.root.to_dict(), **self._content()}}

    def _content(self) -> dict[str, Any]:
        return {}


@dataclass
class Mapping(StorageCell):
    """The decoded entries of a storage mapping."""

    entries: list[tuple[Any, Any]] = field(default_factory=list)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(self.entries)

    def __str__(self) -> str:
        return "\n".join(f"Mapping {{ {key} => {value} }}" for key, value in self.entries)

    def _content(self) -> dict[str, Any]:
        return {"map": [list(entry) for entry in self.entries]}


@dataclass
class Lazy(StorageCell):
    """The decoded value of a lazily loaded storage item."""

    value: Any = None

    def __str__(self) -> str:
        return f"Lazy {{ {self.value} }}"

    def _content(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass
class StorageVec(StorageCell):
    """The stored length and decoded elements of a storage vector."""

    length: int = 0
    items: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return self.length

    def values(self) -> Iterator[Any]:
        """Iterate the decoded elements."""
        return iter(self.items)

    def __str__(self) -> str:
        parts = []
        for index, value in enumerate(self.items):
            parts.append(f"StorageVec [{self.length}] {{ [{index}] => {value} }}")
            if index + 1 < self.length:
                parts.append("\n")
        return "".join(parts)

    def _content(self) -> dict[str, Any]:
        return {"len": self.length, "vec": list(self.items)}


@dataclass
class Packed(StorageCell):
    """A value stored packed under its root key."""

    value: Any = None

    def __str__(self) -> str:
        return str(self.value)

    def _content(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class ContractStorageData:
    """Raw key/value storage of a contract, ordered by key."""

    entries: MappingType[bytes, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = {bytes(k): bytes(v) for k, v in sorted(dict(self.entries).items())}
        object.__setattr__(self, "entries", ordered)

    def __iter__(self) -> Iterator[tuple[bytes, bytes]]:
        return iter(self.entries.items())

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, str]:
        """Return the storage with keys and values as 0x-prefixed hex."""
        return {f"0x{k.hex()}": f"0x{v.hex()}" for k, v in self.entries.items()}


def key_parts(key: bytes) -> tuple[int, Optional[bytes]]:
    """Split a storage key into its root key and the mapping key that follows.

    The key is a 16 byte hash, a 4 byte little-endian root key and an
    optional mapping key.
    """
    if len(key) < _ROOT_KEY_END:
        raise ValueError("key must be at least 20 bytes")
    root_key = int.from_bytes(key[_HASH_PREFIX_LEN:_ROOT_KEY_END], "little")
    mapping_key = bytes(key[_ROOT_KEY_END:]) if len(key) > _ROOT_KEY_END else None
    return root_key, mapping_key


def _collect_root_key_entries(
    layout: Layout, path: list[str], entries: list[RootKeyEntry]
) -> None:
    if isinstance(layout, RootLayout):
        entries.append(RootKeyEntry(layout.root_key, tuple(path), layout.type_id))
        _collect_root_key_entries(layout.layout, path, entries)
    elif isinstance(layout, StructLayout):
        _struct_entries(layout, path, entries)
    elif isinstance(layout, EnumLayout):
        path.append(layout.name)
        for discriminant, struct_layout in layout.variants.items():
            path.append(str(discriminant))
            _struct_entries(struct_layout, path, entries)
            path.pop()
        path.pop()
    elif isinstance(layout, HashLayout):
        raise ValueError("Layout::Hash is not currently constructed")


def _struct_entries(
    struct_layout: StructLayout, path: list[str], entries: list[RootKeyEntry]
) -> None:
    path.append(struct_layout.name)
    for field_layout in struct_layout.fields:
        path.append(field_layout.name)
        _collect_root_key_entries(field_layout.layout, path, entries)
        path.pop()
    path.pop()


def _param_type_id(type_def: RegistryType, param_name: str) -> int:
    param = next((p for p in type_def.type_params if p.name == param_name), None)
    if param is None or param.type_id is None:
        raise ValueError(f"Param `{param_name}` not found in type registry")
    return param.type_id


def _mapping_key_order(item: tuple[Optional[bytes], bytes]) -> tuple[bool, bytes]:
    key = item[0]
    return (key is not None, key or b"")


class ContractStorageLayout:
    """Storage cells of a contract, decoded according to its storage layout."""

    def __init__(self, data: ContractStorageData, decoder: StorageDecoder) -> None:
        registry = decoder.registry
        root_entries: list[RootKeyEntry] = []
        _collect_root_key_entries(decoder.layout, ["root"], root_entries)

        groups: dict[int, list[tuple[Optional[bytes], bytes]]] = {}
        for key, value in data:
            root_key, mapping_key = key_parts(key)
            groups.setdefault(root_key, []).append((mapping_key, value))

        cells = [
            self._build_cell(root_key, items, root_entries, registry, decoder)
            for root_key, items in groups.items()
        ]
        cells.sort(key=lambda cell: cell.path())
        self.cells: list[StorageCell] = cells

    def __iter__(self) -> Iterator[StorageCell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    @staticmethod
    def _build_cell(
        root_key: int,
        items: list[tuple[Optional[bytes], bytes]],
        root_entries: list[RootKeyEntry],
        registry: PortableRegistry,
        decoder: StorageDecoder,
    ) -> StorageCell:
        entry = next((e for e in root_entries if e.root_key == root_key), None)
        if entry is None:
            raise ValueError(f"Root key {root_key} not found for the RootLayout")
        type_def = registry.resolve(entry.type_id)
        if type_def is None:
            raise ValueError(f"Type {entry.type_id} not found in the registry")
        root = RootKeyEntry(root_key, entry.path, entry.type_id)
        type_path = "::".join(type_def.path)

        if type_path == MAPPING_TYPE_PATH:
            key_type_id = _param_type_id(type_def, "K")
            value_type_id = _param_type_id(type_def, "V")
            entries = []
            for mapping_key, raw_value in items:
                if mapping_key is None:
                    raise ValueError("The Mapping key is missing in the map")
                entries.append(
                    (
                        decoder.decode(key_type_id, mapping_key),
                        decoder.decode(value_type_id, raw_value),
                    )
                )
            return Mapping(root, entries)

        if type_path == STORAGE_VEC_TYPE_PATH:
            ordered = sorted(items, key=_mapping_key_order)
            if not ordered:
                raise ValueError("Length of the StorageVec not found")
            raw_len = ordered[0][1]
            if len(raw_len) < 4:
                raise ValueError("Length of the StorageVec could not be decoded")
            length = int.from_bytes(raw_len[:4], "little")
            value_type_id = _param_type_id(type_def, "V")
            values = [decoder.decode(value_type_id, raw) for _, raw in ordered[1:]]
            return StorageVec(root, length, values)

        if not items:
            raise ValueError("Empty storage cell")
        raw_value = items[0][1]
        if type_path == LAZY_TYPE_PATH:
            value_type_id = _param_type_id(type_def, "V")
            return Lazy(root, decoder.decode(value_type_id, raw_value))
        return Packed(root, decoder.decode(root.type_id, raw_value))