"""
Primitive Sets

A PrimitiveSet is the ordered collection of primitives built from a
keyset, one entry per key, with at most one entry designated primary.
Entries are addressed by position; the primary is stored as an index.
Wrappers read the set, they never modify it.
"""

import struct
from dataclasses import dataclass
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

from .errors import InvalidArgumentError
from .key_data import KeyStatus, OutputPrefixType

P = TypeVar("P")

NON_RAW_PREFIX_SIZE = 5
TINK_START_BYTE = 0x01
LEGACY_START_BYTE = 0x00
RAW_PREFIX = b""

MAX_KEY_ID = 2**32 - 1


def output_prefix(key_id: int, output_prefix_type: OutputPrefixType) -> bytes:
    """The bytes prepended to outputs produced with this key."""
    if not 0 <= key_id <= MAX_KEY_ID:
        raise InvalidArgumentError(f"Key id out of range: {key_id}")

    if output_prefix_type == OutputPrefixType.TINK:
        return struct.pack(">BI", TINK_START_BYTE, key_id)
    if output_prefix_type in (OutputPrefixType.LEGACY, OutputPrefixType.CRUNCHY):
        return struct.pack(">BI", LEGACY_START_BYTE, key_id)
    if output_prefix_type == OutputPrefixType.RAW:
        return RAW_PREFIX
    raise InvalidArgumentError(f"Unknown output prefix type: {output_prefix_type}")


@dataclass(frozen=True)
class Entry(Generic[P]):
    """One primitive together with the metadata of the key it came from."""
    index: int
    primitive: P
    key_id: int
    status: KeyStatus
    output_prefix_type: OutputPrefixType
    identifier: bytes

    @property
    def is_enabled(self) -> bool:
        return self.status == KeyStatus.ENABLED


class PrimitiveSet(Generic[P]):
    """Ordered primitives of a single kind, with an optional primary."""

    def __init__(self, primitive_class: type):
        self._primitive_class = primitive_class
        self._entries: List[Entry] = []
        self._by_identifier: Dict[bytes, List[int]] = {}
        self._primary_index: Optional[int] = None

    @property
    def primitive_class(self) -> type:
        return self._primitive_class

    def add_primitive(
        self,
        primitive: P,
        key_id: int,
        status: KeyStatus = KeyStatus.ENABLED,
        output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
    ) -> Entry:
        """Append a primitive; returns its entry."""
        if not isinstance(primitive, self._primitive_class):
            raise InvalidArgumentError(
                f"Primitive {type(primitive).__name__} is not a "
                f"{self._primitive_class.__name__}"
            )

        entry = Entry(
            index=len(self._entries),
            primitive=primitive,
            key_id=key_id,
            status=status,
            output_prefix_type=output_prefix_type,
            identifier=output_prefix(key_id, output_prefix_type),
        )
        self._entries.append(entry)
        self._by_identifier.setdefault(entry.identifier, []).append(entry.index)
        return entry

    def set_primary(self, entry: Entry) -> None:
        if entry.index >= len(self._entries) or self._entries[entry.index] is not entry:
            raise InvalidArgumentError("Primary entry does not belong to this set")
        if not entry.is_enabled:
            raise InvalidArgumentError(
                f"Primary key {entry.key_id} must be ENABLED, is {entry.status.value}"
            )
        self._primary_index = entry.index

    def primary(self) -> Optional[Entry]:
        if self._primary_index is None:
            return None
        return self._entries[self._primary_index]

    def all(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def entries_for_identifier(self, identifier: bytes) -> Tuple[Entry, ...]:
        """Entries whose output prefix equals `identifier`, in set order."""
        return tuple(self._entries[i] for i in self._by_identifier.get(identifier, []))

    def raw_entries(self) -> Tuple[Entry, ...]:
        return self.entries_for_identifier(RAW_PREFIX)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"PrimitiveSet({self._primitive_class.__name__}, entries={len(self._entries)}, "
            f"primary={self._primary_index})"
        )


class FrozenPrimitiveSet(Generic[P]):
    """
    Read-only snapshot of a PrimitiveSet taken when a wrapper is built.

    Later changes to the source set do not reach an already wrapped
    primitive.
    """

    def __init__(self, primitive_set: PrimitiveSet):
        self.primitive_class = primitive_set.primitive_class
        self._entries = primitive_set.all()
        self._primary = primitive_set.primary()
        index: Dict[bytes, List[Entry]] = {}
        for entry in self._entries:
            index.setdefault(entry.identifier, []).append(entry)
        self._by_identifier = {k: tuple(v) for k, v in index.items()}

    def primary(self) -> Optional[Entry]:
        return self._primary

    def all(self) -> Tuple[Entry, ...]:
        return self._entries

    def entries_for_identifier(self, identifier: bytes) -> Tuple[Entry, ...]:
        return self._by_identifier.get(identifier, ())

    def raw_entries(self) -> Tuple[Entry, ...]:
        return self.entries_for_identifier(RAW_PREFIX)

    def verification_candidates(self, output: bytes) -> List[Tuple[Entry, bytes]]:
        """
        Enabled entries to try for `output`, paired with the payload each
        one should see: entries matching the output's prefix first, then
        RAW entries against the whole output.
        """
        candidates: List[Tuple[Entry, bytes]] = []
        if len(output) > NON_RAW_PREFIX_SIZE:
            prefix = output[:NON_RAW_PREFIX_SIZE]
            for entry in self.entries_for_identifier(prefix):
                if entry.is_enabled:
                    candidates.append((entry, output[NON_RAW_PREFIX_SIZE:]))
        for entry in self.raw_entries():
            if entry.is_enabled:
                candidates.append((entry, output))
        return candidates

    def __len__(self) -> int:
        return len(self._entries)
