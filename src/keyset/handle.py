"""
Keyset Handles

A keyset is an ordered list of keys, one of which may be primary. The
handle is the application's grip on a keyset: it turns the keys into a
PrimitiveSet and asks the registry to wrap it.

Keysets live in memory only; storage and encryption at rest are left to
the caller.
"""

import secrets
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import structlog

from core.errors import InvalidArgumentError, NotFoundError
from core.key_data import KeyData, KeyMaterialType, KeyStatus, KeyTemplate, OutputPrefixType
from core.primitive_set import MAX_KEY_ID, PrimitiveSet
from core.registry import Registry

logger = structlog.get_logger()


@dataclass(frozen=True)
class Key:
    """A key inside a keyset. DESTROYED keys carry no material."""
    key_data: Optional[KeyData]
    key_id: int
    status: KeyStatus
    output_prefix_type: OutputPrefixType

    def to_info(self) -> Dict[str, Any]:
        return {
            "key_id": self.key_id,
            "type_url": self.key_data.type_url if self.key_data else None,
            "status": self.status.value,
            "output_prefix_type": self.output_prefix_type.value,
        }


@dataclass(frozen=True)
class Keyset:
    primary_key_id: Optional[int]
    keys: Tuple[Key, ...] = field(default_factory=tuple)

    def key(self, key_id: int) -> Key:
        for key in self.keys:
            if key.key_id == key_id:
                return key
        raise NotFoundError(f"Key not found: {key_id}")


def new_key_id(existing: List[int]) -> int:
    """A random key id not used by `existing`."""
    taken = set(existing)
    while True:
        key_id = secrets.randbits(32)
        if key_id not in taken and 0 < key_id <= MAX_KEY_ID:
            return key_id


def validate_keyset(keyset: Keyset) -> None:
    seen = set()
    for key in keyset.keys:
        if key.key_id in seen:
            raise InvalidArgumentError(f"Duplicate key id {key.key_id}")
        seen.add(key.key_id)
        if key.status != KeyStatus.DESTROYED and key.key_data is None:
            raise InvalidArgumentError(f"Key {key.key_id} has no key material")

    if keyset.primary_key_id is not None:
        primary = keyset.key(keyset.primary_key_id)
        if primary.status != KeyStatus.ENABLED:
            raise InvalidArgumentError(
                f"Primary key {primary.key_id} must be ENABLED, is {primary.status.value}"
            )


class KeysetHandle:
    """Immutable view of a keyset that can produce primitives."""

    def __init__(self, keyset: Keyset):
        validate_keyset(keyset)
        self._keyset = keyset

    @classmethod
    def generate_new(cls, template: KeyTemplate, registry: Registry) -> "KeysetHandle":
        """A fresh keyset holding one key generated from `template`."""
        key_data = registry.new_key_data(template)
        key = Key(
            key_data=key_data,
            key_id=new_key_id([]),
            status=KeyStatus.ENABLED,
            output_prefix_type=template.output_prefix_type,
        )
        logger.info("keyset_generated",
                   type_url=template.type_url,
                   key_id=key.key_id)
        return cls(Keyset(primary_key_id=key.key_id, keys=(key,)))

    @property
    def keyset(self) -> Keyset:
        return self._keyset

    def keyset_info(self) -> Dict[str, Any]:
        """Key metadata without any key material."""
        return {
            "primary_key_id": self._keyset.primary_key_id,
            "keys": [key.to_info() for key in self._keyset.keys],
        }

    def public_keyset_handle(self, registry: Registry) -> "KeysetHandle":
        """The same keyset with every private key replaced by its public key."""
        public_keys = []
        for key in self._keyset.keys:
            if key.key_data is None:
                public_keys.append(key)
                continue
            if key.key_data.key_material_type != KeyMaterialType.ASYMMETRIC_PRIVATE:
                raise InvalidArgumentError(
                    f"Key {key.key_id} ({key.key_data.type_url}) is not a private key"
                )
            public_keys.append(Key(
                key_data=registry.public_key_data(key.key_data),
                key_id=key.key_id,
                status=key.status,
                output_prefix_type=key.output_prefix_type,
            ))
        return KeysetHandle(Keyset(
            primary_key_id=self._keyset.primary_key_id,
            keys=tuple(public_keys),
        ))

    def primitives(self, primitive_class: type, registry: Registry) -> PrimitiveSet:
        """
        Build a PrimitiveSet of `primitive_class` with one entry per key
        that still has material. The primary entry is marked if present.
        """
        primitive_set = PrimitiveSet(primitive_class)
        for key in self._keyset.keys:
            if key.key_data is None:
                continue
            primitive = registry.primitive(key.key_data, primitive_class)
            entry = primitive_set.add_primitive(
                primitive,
                key.key_id,
                key.status,
                key.output_prefix_type,
            )
            if key.key_id == self._keyset.primary_key_id:
                primitive_set.set_primary(entry)
        return primitive_set

    def primitive(self, primitive_class: type, registry: Registry) -> Any:
        """Shortcut for registry.wrap(self.primitives(...))."""
        return registry.wrap(self.primitives(primitive_class, registry), primitive_class)

    def __repr__(self) -> str:
        return f"KeysetHandle({self.keyset_info()!r})"
