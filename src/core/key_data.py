"""
Key Material Descriptors

In-memory descriptions of key material and key requests exchanged between
the key-management layer and the key managers. Values are opaque to the
registry; only key managers look inside them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class KeyStatus(Enum):
    """Lifecycle status of a key inside a keyset."""
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    DESTROYED = "DESTROYED"


class OutputPrefixType(Enum):
    """How a key's identifier is prefixed onto its outputs."""
    TINK = "TINK"
    LEGACY = "LEGACY"
    RAW = "RAW"
    CRUNCHY = "CRUNCHY"


class KeyMaterialType(Enum):
    """Kind of material held by a KeyData."""
    SYMMETRIC = "SYMMETRIC"
    ASYMMETRIC_PRIVATE = "ASYMMETRIC_PRIVATE"
    ASYMMETRIC_PUBLIC = "ASYMMETRIC_PUBLIC"


@dataclass(frozen=True)
class KeyData:
    """Key material for a single type URL."""
    type_url: str
    value: Any  # key object or raw bytes, interpreted by the key manager
    key_material_type: KeyMaterialType
    params: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        # Never render key material.
        return (
            f"KeyData(type_url={self.type_url!r}, "
            f"key_material_type={self.key_material_type.value}, params={self.params!r})"
        )


@dataclass(frozen=True)
class KeyTemplate:
    """A request for a new key of a given type."""
    type_url: str
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK
    params: Dict[str, Any] = field(default_factory=dict)
