"""
Primitive Wrappers

A wrapper turns a PrimitiveSet into one primitive of the same kind. The
wrapped primitive implements the kind's public operations and decides
which entries of the set are consulted for each call.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Type, TypeVar

from .key_data import OutputPrefixType
from .primitive_set import PrimitiveSet

P = TypeVar("P")

# Appended to the signed or MACed data for LEGACY keys.
LEGACY_FORMAT_SUFFIX = b"\x00"


class PrimitiveWrapper(ABC, Generic[P]):
    """Combines a PrimitiveSet of one kind into a single primitive."""

    @abstractmethod
    def primitive_class(self) -> Type[P]:
        """Kind of the primitive returned by wrap()."""
        pass

    def input_primitive_class(self) -> Type[P]:
        """Kind of the primitives held in the sets this wrapper accepts."""
        return self.primitive_class()

    @abstractmethod
    def wrap(self, primitive_set: PrimitiveSet) -> P:
        pass

    def is_equivalent(self, other: Any) -> bool:
        return type(self) is type(other)


def message_for(output_prefix_type: OutputPrefixType, data: bytes) -> bytes:
    """The bytes actually signed or MACed for a key of the given prefix type."""
    if output_prefix_type == OutputPrefixType.LEGACY:
        return data + LEGACY_FORMAT_SUFFIX
    return data
