"""
Key Manager Capability

A key manager knows one key type (identified by its type URL). It turns
key material into a primitive, reports its version and, for private and
symmetric key types, generates new key material.

Concrete managers live in the algorithm layer (crypto.keys); the registry
only talks to this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Type, TypeVar

from .errors import InvalidArgumentError
from .key_data import KeyData, KeyTemplate

P = TypeVar("P")

MAX_KEY_MANAGER_VERSION = 2**32 - 1


class KeyManager(ABC, Generic[P]):
    """Produces primitives of one kind from key material of one type."""

    @property
    @abstractmethod
    def key_type(self) -> str:
        """The type URL this manager handles."""
        pass

    @abstractmethod
    def primitive_class(self) -> Type[P]:
        """The primitive kind produced by this manager."""
        pass

    @abstractmethod
    def version(self) -> int:
        pass

    @abstractmethod
    def primitive(self, key_data: KeyData) -> P:
        """Build a primitive from key material; raises InvalidArgumentError."""
        pass

    def does_support(self, type_url: str) -> bool:
        return type_url == self.key_type

    def new_key_data(self, template: KeyTemplate) -> KeyData:
        """Generate fresh key material. Public-key managers cannot."""
        raise InvalidArgumentError(
            f"Key manager for {self.key_type} does not generate keys"
        )

    def is_equivalent(self, other: Any) -> bool:
        """Two managers are interchangeable iff they are the same implementation."""
        return type(self) is type(other)

    def _check_key_data(self, key_data: KeyData) -> None:
        if not self.does_support(key_data.type_url):
            raise InvalidArgumentError(
                f"Key type {key_data.type_url} not supported by {type(self).__name__}"
            )


class PrivateKeyManager(KeyManager[P]):
    """A key manager for private keys that can derive the public half."""

    @abstractmethod
    def public_key_data(self, key_data: KeyData) -> KeyData:
        pass
