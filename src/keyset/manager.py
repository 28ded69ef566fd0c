"""
Keyset Manager

Rotation workflow over a keyset: add a new key, promote it to primary,
then disable and finally destroy the old one. Each step produces a new
immutable keyset; handles already given out do not change.
"""

from dataclasses import replace
from typing import Optional

import structlog

from core.errors import InvalidArgumentError
from core.key_data import KeyStatus, KeyTemplate
from core.registry import Registry

from .handle import Key, Keyset, KeysetHandle, new_key_id

logger = structlog.get_logger()


class KeysetManager:
    """Mutable builder for keysets."""

    def __init__(self, registry: Registry, handle: Optional[KeysetHandle] = None):
        self._registry = registry
        self._keyset = handle.keyset if handle else Keyset(primary_key_id=None)

    def handle(self) -> KeysetHandle:
        return KeysetHandle(self._keyset)

    def add(self, template: KeyTemplate, as_primary: bool = False) -> int:
        """Generate a key from `template` and append it. Returns its key id."""
        key_data = self._registry.new_key_data(template)
        key = Key(
            key_data=key_data,
            key_id=new_key_id([k.key_id for k in self._keyset.keys]),
            status=KeyStatus.ENABLED,
            output_prefix_type=template.output_prefix_type,
        )
        self._keyset = replace(self._keyset, keys=self._keyset.keys + (key,))
        logger.info("key_added", key_id=key.key_id, type_url=template.type_url)

        if as_primary:
            self.set_primary(key.key_id)
        return key.key_id

    def set_primary(self, key_id: int) -> None:
        key = self._keyset.key(key_id)
        if key.status != KeyStatus.ENABLED:
            raise InvalidArgumentError(
                f"Cannot make key {key_id} primary, it is {key.status.value}"
            )
        old_primary = self._keyset.primary_key_id
        self._keyset = replace(self._keyset, primary_key_id=key_id)
        logger.info("primary_key_changed", old_key_id=old_primary, new_key_id=key_id)

    def enable(self, key_id: int) -> None:
        key = self._keyset.key(key_id)
        if key.status == KeyStatus.DESTROYED:
            raise InvalidArgumentError(f"Key {key_id} is destroyed and cannot be enabled")
        self._set_status(key_id, KeyStatus.ENABLED)

    def disable(self, key_id: int) -> None:
        self._check_not_primary(key_id, "disable")
        key = self._keyset.key(key_id)
        if key.status == KeyStatus.DESTROYED:
            raise InvalidArgumentError(f"Key {key_id} is destroyed and cannot be disabled")
        self._set_status(key_id, KeyStatus.DISABLED)

    def destroy(self, key_id: int) -> None:
        """Erase the key material; the key id stays reserved."""
        self._check_not_primary(key_id, "destroy")
        self._replace_key(key_id, status=KeyStatus.DESTROYED, key_data=None)
        logger.info("key_destroyed", key_id=key_id)

    def _check_not_primary(self, key_id: int, action: str) -> None:
        if key_id == self._keyset.primary_key_id:
            raise InvalidArgumentError(f"Cannot {action} the primary key {key_id}")

    def _set_status(self, key_id: int, status: KeyStatus) -> None:
        self._replace_key(key_id, status=status)
        logger.info("key_status_changed", key_id=key_id, status=status.value)

    def _replace_key(self, key_id: int, **changes) -> None:
        self._keyset.key(key_id)
        keys = tuple(
            replace(key, **changes) if key.key_id == key_id else key
            for key in self._keyset.keys
        )
        self._keyset = replace(self._keyset, keys=keys)
