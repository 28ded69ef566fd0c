"""
Primitive Registry

The registry binds:
- type URLs to key managers (with version and new-key policy)
- catalogue names to catalogues
- primitive kinds to primitive wrappers

It is an explicit context object: construct one at startup, register
configurations into it, and pass it to the code that needs primitives.

Concurrency model:
- All state lives in one immutable snapshot.
- Writers serialize on a lock, build a new snapshot and publish it with a
  single reference assignment.
- Readers grab the current snapshot once and never lock, so lookups never
  block each other and always see a whole pre- or post-registration state.
"""

from dataclasses import dataclass, field, replace
from threading import Lock
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

import structlog

from .catalogue import Catalogue
from .errors import (
    AlreadyExistsError,
    InternalError,
    InvalidArgumentError,
    KeyrailError,
    NotFoundError,
)
from .key_data import KeyData, KeyTemplate
from .key_manager import KeyManager, PrivateKeyManager
from .primitive_set import PrimitiveSet
from .primitive_wrapper import PrimitiveWrapper

logger = structlog.get_logger()

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


@dataclass(frozen=True)
class KeyManagerRecord:
    """A registered key manager and its key generation policy."""
    manager: KeyManager
    new_key_allowed: bool

    @property
    def version(self) -> int:
        return self.manager.version()


@dataclass(frozen=True)
class _RegistryState:
    key_managers: Mapping[str, KeyManagerRecord] = field(default_factory=lambda: _EMPTY)
    catalogues: Mapping[str, Catalogue] = field(default_factory=lambda: _EMPTY)
    wrappers: Mapping[type, PrimitiveWrapper] = field(default_factory=lambda: _EMPTY)


def _with(mapping: Mapping, key: Any, value: Any) -> Mapping:
    updated = dict(mapping)
    updated[key] = value
    return MappingProxyType(updated)


class Registry:
    """Process-wide table of key managers, catalogues and wrappers."""

    def __init__(self):
        self._lock = Lock()
        self._state = _RegistryState()

    # ------------------------------------------------------------------
    # Catalogues
    # ------------------------------------------------------------------

    def add_catalogue(self, name: str, catalogue: Catalogue) -> None:
        """
        Bind a catalogue to a name.

        Re-adding the same catalogue is a no-op; adding a different one
        under a taken name raises AlreadyExistsError.
        """
        if not name:
            raise InvalidArgumentError("Catalogue name must not be empty")
        if not isinstance(catalogue, Catalogue):
            raise InvalidArgumentError(f"Not a catalogue: {type(catalogue).__name__}")

        with self._lock:
            state = self._state
            existing = state.catalogues.get(name)
            if existing is not None:
                if existing.is_equivalent(catalogue):
                    return
                raise AlreadyExistsError(
                    f"A different catalogue is already registered under '{name}'"
                )

            self._state = replace(state, catalogues=_with(state.catalogues, name, catalogue))

        logger.info("catalogue_added",
                   name=name,
                   catalogue=type(catalogue).__name__)

    def get_catalogue(self, name: str) -> Catalogue:
        catalogue = self._state.catalogues.get(name)
        if catalogue is None:
            raise NotFoundError(f"No catalogue named '{name}'")
        return catalogue

    # ------------------------------------------------------------------
    # Key managers
    # ------------------------------------------------------------------

    def register_key_manager(self, manager: KeyManager, new_key_allowed: bool = True) -> None:
        """
        Register `manager` for its type URL.

        Succeeds when the type URL is free, or when the incoming manager is
        the same implementation at an equal or higher version. A disallowed
        new-key policy cannot be turned back on.
        """
        if not isinstance(manager, KeyManager):
            raise InvalidArgumentError(f"Not a key manager: {type(manager).__name__}")

        type_url = manager.key_type
        if not type_url:
            raise InvalidArgumentError("Key manager reports an empty type URL")

        with self._lock:
            state = self._state
            existing = state.key_managers.get(type_url)
            if existing is not None:
                if not existing.manager.is_equivalent(manager):
                    raise AlreadyExistsError(
                        f"Type URL {type_url} already registered with "
                        f"{type(existing.manager).__name__}, cannot register "
                        f"{type(manager).__name__}"
                    )
                if manager.version() < existing.version:
                    raise AlreadyExistsError(
                        f"Type URL {type_url} already registered at version "
                        f"{existing.version}, cannot downgrade to {manager.version()}"
                    )
                if new_key_allowed and not existing.new_key_allowed:
                    raise AlreadyExistsError(
                        f"New keys are forbidden for {type_url}, cannot re-allow"
                    )
                if (manager.version() == existing.version
                        and new_key_allowed == existing.new_key_allowed):
                    return

            record = KeyManagerRecord(manager=manager, new_key_allowed=new_key_allowed)
            self._state = replace(
                state, key_managers=_with(state.key_managers, type_url, record)
            )

        logger.info("key_manager_registered",
                   type_url=type_url,
                   manager=type(manager).__name__,
                   version=manager.version(),
                   new_key_allowed=new_key_allowed)

    def get_key_manager(self, type_url: str, primitive_class: Optional[type] = None) -> KeyManager:
        """
        Look up the manager for `type_url`.

        When `primitive_class` is given, the manager must produce that kind;
        otherwise it counts as absent.
        """
        record = self._state.key_managers.get(type_url)
        if record is None:
            raise NotFoundError(f"No key manager for type URL {type_url}")
        if primitive_class is not None and record.manager.primitive_class() is not primitive_class:
            raise NotFoundError(
                f"Key manager for {type_url} produces "
                f"{record.manager.primitive_class().__name__}, not {primitive_class.__name__}"
            )
        return record.manager

    def key_types(self) -> List[str]:
        """Registered type URLs, in registration order."""
        return list(self._state.key_managers)

    def new_key_allowed(self, type_url: str) -> bool:
        record = self._state.key_managers.get(type_url)
        if record is None:
            raise NotFoundError(f"No key manager for type URL {type_url}")
        return record.new_key_allowed

    def primitive(self, key_data: KeyData, primitive_class: Optional[type] = None) -> Any:
        """Build a single primitive from key material."""
        manager = self.get_key_manager(key_data.type_url, primitive_class)
        return manager.primitive(key_data)

    def new_key_data(self, template: KeyTemplate) -> KeyData:
        """Generate key material for `template`, honouring the new-key policy."""
        record = self._state.key_managers.get(template.type_url)
        if record is None:
            raise NotFoundError(f"No key manager for type URL {template.type_url}")
        if not record.new_key_allowed:
            raise InvalidArgumentError(f"New keys are not allowed for {template.type_url}")
        return record.manager.new_key_data(template)

    def public_key_data(self, private_key_data: KeyData) -> KeyData:
        manager = self.get_key_manager(private_key_data.type_url)
        if not isinstance(manager, PrivateKeyManager):
            raise InvalidArgumentError(
                f"Key type {private_key_data.type_url} has no public counterpart"
            )
        return manager.public_key_data(private_key_data)

    # ------------------------------------------------------------------
    # Wrappers
    # ------------------------------------------------------------------

    def register_primitive_wrapper(self, wrapper: PrimitiveWrapper) -> None:
        """
        Register the wrapper for its primitive kind.

        Registering the same wrapper implementation again is a no-op; a
        different one for an already wrapped kind raises AlreadyExistsError.
        """
        if not isinstance(wrapper, PrimitiveWrapper):
            raise InvalidArgumentError(f"Not a primitive wrapper: {type(wrapper).__name__}")

        kind = wrapper.primitive_class()
        with self._lock:
            state = self._state
            existing = state.wrappers.get(kind)
            if existing is not None:
                if existing.is_equivalent(wrapper):
                    return
                raise AlreadyExistsError(
                    f"A different wrapper is already registered for {kind.__name__}"
                )
            self._state = replace(state, wrappers=_with(state.wrappers, kind, wrapper))

        logger.info("primitive_wrapper_registered",
                   primitive=kind.__name__,
                   wrapper=type(wrapper).__name__)

    def wrap(self, primitive_set: PrimitiveSet, primitive_class: Optional[type] = None) -> Any:
        """
        Combine `primitive_set` into a single primitive.

        The result holds no reference to this registry and keeps working
        after reset() or later registrations.
        """
        kind = primitive_class or primitive_set.primitive_class
        wrapper = self._state.wrappers.get(kind)
        if wrapper is None:
            raise NotFoundError(f"No wrapper registered for primitive {kind.__name__}")
        if primitive_set.primitive_class is not wrapper.input_primitive_class():
            raise InvalidArgumentError(
                f"Wrapper for {kind.__name__} expects a set of "
                f"{wrapper.input_primitive_class().__name__}, got "
                f"{primitive_set.primitive_class.__name__}"
            )

        try:
            wrapped = wrapper.wrap(primitive_set)
        except KeyrailError:
            raise
        except Exception as e:
            logger.error("primitive_wrap_failed",
                        primitive=kind.__name__,
                        error=str(e))
            raise InternalError(f"Wrapping {kind.__name__} failed: {e}") from e

        if not isinstance(wrapped, kind):
            raise InternalError(
                f"Wrapper {type(wrapper).__name__} returned {type(wrapped).__name__}, "
                f"expected {kind.__name__}"
            )
        return wrapped

    # ------------------------------------------------------------------
    # Testing
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """
        Drop every registration at once. For tests only.

        Already wrapped primitives stay usable; everything else must be
        registered again.
        """
        with self._lock:
            self._state = _RegistryState()
        logger.warning("registry_reset")

    def __repr__(self) -> str:
        state = self._state
        return (
            f"Registry(key_managers={len(state.key_managers)}, "
            f"catalogues={len(state.catalogues)}, wrappers={len(state.wrappers)})"
        )
