"""
Registration Configs

A config is an ordered, immutable table of key type entries. Registering
a config walks the table in order and, for each entry, asks the entry's
catalogue for a key manager and records it in the registry.

Registration is fail-fast: the first failing entry stops the walk and
its error is raised. Entries committed before the failure stay committed.
"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Iterator, Optional, Tuple

import structlog

from .catalogue import Catalogue
from .errors import InvalidArgumentError
from .key_manager import MAX_KEY_MANAGER_VERSION
from .primitive_wrapper import PrimitiveWrapper
from .registry import Registry

logger = structlog.get_logger()


@dataclass(frozen=True)
class KeyTypeEntry:
    """One row of a registration table."""
    catalogue_name: str
    primitive_name: str
    type_url: str
    new_key_allowed: bool = True
    key_manager_version: int = 0

    def __post_init__(self):
        for name in ("catalogue_name", "primitive_name", "type_url"):
            if not getattr(self, name):
                raise InvalidArgumentError(f"KeyTypeEntry.{name} must not be empty")
        if not isinstance(self.key_manager_version, int) or isinstance(self.key_manager_version, bool):
            raise InvalidArgumentError("KeyTypeEntry.key_manager_version must be an integer")
        if not 0 <= self.key_manager_version <= MAX_KEY_MANAGER_VERSION:
            raise InvalidArgumentError(
                f"KeyTypeEntry.key_manager_version out of range: {self.key_manager_version}"
            )


@dataclass(frozen=True)
class RegistryConfig:
    """An ordered, immutable list of key type entries."""
    config_name: str
    entries: Tuple[KeyTypeEntry, ...] = ()

    def entry(self, index: int) -> KeyTypeEntry:
        return self.entries[index]

    def entry_size(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[KeyTypeEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def register_entry(entry: KeyTypeEntry, registry: Registry) -> None:
    """Register the key manager named by a single entry."""
    catalogue = registry.get_catalogue(entry.catalogue_name)
    manager = catalogue.get_key_manager(
        entry.type_url,
        entry.primitive_name,
        entry.key_manager_version,
    )
    registry.register_key_manager(manager, entry.new_key_allowed)


def register_config(config: RegistryConfig, registry: Registry) -> None:
    """
    Register every entry of `config`, in order.

    The catalogues named by the entries must already be in the registry.
    """
    for entry in config:
        register_entry(entry, registry)

    logger.info("config_registered",
               config=config.config_name,
               entries=config.entry_size())


class NamedConfig:
    """
    A named, versioned registration table together with the catalogues and
    wrappers its entries rely on.

    Subclasses set CONFIG_NAME, ENTRIES, CATALOGUES and WRAPPERS. The
    catalogue and wrapper instances are created once per class, so repeated
    register() calls hand the registry the same objects and stay idempotent.
    """

    CONFIG_NAME: ClassVar[str] = ""
    ENTRIES: ClassVar[Tuple[KeyTypeEntry, ...]] = ()
    CATALOGUES: ClassVar[Dict[str, Catalogue]] = {}
    WRAPPERS: ClassVar[Dict[str, PrimitiveWrapper]] = {}

    _latest: ClassVar[Optional[RegistryConfig]] = None

    @classmethod
    def latest(cls) -> RegistryConfig:
        """The canonical table for this configuration."""
        # Cached per subclass, not inherited.
        latest = cls.__dict__.get("_latest")
        if latest is None:
            latest = RegistryConfig(config_name=cls.CONFIG_NAME, entries=tuple(cls.ENTRIES))
            cls._latest = latest
        return latest

    @classmethod
    def register(cls, registry: Registry) -> None:
        """
        Install catalogues, wrappers and key managers for every entry.

        Calling this twice is harmless. If a different catalogue already
        owns one of the catalogue names, AlreadyExistsError is raised and
        nothing past that entry is registered.
        """
        config = cls.latest()
        for entry in config:
            catalogue = cls.CATALOGUES.get(entry.catalogue_name)
            if catalogue is None:
                raise InvalidArgumentError(
                    f"{cls.__name__} has no catalogue named '{entry.catalogue_name}'"
                )
            registry.add_catalogue(entry.catalogue_name, catalogue)

            wrapper = cls.WRAPPERS.get(entry.primitive_name)
            if wrapper is not None:
                registry.register_primitive_wrapper(wrapper)

            register_entry(entry, registry)

        logger.info("config_registered",
                   config=config.config_name,
                   entries=config.entry_size())
