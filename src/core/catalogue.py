"""
Catalogues

A catalogue selects a key manager implementation for a type URL, given
the primitive name requested and a minimum acceptable version. Several
competing implementations of the same key type may be listed; the
catalogue hands out the best one that meets the version floor and never
a downgraded one.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Sequence

import structlog

from .errors import InvalidArgumentError, NotFoundError
from .key_manager import KeyManager

logger = structlog.get_logger()


class Catalogue(ABC):
    """Factory of key managers for one primitive kind."""

    @abstractmethod
    def primitive_class(self) -> type:
        pass

    @abstractmethod
    def get_key_manager(
        self,
        type_url: str,
        primitive_name: str,
        min_version: int,
    ) -> KeyManager:
        pass

    def is_equivalent(self, other: Any) -> bool:
        """
        Catalogues carry no comparable state, so only the very same
        instance is considered equivalent.
        """
        return self is other


class KeyManagerCatalogue(Catalogue):
    """
    Catalogue backed by an ordered list of key manager factories.

    Each factory is called once at construction; the managers it builds
    are stateless and handed out as-is.
    """

    def __init__(
        self,
        primitive_name: str,
        primitive_class: type,
        factories: Sequence[Callable[[], KeyManager]],
    ):
        self._primitive_name = primitive_name
        self._primitive_class = primitive_class
        self._candidates: Dict[str, List[KeyManager]] = {}

        for factory in factories:
            manager = factory()
            if manager.primitive_class() is not primitive_class:
                raise InvalidArgumentError(
                    f"{type(manager).__name__} produces "
                    f"{manager.primitive_class().__name__}, not {primitive_class.__name__}"
                )
            self._candidates.setdefault(manager.key_type, []).append(manager)

    @property
    def primitive_name(self) -> str:
        return self._primitive_name

    def primitive_class(self) -> type:
        return self._primitive_class

    def type_urls(self) -> List[str]:
        return list(self._candidates)

    def get_key_manager(
        self,
        type_url: str,
        primitive_name: str,
        min_version: int,
    ) -> KeyManager:
        if primitive_name.lower() != self._primitive_name.lower():
            raise InvalidArgumentError(
                f"Catalogue for {self._primitive_name} cannot serve primitive {primitive_name}"
            )

        candidates = self._candidates.get(type_url)
        if not candidates:
            raise NotFoundError(f"No key manager for key type {type_url}")

        best = max(candidates, key=lambda m: m.version())
        if best.version() < min_version:
            raise InvalidArgumentError(
                f"No key manager for {type_url} with version >= {min_version} "
                f"(best available: {best.version()})"
            )

        logger.debug("key_manager_selected",
                    type_url=type_url,
                    manager=type(best).__name__,
                    version=best.version())
        return best
