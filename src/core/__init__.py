"""
KEYRAIL - Core Module
Primitive registry and key-set dispatch

- Registry: type URL -> key manager, name -> catalogue, kind -> wrapper
- Catalogues: versioned key manager selection
- Configs: declarative registration tables
- PrimitiveSet / PrimitiveWrapper: many keys behind one primitive
"""

from .errors import (
    ErrorCode,
    KeyrailError,
    NotFoundError,
    AlreadyExistsError,
    InvalidArgumentError,
    UnknownError,
    InternalError,
)
from .key_data import KeyData, KeyTemplate, KeyStatus, OutputPrefixType, KeyMaterialType
from .key_manager import KeyManager, PrivateKeyManager
from .catalogue import Catalogue, KeyManagerCatalogue
from .primitive_set import PrimitiveSet, Entry, output_prefix
from .primitive_wrapper import PrimitiveWrapper
from .registry import Registry
from .config import KeyTypeEntry, RegistryConfig, NamedConfig, register_config

__all__ = [
    "ErrorCode",
    "KeyrailError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidArgumentError",
    "UnknownError",
    "InternalError",
    "KeyData",
    "KeyTemplate",
    "KeyStatus",
    "OutputPrefixType",
    "KeyMaterialType",
    "KeyManager",
    "PrivateKeyManager",
    "Catalogue",
    "KeyManagerCatalogue",
    "PrimitiveSet",
    "Entry",
    "output_prefix",
    "PrimitiveWrapper",
    "Registry",
    "KeyTypeEntry",
    "RegistryConfig",
    "NamedConfig",
    "register_config",
]
