"""
In-memory keysets: handles that produce wrapped primitives and a manager
for key rotation.
"""

from .handle import Key, Keyset, KeysetHandle
from .manager import KeysetManager

__all__ = [
    "Key",
    "Keyset",
    "KeysetHandle",
    "KeysetManager",
]
