"""
MAC primitives: catalogue, wrapper, configuration and templates.
"""

from .config import (
    MAC_CATALOGUE_NAME,
    MacCatalogue,
    MacConfig,
    hmac_template,
    HMAC_SHA256_128BITTAG,
    HMAC_SHA256_256BITTAG,
    HMAC_SHA512_512BITTAG,
)
from .wrapper import MacWrapper

__all__ = [
    "MAC_CATALOGUE_NAME",
    "MacCatalogue",
    "MacConfig",
    "MacWrapper",
    "hmac_template",
    "HMAC_SHA256_128BITTAG",
    "HMAC_SHA256_256BITTAG",
    "HMAC_SHA512_512BITTAG",
]
