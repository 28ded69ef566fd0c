"""
Signature primitives: catalogues, wrappers, configuration and templates.
"""

from .catalogue import (
    SIGN_CATALOGUE_NAME,
    VERIFY_CATALOGUE_NAME,
    PublicKeySignCatalogue,
    PublicKeyVerifyCatalogue,
)
from .config import SignatureConfig
from .wrapper import PublicKeySignWrapper, PublicKeyVerifyWrapper
from . import key_templates

__all__ = [
    "SIGN_CATALOGUE_NAME",
    "VERIFY_CATALOGUE_NAME",
    "PublicKeySignCatalogue",
    "PublicKeyVerifyCatalogue",
    "SignatureConfig",
    "PublicKeySignWrapper",
    "PublicKeyVerifyWrapper",
    "key_templates",
]
