"""
Signature Configuration

Registration table for the signature key types. Entries come in
sign/verify pairs per algorithm, in the order ECDSA, Ed25519,
RSASSA-PSS, RSASSA-PKCS1.
"""

from core.config import KeyTypeEntry, NamedConfig
from crypto.keys import (
    ECDSA_PRIVATE_KEY_TYPE,
    ECDSA_PUBLIC_KEY_TYPE,
    ED25519_PRIVATE_KEY_TYPE,
    ED25519_PUBLIC_KEY_TYPE,
    RSA_SSA_PKCS1_PRIVATE_KEY_TYPE,
    RSA_SSA_PKCS1_PUBLIC_KEY_TYPE,
    RSA_SSA_PSS_PRIVATE_KEY_TYPE,
    RSA_SSA_PSS_PUBLIC_KEY_TYPE,
)

from .catalogue import (
    SIGN_CATALOGUE_NAME,
    SIGN_PRIMITIVE_NAME,
    VERIFY_CATALOGUE_NAME,
    VERIFY_PRIMITIVE_NAME,
    PublicKeySignCatalogue,
    PublicKeyVerifyCatalogue,
)
from .wrapper import PublicKeySignWrapper, PublicKeyVerifyWrapper

KEY_TYPE_PAIRS = (
    (ECDSA_PRIVATE_KEY_TYPE, ECDSA_PUBLIC_KEY_TYPE),
    (ED25519_PRIVATE_KEY_TYPE, ED25519_PUBLIC_KEY_TYPE),
    (RSA_SSA_PSS_PRIVATE_KEY_TYPE, RSA_SSA_PSS_PUBLIC_KEY_TYPE),
    (RSA_SSA_PKCS1_PRIVATE_KEY_TYPE, RSA_SSA_PKCS1_PUBLIC_KEY_TYPE),
)


def _entries():
    for private_type, public_type in KEY_TYPE_PAIRS:
        yield KeyTypeEntry(
            catalogue_name=SIGN_CATALOGUE_NAME,
            primitive_name=SIGN_PRIMITIVE_NAME,
            type_url=private_type,
            new_key_allowed=True,
            key_manager_version=0,
        )
        yield KeyTypeEntry(
            catalogue_name=VERIFY_CATALOGUE_NAME,
            primitive_name=VERIFY_PRIMITIVE_NAME,
            type_url=public_type,
            new_key_allowed=True,
            key_manager_version=0,
        )


class SignatureConfig(NamedConfig):
    """Signature key types, first release."""

    CONFIG_NAME = "KEYRAIL_SIGNATURE_1_0_0"
    ENTRIES = tuple(_entries())
    CATALOGUES = {
        SIGN_CATALOGUE_NAME: PublicKeySignCatalogue(),
        VERIFY_CATALOGUE_NAME: PublicKeyVerifyCatalogue(),
    }
    WRAPPERS = {
        SIGN_PRIMITIVE_NAME: PublicKeySignWrapper(),
        VERIFY_PRIMITIVE_NAME: PublicKeyVerifyWrapper(),
    }
