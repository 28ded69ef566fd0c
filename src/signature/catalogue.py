"""
Signature Catalogues

Catalogues for the PublicKeySign and PublicKeyVerify primitive kinds.
"""

from core.catalogue import KeyManagerCatalogue
from crypto.keys import (
    EcdsaSignKeyManager,
    EcdsaVerifyKeyManager,
    Ed25519SignKeyManager,
    Ed25519VerifyKeyManager,
    RsaSsaPkcs1SignKeyManager,
    RsaSsaPkcs1VerifyKeyManager,
    RsaSsaPssSignKeyManager,
    RsaSsaPssVerifyKeyManager,
)
from crypto.signer import PublicKeySign, PublicKeyVerify

SIGN_CATALOGUE_NAME = "KeyrailPublicKeySign"
VERIFY_CATALOGUE_NAME = "KeyrailPublicKeyVerify"

SIGN_PRIMITIVE_NAME = "PublicKeySign"
VERIFY_PRIMITIVE_NAME = "PublicKeyVerify"


class PublicKeySignCatalogue(KeyManagerCatalogue):
    def __init__(self):
        super().__init__(
            SIGN_PRIMITIVE_NAME,
            PublicKeySign,
            [
                EcdsaSignKeyManager,
                Ed25519SignKeyManager,
                RsaSsaPssSignKeyManager,
                RsaSsaPkcs1SignKeyManager,
            ],
        )


class PublicKeyVerifyCatalogue(KeyManagerCatalogue):
    def __init__(self):
        super().__init__(
            VERIFY_PRIMITIVE_NAME,
            PublicKeyVerify,
            [
                EcdsaVerifyKeyManager,
                Ed25519VerifyKeyManager,
                RsaSsaPssVerifyKeyManager,
                RsaSsaPkcs1VerifyKeyManager,
            ],
        )
