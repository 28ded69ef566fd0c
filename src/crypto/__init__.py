"""
Cryptographic Primitives for Keyrail

Supports:
- PublicKeySign / PublicKeyVerify - Ed25519, ECDSA, RSASSA-PSS, RSASSA-PKCS1
- Mac - HMAC-SHA2
- Key managers for every supported type URL
"""

from .signer import (
    PublicKeySign,
    PublicKeyVerify,
    SignatureResult,
    VerificationResult,
)
from .mac import Mac, HmacMac
from .keys import (
    EcdsaSignKeyManager,
    EcdsaVerifyKeyManager,
    Ed25519SignKeyManager,
    Ed25519VerifyKeyManager,
    RsaSsaPssSignKeyManager,
    RsaSsaPssVerifyKeyManager,
    RsaSsaPkcs1SignKeyManager,
    RsaSsaPkcs1VerifyKeyManager,
    HmacKeyManager,
)

__all__ = [
    "PublicKeySign",
    "PublicKeyVerify",
    "SignatureResult",
    "VerificationResult",
    "Mac",
    "HmacMac",
    "EcdsaSignKeyManager",
    "EcdsaVerifyKeyManager",
    "Ed25519SignKeyManager",
    "Ed25519VerifyKeyManager",
    "RsaSsaPssSignKeyManager",
    "RsaSsaPssVerifyKeyManager",
    "RsaSsaPkcs1SignKeyManager",
    "RsaSsaPkcs1VerifyKeyManager",
    "HmacKeyManager",
]
