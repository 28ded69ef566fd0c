"""
Signature Primitives

Defines the PublicKeySign / PublicKeyVerify primitive kinds and their
single-key implementations on top of the cryptography library:
- Ed25519
- ECDSA (NIST P-256 / P-384, DER encoded)
- RSASSA-PSS
- RSASSA-PKCS1 v1.5
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa

HASH_ALGORITHMS = {
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


def hash_algorithm(name: str) -> hashes.HashAlgorithm:
    try:
        return HASH_ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unsupported hash: {name}")


@dataclass
class SignatureResult:
    """Result of a signing operation."""
    signature: bytes
    signature_b64: str
    algorithm: str
    key_id: Optional[int] = None


@dataclass
class VerificationResult:
    """Result of a verification operation."""
    valid: bool
    algorithm: Optional[str] = None
    key_id: Optional[int] = None
    error: Optional[str] = None


def signature_result(signature: bytes, algorithm: str, key_id: Optional[int] = None) -> SignatureResult:
    return SignatureResult(
        signature=signature,
        signature_b64=base64.b64encode(signature).decode('utf-8'),
        algorithm=algorithm,
        key_id=key_id,
    )


class PublicKeySign(ABC):
    """Primitive kind: produce a signature over data."""

    @property
    @abstractmethod
    def algorithm(self) -> str:
        pass

    @abstractmethod
    def sign(self, data: bytes) -> SignatureResult:
        """Sign data and return the signature."""
        pass

    def sign_b64(self, data: bytes) -> str:
        """Sign and return base64-encoded signature."""
        return self.sign(data).signature_b64


class PublicKeyVerify(ABC):
    """Primitive kind: check a signature over data."""

    @property
    @abstractmethod
    def algorithm(self) -> str:
        pass

    @abstractmethod
    def verify(self, data: bytes, signature: bytes) -> VerificationResult:
        """Verify a signature. Never raises for a bad signature."""
        pass

    def verify_b64(self, data: bytes, signature_b64: str) -> VerificationResult:
        """Verify a base64-encoded signature."""
        try:
            signature = base64.b64decode(signature_b64)
        except Exception as e:
            return VerificationResult(
                valid=False,
                algorithm=self.algorithm,
                error=f"Failed to decode signature: {str(e)}"
            )
        return self.verify(data, signature)


class _RawVerify(PublicKeyVerify):
    """Shared verify flow: subclasses raise on mismatch in _check()."""

    @abstractmethod
    def _check(self, data: bytes, signature: bytes) -> None:
        pass

    def verify(self, data: bytes, signature: bytes) -> VerificationResult:
        try:
            self._check(data, signature)
            return VerificationResult(valid=True, algorithm=self.algorithm)
        except InvalidSignature:
            return VerificationResult(valid=False, algorithm=self.algorithm, error="invalid signature")
        except Exception as e:
            return VerificationResult(valid=False, algorithm=self.algorithm, error=str(e))


# ----------------------------------------------------------------------
# Ed25519
# ----------------------------------------------------------------------

class Ed25519Sign(PublicKeySign):
    """Ed25519 signing with the cryptography library."""

    def __init__(self, private_key: ed25519.Ed25519PrivateKey):
        self._private_key = private_key

    @property
    def algorithm(self) -> str:
        return "Ed25519"

    def sign(self, data: bytes) -> SignatureResult:
        return signature_result(self._private_key.sign(data), self.algorithm)


class Ed25519Verify(_RawVerify):

    def __init__(self, public_key: ed25519.Ed25519PublicKey):
        self._public_key = public_key

    @property
    def algorithm(self) -> str:
        return "Ed25519"

    def _check(self, data: bytes, signature: bytes) -> None:
        self._public_key.verify(signature, data)


# ----------------------------------------------------------------------
# ECDSA
# ----------------------------------------------------------------------

class EcdsaSign(PublicKeySign):
    """ECDSA with DER-encoded signatures."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey, hash_name: str = "SHA256"):
        self._private_key = private_key
        self._hash_name = hash_name
        self._signature_algorithm = ec.ECDSA(hash_algorithm(hash_name))

    @property
    def algorithm(self) -> str:
        return f"ECDSA-{self._private_key.curve.name}-{self._hash_name}"

    def sign(self, data: bytes) -> SignatureResult:
        signature = self._private_key.sign(data, self._signature_algorithm)
        return signature_result(signature, self.algorithm)


class EcdsaVerify(_RawVerify):

    def __init__(self, public_key: ec.EllipticCurvePublicKey, hash_name: str = "SHA256"):
        self._public_key = public_key
        self._hash_name = hash_name
        self._signature_algorithm = ec.ECDSA(hash_algorithm(hash_name))

    @property
    def algorithm(self) -> str:
        return f"ECDSA-{self._public_key.curve.name}-{self._hash_name}"

    def _check(self, data: bytes, signature: bytes) -> None:
        self._public_key.verify(signature, data, self._signature_algorithm)


# ----------------------------------------------------------------------
# RSA
# ----------------------------------------------------------------------

def _pss_padding(hash_name: str, salt_length: int) -> padding.PSS:
    return padding.PSS(mgf=padding.MGF1(hash_algorithm(hash_name)), salt_length=salt_length)


class RsaSsaPssSign(PublicKeySign):
    """RSASSA-PSS; MGF1 uses the same hash as the signature."""

    def __init__(self, private_key: rsa.RSAPrivateKey, hash_name: str = "SHA256", salt_length: int = 32):
        self._private_key = private_key
        self._hash_name = hash_name
        self._padding = _pss_padding(hash_name, salt_length)

    @property
    def algorithm(self) -> str:
        return f"RSASSA-PSS-{self._hash_name}"

    def sign(self, data: bytes) -> SignatureResult:
        signature = self._private_key.sign(data, self._padding, hash_algorithm(self._hash_name))
        return signature_result(signature, self.algorithm)


class RsaSsaPssVerify(_RawVerify):

    def __init__(self, public_key: rsa.RSAPublicKey, hash_name: str = "SHA256", salt_length: int = 32):
        self._public_key = public_key
        self._hash_name = hash_name
        self._padding = _pss_padding(hash_name, salt_length)

    @property
    def algorithm(self) -> str:
        return f"RSASSA-PSS-{self._hash_name}"

    def _check(self, data: bytes, signature: bytes) -> None:
        self._public_key.verify(signature, data, self._padding, hash_algorithm(self._hash_name))


class RsaSsaPkcs1Sign(PublicKeySign):
    """RSASSA-PKCS1 v1.5."""

    def __init__(self, private_key: rsa.RSAPrivateKey, hash_name: str = "SHA256"):
        self._private_key = private_key
        self._hash_name = hash_name

    @property
    def algorithm(self) -> str:
        return f"RSASSA-PKCS1-{self._hash_name}"

    def sign(self, data: bytes) -> SignatureResult:
        signature = self._private_key.sign(data, padding.PKCS1v15(), hash_algorithm(self._hash_name))
        return signature_result(signature, self.algorithm)


class RsaSsaPkcs1Verify(_RawVerify):

    def __init__(self, public_key: rsa.RSAPublicKey, hash_name: str = "SHA256"):
        self._public_key = public_key
        self._hash_name = hash_name

    @property
    def algorithm(self) -> str:
        return f"RSASSA-PKCS1-{self._hash_name}"

    def _check(self, data: bytes, signature: bytes) -> None:
        self._public_key.verify(signature, data, padding.PKCS1v15(), hash_algorithm(self._hash_name))
