"""
MAC Primitives

The Mac primitive kind and its HMAC implementation. Tags may be truncated
to a configured length; verification is constant time.
"""

import hmac
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hmac as crypto_hmac

from .signer import VerificationResult, hash_algorithm

MIN_TAG_SIZE = 10


class Mac(ABC):
    """Primitive kind: compute and verify message authentication codes."""

    @property
    @abstractmethod
    def algorithm(self) -> str:
        pass

    @abstractmethod
    def compute_mac(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def verify_mac(self, data: bytes, tag: bytes) -> VerificationResult:
        """Check a tag. Never raises for a bad tag."""
        pass


class HmacMac(Mac):
    """HMAC with SHA-2, truncated to `tag_size` bytes."""

    def __init__(self, key: bytes, hash_name: str = "SHA256", tag_size: int = 32):
        digest_size = hash_algorithm(hash_name).digest_size
        if not MIN_TAG_SIZE <= tag_size <= digest_size:
            raise ValueError(
                f"Tag size {tag_size} outside [{MIN_TAG_SIZE}, {digest_size}] for {hash_name}"
            )
        self._key = key
        self._hash_name = hash_name
        self._tag_size = tag_size

    @property
    def algorithm(self) -> str:
        return f"HMAC-{self._hash_name}-{self._tag_size * 8}"

    def compute_mac(self, data: bytes) -> bytes:
        h = crypto_hmac.HMAC(self._key, hash_algorithm(self._hash_name))
        h.update(data)
        return h.finalize()[:self._tag_size]

    def verify_mac(self, data: bytes, tag: bytes) -> VerificationResult:
        if hmac.compare_digest(self.compute_mac(data), tag):
            return VerificationResult(valid=True, algorithm=self.algorithm)
        return VerificationResult(valid=False, algorithm=self.algorithm, error="invalid tag")
