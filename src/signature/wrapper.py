"""
Signature Wrappers

Turn a set of signing keys into one signer, and a set of verifying keys
into one verifier.

Signing always uses the primary key and prefixes the output with the
key's identifier. Verification tries the enabled keys whose identifier
matches the signature prefix, then the enabled RAW keys, and succeeds on
the first match. A failed verification reports nothing about which keys
were tried.
"""

import structlog

from core.errors import InternalError, InvalidArgumentError, KeyrailError
from core.primitive_set import Entry, FrozenPrimitiveSet, PrimitiveSet
from core.primitive_wrapper import PrimitiveWrapper, message_for
from crypto.signer import (
    PublicKeySign,
    PublicKeyVerify,
    SignatureResult,
    VerificationResult,
    signature_result,
)

logger = structlog.get_logger()

VERIFICATION_FAILED = "signature verification failed"


class WrappedPublicKeySign(PublicKeySign):
    """Signs with the primary entry of a primitive set."""

    def __init__(self, primary: Entry):
        self._primary = primary

    @property
    def algorithm(self) -> str:
        return self._primary.primitive.algorithm

    @property
    def key_id(self) -> int:
        return self._primary.key_id

    def sign(self, data: bytes) -> SignatureResult:
        entry = self._primary
        try:
            raw = entry.primitive.sign(message_for(entry.output_prefix_type, data))
        except KeyrailError:
            raise
        except Exception as e:
            logger.error("sign_failed", key_id=entry.key_id, error=str(e))
            raise InternalError(f"Signing failed: {e}") from e

        return signature_result(entry.identifier + raw.signature, raw.algorithm, entry.key_id)


class WrappedPublicKeyVerify(PublicKeyVerify):
    """Verifies against every enabled entry of a primitive set."""

    def __init__(self, primitive_set: FrozenPrimitiveSet):
        self._primitive_set = primitive_set

    @property
    def algorithm(self) -> str:
        return "KEYSET"

    def verify(self, data: bytes, signature: bytes) -> VerificationResult:
        for entry, payload in self._primitive_set.verification_candidates(signature):
            try:
                result = entry.primitive.verify(message_for(entry.output_prefix_type, data), payload)
            except Exception:
                # A key that blows up simply does not verify.
                continue
            if isinstance(result, VerificationResult) and result.valid:
                return VerificationResult(valid=True, algorithm=result.algorithm, key_id=entry.key_id)

        return VerificationResult(valid=False, algorithm=self.algorithm, error=VERIFICATION_FAILED)


class PublicKeySignWrapper(PrimitiveWrapper[PublicKeySign]):
    """Wraps a set of signers; the set must have a primary."""

    def primitive_class(self) -> type:
        return PublicKeySign

    def wrap(self, primitive_set: PrimitiveSet) -> PublicKeySign:
        primary = primitive_set.primary()
        if primary is None:
            raise InvalidArgumentError("Cannot sign with a primitive set that has no primary")
        return WrappedPublicKeySign(primary)


class PublicKeyVerifyWrapper(PrimitiveWrapper[PublicKeyVerify]):
    """Wraps a set of verifiers; no primary is needed."""

    def primitive_class(self) -> type:
        return PublicKeyVerify

    def wrap(self, primitive_set: PrimitiveSet) -> PublicKeyVerify:
        return WrappedPublicKeyVerify(FrozenPrimitiveSet(primitive_set))
