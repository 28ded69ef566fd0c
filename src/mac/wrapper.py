"""
MAC Wrapper

Computes tags with the primary key (identifier-prefixed) and verifies
tags against the enabled keys whose identifier matches, then the enabled
RAW keys.
"""

import structlog

from core.errors import InternalError, InvalidArgumentError, KeyrailError
from core.primitive_set import Entry, FrozenPrimitiveSet, PrimitiveSet
from core.primitive_wrapper import PrimitiveWrapper, message_for
from crypto.mac import Mac
from crypto.signer import VerificationResult

logger = structlog.get_logger()

MAC_VERIFICATION_FAILED = "mac verification failed"


class WrappedMac(Mac):
    """Computes tags with the primary entry, verifies against every enabled entry."""

    def __init__(self, primitive_set: FrozenPrimitiveSet, primary: Entry):
        self._primitive_set = primitive_set
        self._primary = primary

    @property
    def algorithm(self) -> str:
        return self._primary.primitive.algorithm

    def compute_mac(self, data: bytes) -> bytes:
        entry = self._primary
        try:
            tag = entry.primitive.compute_mac(message_for(entry.output_prefix_type, data))
        except KeyrailError:
            raise
        except Exception as e:
            logger.error("compute_mac_failed", key_id=entry.key_id, error=str(e))
            raise InternalError(f"Computing MAC failed: {e}") from e
        return entry.identifier + tag

    def verify_mac(self, data: bytes, tag: bytes) -> VerificationResult:
        for entry, payload in self._primitive_set.verification_candidates(tag):
            try:
                result = entry.primitive.verify_mac(message_for(entry.output_prefix_type, data), payload)
            except Exception:
                continue
            if isinstance(result, VerificationResult) and result.valid:
                return VerificationResult(valid=True, algorithm=result.algorithm, key_id=entry.key_id)

        return VerificationResult(valid=False, error=MAC_VERIFICATION_FAILED)


class MacWrapper(PrimitiveWrapper[Mac]):
    """Wraps a set of MACs; the set must have a primary."""

    def primitive_class(self) -> type:
        return Mac

    def wrap(self, primitive_set: PrimitiveSet) -> Mac:
        primary = primitive_set.primary()
        if primary is None:
            raise InvalidArgumentError("Cannot compute MACs with a primitive set that has no primary")
        return WrappedMac(FrozenPrimitiveSet(primitive_set), primary)
