"""
Tests for Primitive Sets

Output prefixes, primary selection and candidate ordering.
"""

import pytest

from core.errors import InvalidArgumentError
from core.key_data import KeyStatus, OutputPrefixType
from core.primitive_set import FrozenPrimitiveSet, PrimitiveSet, output_prefix
from crypto.mac import HmacMac, Mac
from crypto.signer import PublicKeySign


def _mac(seed: int) -> Mac:
    return HmacMac(bytes([seed]) * 32, "SHA256", 16)


class TestOutputPrefix:
    """Test identifier bytes per prefix type."""

    def test_tink_prefix(self):
        assert output_prefix(0x01020304, OutputPrefixType.TINK) == b"\x01\x01\x02\x03\x04"

    def test_legacy_and_crunchy_prefix(self):
        assert output_prefix(0x01020304, OutputPrefixType.LEGACY) == b"\x00\x01\x02\x03\x04"
        assert output_prefix(0x01020304, OutputPrefixType.CRUNCHY) == b"\x00\x01\x02\x03\x04"

    def test_raw_prefix_is_empty(self):
        assert output_prefix(42, OutputPrefixType.RAW) == b""

    @pytest.mark.parametrize("key_id", [-1, 2**32])
    def test_key_id_out_of_range(self, key_id):
        with pytest.raises(InvalidArgumentError):
            output_prefix(key_id, OutputPrefixType.TINK)


class TestPrimitiveSet:
    """Test building a primitive set."""

    def test_entries_keep_insertion_order(self):
        primitive_set = PrimitiveSet(Mac)
        first = primitive_set.add_primitive(_mac(1), 10)
        second = primitive_set.add_primitive(_mac(2), 20, KeyStatus.DISABLED)

        assert primitive_set.all() == (first, second)
        assert [e.index for e in primitive_set.all()] == [0, 1]
        assert len(primitive_set) == 2

    def test_no_primary_by_default(self):
        primitive_set = PrimitiveSet(Mac)
        primitive_set.add_primitive(_mac(1), 10)

        assert primitive_set.primary() is None

    def test_set_primary(self):
        primitive_set = PrimitiveSet(Mac)
        primitive_set.add_primitive(_mac(1), 10)
        entry = primitive_set.add_primitive(_mac(2), 20)

        primitive_set.set_primary(entry)

        assert primitive_set.primary() is entry

    def test_primary_must_be_enabled(self):
        primitive_set = PrimitiveSet(Mac)
        entry = primitive_set.add_primitive(_mac(1), 10, KeyStatus.DISABLED)

        with pytest.raises(InvalidArgumentError):
            primitive_set.set_primary(entry)

    def test_primary_must_belong_to_set(self):
        primitive_set = PrimitiveSet(Mac)
        other = PrimitiveSet(Mac)
        foreign = other.add_primitive(_mac(1), 10)

        with pytest.raises(InvalidArgumentError):
            primitive_set.set_primary(foreign)

    def test_rejects_wrong_kind(self):
        primitive_set = PrimitiveSet(PublicKeySign)

        with pytest.raises(InvalidArgumentError):
            primitive_set.add_primitive(_mac(1), 10)

    def test_lookup_by_identifier(self):
        primitive_set = PrimitiveSet(Mac)
        tink = primitive_set.add_primitive(_mac(1), 10, output_prefix_type=OutputPrefixType.TINK)
        raw = primitive_set.add_primitive(_mac(2), 20, output_prefix_type=OutputPrefixType.RAW)

        assert primitive_set.entries_for_identifier(tink.identifier) == (tink,)
        assert primitive_set.raw_entries() == (raw,)


class TestFrozenPrimitiveSet:
    """Test the read-only snapshot used by wrappers."""

    def test_snapshot_ignores_later_additions(self):
        primitive_set = PrimitiveSet(Mac)
        primitive_set.add_primitive(_mac(1), 10)
        frozen = FrozenPrimitiveSet(primitive_set)

        primitive_set.add_primitive(_mac(2), 20)

        assert len(frozen) == 1

    def test_candidates_prefixed_then_raw(self):
        primitive_set = PrimitiveSet(Mac)
        raw = primitive_set.add_primitive(_mac(1), 1, output_prefix_type=OutputPrefixType.RAW)
        tink = primitive_set.add_primitive(_mac(2), 2, output_prefix_type=OutputPrefixType.TINK)
        frozen = FrozenPrimitiveSet(primitive_set)
        output = tink.identifier + b"tag-bytes"

        candidates = frozen.verification_candidates(output)

        assert [(e.key_id, payload) for e, payload in candidates] == [
            (2, b"tag-bytes"),
            (1, output),
        ]
        assert candidates[1][0] is raw

    def test_candidates_skip_non_enabled(self):
        primitive_set = PrimitiveSet(Mac)
        primitive_set.add_primitive(_mac(1), 1, KeyStatus.DISABLED, OutputPrefixType.RAW)
        primitive_set.add_primitive(_mac(2), 2, KeyStatus.DESTROYED, OutputPrefixType.RAW)
        enabled = primitive_set.add_primitive(_mac(3), 3, KeyStatus.ENABLED, OutputPrefixType.RAW)
        frozen = FrozenPrimitiveSet(primitive_set)

        candidates = frozen.verification_candidates(b"0123456789")

        assert [e for e, _ in candidates] == [enabled]

    def test_short_output_only_tries_raw(self):
        primitive_set = PrimitiveSet(Mac)
        primitive_set.add_primitive(_mac(1), 1, output_prefix_type=OutputPrefixType.TINK)
        frozen = FrozenPrimitiveSet(primitive_set)

        assert frozen.verification_candidates(b"\x01") == []
