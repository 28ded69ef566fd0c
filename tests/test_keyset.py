"""
Tests for Keyset Handles and the Keyset Manager
"""

import pytest

from core.errors import InvalidArgumentError, NotFoundError
from core.key_data import KeyMaterialType, KeyStatus
from crypto.mac import Mac
from crypto.signer import PublicKeySign, PublicKeyVerify
from keyset.handle import Key, Keyset, KeysetHandle
from keyset.manager import KeysetManager
from signature import key_templates


class TestKeysetHandle:
    """Test generating handles and extracting primitives."""

    def test_generate_new(self, signature_registry):
        handle = KeysetHandle.generate_new(key_templates.ED25519, signature_registry)
        info = handle.keyset_info()

        assert len(info["keys"]) == 1
        assert info["primary_key_id"] == info["keys"][0]["key_id"]
        assert info["keys"][0]["status"] == "ENABLED"

    def test_info_and_repr_hide_key_material(self, signature_registry):
        handle = KeysetHandle.generate_new(key_templates.ED25519, signature_registry)

        assert "value" not in handle.keyset_info()["keys"][0]
        assert "Ed25519PrivateKey object" not in repr(handle.keyset.keys[0])

    def test_generate_requires_registration(self, registry):
        with pytest.raises(NotFoundError):
            KeysetHandle.generate_new(key_templates.ED25519, registry)

    def test_public_keyset_handle(self, signature_registry):
        handle = KeysetHandle.generate_new(key_templates.ECDSA_P256, signature_registry)

        public = handle.public_keyset_handle(signature_registry)

        key = public.keyset.keys[0]
        assert key.key_data.key_material_type == KeyMaterialType.ASYMMETRIC_PUBLIC
        assert key.key_id == handle.keyset.keys[0].key_id
        assert public.keyset.primary_key_id == handle.keyset.primary_key_id

    def test_public_keyset_of_symmetric_key_rejected(self, mac_registry):
        from mac.config import HMAC_SHA256_128BITTAG

        handle = KeysetHandle.generate_new(HMAC_SHA256_128BITTAG, mac_registry)

        with pytest.raises(InvalidArgumentError):
            handle.public_keyset_handle(mac_registry)

    def test_wrong_primitive_kind_not_found(self, signature_registry):
        handle = KeysetHandle.generate_new(key_templates.ED25519, signature_registry)

        with pytest.raises(NotFoundError):
            handle.primitives(PublicKeyVerify, signature_registry)
        with pytest.raises(NotFoundError):
            handle.primitives(Mac, signature_registry)

    def test_primitives_marks_primary(self, signature_registry):
        handle = KeysetHandle.generate_new(key_templates.ED25519, signature_registry)

        primitive_set = handle.primitives(PublicKeySign, signature_registry)

        assert primitive_set.primary().key_id == handle.keyset.primary_key_id

    def test_primary_must_be_enabled(self, signature_registry):
        private = signature_registry.new_key_data(key_templates.ED25519)
        key = Key(private, 7, KeyStatus.DISABLED, key_templates.ED25519.output_prefix_type)

        with pytest.raises(InvalidArgumentError):
            KeysetHandle(Keyset(primary_key_id=7, keys=(key,)))

    def test_duplicate_key_ids_rejected(self, signature_registry):
        private = signature_registry.new_key_data(key_templates.ED25519)
        key = Key(private, 7, KeyStatus.ENABLED, key_templates.ED25519.output_prefix_type)

        with pytest.raises(InvalidArgumentError):
            KeysetHandle(Keyset(primary_key_id=7, keys=(key, key)))


class TestKeysetManager:
    """Test the rotation workflow."""

    def test_add_and_promote(self, signature_registry):
        manager = KeysetManager(signature_registry)
        first = manager.add(key_templates.ED25519, as_primary=True)
        second = manager.add(key_templates.ECDSA_P256)

        assert manager.handle().keyset.primary_key_id == first
        manager.set_primary(second)
        assert manager.handle().keyset.primary_key_id == second

    def test_rotation_keeps_old_signatures_valid(self, signature_registry):
        manager = KeysetManager(signature_registry)
        old_id = manager.add(key_templates.ECDSA_P256, as_primary=True)
        old_signature = manager.handle().primitive(PublicKeySign, signature_registry).sign(b"doc")

        new_id = manager.add(key_templates.ED25519, as_primary=True)
        handle = manager.handle()
        verifier = handle.public_keyset_handle(signature_registry).primitive(
            PublicKeyVerify, signature_registry
        )
        new_signature = handle.primitive(PublicKeySign, signature_registry).sign(b"doc")

        assert new_signature.key_id == new_id
        assert verifier.verify(b"doc", old_signature.signature).key_id == old_id
        assert verifier.verify(b"doc", new_signature.signature).key_id == new_id

    def test_disable_then_destroy(self, signature_registry):
        manager = KeysetManager(signature_registry)
        old_id = manager.add(key_templates.ED25519, as_primary=True)
        old_signature = manager.handle().primitive(PublicKeySign, signature_registry).sign(b"doc")
        manager.add(key_templates.ED25519, as_primary=True)

        manager.disable(old_id)
        disabled_handle = manager.handle()
        verifier = disabled_handle.public_keyset_handle(signature_registry).primitive(
            PublicKeyVerify, signature_registry
        )
        assert verifier.verify(b"doc", old_signature.signature).valid is False

        manager.enable(old_id)
        verifier = manager.handle().public_keyset_handle(signature_registry).primitive(
            PublicKeyVerify, signature_registry
        )
        assert verifier.verify(b"doc", old_signature.signature).valid is True

        manager.destroy(old_id)
        destroyed = manager.handle()
        assert destroyed.keyset.key(old_id).key_data is None
        assert len(destroyed.primitives(PublicKeySign, signature_registry)) == 1
        with pytest.raises(InvalidArgumentError):
            manager.enable(old_id)

    def test_cannot_disable_or_destroy_primary(self, signature_registry):
        manager = KeysetManager(signature_registry)
        primary = manager.add(key_templates.ED25519, as_primary=True)

        with pytest.raises(InvalidArgumentError):
            manager.disable(primary)
        with pytest.raises(InvalidArgumentError):
            manager.destroy(primary)

    def test_cannot_promote_disabled_key(self, signature_registry):
        manager = KeysetManager(signature_registry)
        manager.add(key_templates.ED25519, as_primary=True)
        other = manager.add(key_templates.ED25519)
        manager.disable(other)

        with pytest.raises(InvalidArgumentError):
            manager.set_primary(other)

    def test_unknown_key_id(self, signature_registry):
        manager = KeysetManager(signature_registry)

        with pytest.raises(NotFoundError):
            manager.set_primary(12345)

    def test_handles_are_snapshots(self, signature_registry):
        manager = KeysetManager(signature_registry)
        manager.add(key_templates.ED25519, as_primary=True)
        before = manager.handle()

        manager.add(key_templates.ED25519)

        assert len(before.keyset.keys) == 1
        assert len(manager.handle().keyset.keys) == 2

    def test_new_keys_forbidden(self, registry):
        from core.config import KeyTypeEntry, RegistryConfig, register_config
        from signature.config import SignatureConfig

        for name, catalogue in SignatureConfig.CATALOGUES.items():
            registry.add_catalogue(name, catalogue)
        entry = SignatureConfig.latest().entry(2)  # Ed25519 private key
        register_config(
            RegistryConfig("verify-only", (KeyTypeEntry(
                entry.catalogue_name, entry.primitive_name, entry.type_url, new_key_allowed=False,
            ),)),
            registry,
        )

        with pytest.raises(InvalidArgumentError):
            KeysetManager(registry).add(key_templates.ED25519)
