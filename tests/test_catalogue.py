"""
Tests for Catalogues

Version floors, primitive names and competing implementations.
"""

import pytest

from core.catalogue import KeyManagerCatalogue
from core.errors import ErrorCode, InvalidArgumentError, NotFoundError
from crypto.keys import (
    ED25519_PRIVATE_KEY_TYPE,
    ED25519_PUBLIC_KEY_TYPE,
    Ed25519SignKeyManager,
    Ed25519VerifyKeyManager,
)
from crypto.signer import PublicKeySign
from signature.catalogue import PublicKeySignCatalogue, PublicKeyVerifyCatalogue


class Ed25519SignKeyManagerV3(Ed25519SignKeyManager):
    VERSION = 3


class TestKeyManagerCatalogue:
    """Test key manager selection."""

    def test_returns_manager_for_type_url(self):
        catalogue = PublicKeySignCatalogue()

        manager = catalogue.get_key_manager(ED25519_PRIVATE_KEY_TYPE, "PublicKeySign", 0)

        assert isinstance(manager, Ed25519SignKeyManager)
        assert manager.does_support(ED25519_PRIVATE_KEY_TYPE)

    def test_primitive_name_is_case_insensitive(self):
        catalogue = PublicKeySignCatalogue()

        manager = catalogue.get_key_manager(ED25519_PRIVATE_KEY_TYPE, "publickeysign", 0)

        assert manager.key_type == ED25519_PRIVATE_KEY_TYPE

    def test_unknown_type_url_not_found(self):
        catalogue = PublicKeySignCatalogue()

        with pytest.raises(NotFoundError):
            catalogue.get_key_manager(ED25519_PUBLIC_KEY_TYPE, "PublicKeySign", 0)

    def test_wrong_primitive_name_rejected(self):
        catalogue = PublicKeyVerifyCatalogue()

        with pytest.raises(InvalidArgumentError):
            catalogue.get_key_manager(ED25519_PUBLIC_KEY_TYPE, "PublicKeySign", 0)

    def test_version_floor_above_best_rejected(self):
        catalogue = PublicKeySignCatalogue()

        with pytest.raises(InvalidArgumentError) as exc:
            catalogue.get_key_manager(ED25519_PRIVATE_KEY_TYPE, "PublicKeySign", 1)
        assert exc.value.code == ErrorCode.INVALID_ARGUMENT

    def test_picks_highest_version_among_competitors(self):
        catalogue = KeyManagerCatalogue(
            "PublicKeySign",
            PublicKeySign,
            [Ed25519SignKeyManager, Ed25519SignKeyManagerV3],
        )

        manager = catalogue.get_key_manager(ED25519_PRIVATE_KEY_TYPE, "PublicKeySign", 2)

        assert isinstance(manager, Ed25519SignKeyManagerV3)
        assert manager.version() == 3

    def test_never_downgrades(self):
        catalogue = KeyManagerCatalogue(
            "PublicKeySign",
            PublicKeySign,
            [Ed25519SignKeyManager, Ed25519SignKeyManagerV3],
        )

        with pytest.raises(InvalidArgumentError):
            catalogue.get_key_manager(ED25519_PRIVATE_KEY_TYPE, "PublicKeySign", 4)

    def test_rejects_manager_of_other_kind(self):
        with pytest.raises(InvalidArgumentError):
            KeyManagerCatalogue("PublicKeySign", PublicKeySign, [Ed25519VerifyKeyManager])

    def test_only_identical_catalogue_is_equivalent(self):
        catalogue = PublicKeySignCatalogue()

        assert catalogue.is_equivalent(catalogue)
        assert not catalogue.is_equivalent(PublicKeySignCatalogue())

    def test_lists_type_urls(self):
        catalogue = PublicKeySignCatalogue()

        assert ED25519_PRIVATE_KEY_TYPE in catalogue.type_urls()
        assert len(catalogue.type_urls()) == 4
