"""
Key Managers for Keyrail

One key manager per type URL. Private-key managers build signers,
generate key pairs and extract the public half; public-key managers
build verifiers. The HMAC manager builds MACs and generates symmetric keys.

Key material is held as cryptography key objects (raw bytes for HMAC)
inside KeyData; nothing here serializes keys.
"""

import os
from abc import abstractmethod
from typing import Any, Dict, Tuple, Type

import structlog
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from core.errors import InvalidArgumentError
from core.key_data import KeyData, KeyMaterialType, KeyTemplate
from core.key_manager import KeyManager, PrivateKeyManager

from .mac import HmacMac, Mac, MIN_TAG_SIZE
from .signer import (
    HASH_ALGORITHMS,
    EcdsaSign,
    EcdsaVerify,
    Ed25519Sign,
    Ed25519Verify,
    PublicKeySign,
    PublicKeyVerify,
    RsaSsaPkcs1Sign,
    RsaSsaPkcs1Verify,
    RsaSsaPssSign,
    RsaSsaPssVerify,
    hash_algorithm,
)

logger = structlog.get_logger()

TYPE_URL_PREFIX = "type.keyrail.dev/keyrail."

ECDSA_PRIVATE_KEY_TYPE = TYPE_URL_PREFIX + "EcdsaPrivateKey"
ECDSA_PUBLIC_KEY_TYPE = TYPE_URL_PREFIX + "EcdsaPublicKey"
ED25519_PRIVATE_KEY_TYPE = TYPE_URL_PREFIX + "Ed25519PrivateKey"
ED25519_PUBLIC_KEY_TYPE = TYPE_URL_PREFIX + "Ed25519PublicKey"
RSA_SSA_PSS_PRIVATE_KEY_TYPE = TYPE_URL_PREFIX + "RsaSsaPssPrivateKey"
RSA_SSA_PSS_PUBLIC_KEY_TYPE = TYPE_URL_PREFIX + "RsaSsaPssPublicKey"
RSA_SSA_PKCS1_PRIVATE_KEY_TYPE = TYPE_URL_PREFIX + "RsaSsaPkcs1PrivateKey"
RSA_SSA_PKCS1_PUBLIC_KEY_TYPE = TYPE_URL_PREFIX + "RsaSsaPkcs1PublicKey"
HMAC_KEY_TYPE = TYPE_URL_PREFIX + "HmacKey"

CURVES = {
    "NIST_P256": ec.SECP256R1,
    "NIST_P384": ec.SECP384R1,
}

# Hashes allowed per curve.
ECDSA_HASHES = {
    "NIST_P256": ("SHA256",),
    "NIST_P384": ("SHA384", "SHA512"),
}

MIN_RSA_MODULUS_SIZE = 2048
MIN_HMAC_KEY_SIZE = 16


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidArgumentError(message)


# ----------------------------------------------------------------------
# Parameter validation
# ----------------------------------------------------------------------

def _ecdsa_params(params: Dict[str, Any]) -> Tuple[str, str]:
    curve = params.get("curve", "NIST_P256")
    hash_name = params.get("hash", "SHA256")
    _require(curve in CURVES, f"Unsupported ECDSA curve: {curve}")
    _require(hash_name in ECDSA_HASHES[curve], f"Hash {hash_name} not allowed with {curve}")
    return curve, hash_name


def _rsa_params(params: Dict[str, Any]) -> Tuple[int, int, str]:
    modulus_size = params.get("modulus_size", 3072)
    public_exponent = params.get("public_exponent", 65537)
    hash_name = params.get("hash", "SHA256")
    _require(modulus_size >= MIN_RSA_MODULUS_SIZE, f"RSA modulus too small: {modulus_size}")
    _require(public_exponent % 2 == 1 and public_exponent > 65536,
             f"Unsupported RSA public exponent: {public_exponent}")
    _require(hash_name in ("SHA256", "SHA512"), f"Unsupported RSA hash: {hash_name}")
    return modulus_size, public_exponent, hash_name


def _check_rsa_key(key: Any, params: Dict[str, Any]) -> str:
    """Match the key itself against its params; returns the hash name."""
    modulus_size, public_exponent, hash_name = _rsa_params(params)
    public_key = key.public_key() if isinstance(key, rsa.RSAPrivateKey) else key
    _require(public_key.key_size >= MIN_RSA_MODULUS_SIZE,
             f"RSA key too small: {public_key.key_size}")
    _require(public_key.key_size == modulus_size,
             f"RSA key is {public_key.key_size} bits, params say {modulus_size}")
    exponent = public_key.public_numbers().e
    _require(exponent == public_exponent,
             f"RSA key exponent {exponent} does not match {public_exponent}")
    return hash_name


def _pss_salt_length(params: Dict[str, Any]) -> int:
    salt_length = params.get("salt_length", 32)
    _require(isinstance(salt_length, int) and salt_length >= 0,
             f"Invalid PSS salt length: {salt_length}")
    return salt_length


# ----------------------------------------------------------------------
# Base classes
# ----------------------------------------------------------------------

class _SignKeyManager(PrivateKeyManager[PublicKeySign]):
    """Shared flow for private-key (signing) managers."""

    TYPE_URL = ""
    PUBLIC_TYPE_URL = ""
    KEY_CLASS: Type = object
    VERSION = 0

    @property
    def key_type(self) -> str:
        return self.TYPE_URL

    def primitive_class(self) -> type:
        return PublicKeySign

    def version(self) -> int:
        return self.VERSION

    def primitive(self, key_data: KeyData) -> PublicKeySign:
        self._check_private(key_data)
        return self._make_signer(key_data.value, key_data.params)

    def new_key_data(self, template: KeyTemplate) -> KeyData:
        _require(template.type_url == self.TYPE_URL,
                 f"Template type {template.type_url} not handled by {type(self).__name__}")
        params = dict(template.params)
        self._validate_params(params)
        private_key = self._generate(params)

        logger.info("key_material_generated", type_url=self.TYPE_URL)
        return KeyData(
            type_url=self.TYPE_URL,
            value=private_key,
            key_material_type=KeyMaterialType.ASYMMETRIC_PRIVATE,
            params=params,
        )

    def public_key_data(self, key_data: KeyData) -> KeyData:
        self._check_private(key_data)
        return KeyData(
            type_url=self.PUBLIC_TYPE_URL,
            value=key_data.value.public_key(),
            key_material_type=KeyMaterialType.ASYMMETRIC_PUBLIC,
            params=dict(key_data.params),
        )

    def _check_private(self, key_data: KeyData) -> None:
        self._check_key_data(key_data)
        _require(key_data.key_material_type == KeyMaterialType.ASYMMETRIC_PRIVATE,
                 f"Expected private key material for {self.TYPE_URL}")
        _require(isinstance(key_data.value, self.KEY_CLASS),
                 f"Key material for {self.TYPE_URL} must be {self.KEY_CLASS.__name__}")
        self._validate_params(key_data.params)

    def _validate_params(self, params: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def _generate(self, params: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    def _make_signer(self, private_key: Any, params: Dict[str, Any]) -> PublicKeySign:
        pass


class _VerifyKeyManager(KeyManager[PublicKeyVerify]):
    """Shared flow for public-key (verifying) managers."""

    TYPE_URL = ""
    KEY_CLASS: Type = object
    VERSION = 0

    @property
    def key_type(self) -> str:
        return self.TYPE_URL

    def primitive_class(self) -> type:
        return PublicKeyVerify

    def version(self) -> int:
        return self.VERSION

    def primitive(self, key_data: KeyData) -> PublicKeyVerify:
        self._check_key_data(key_data)
        _require(key_data.key_material_type == KeyMaterialType.ASYMMETRIC_PUBLIC,
                 f"Expected public key material for {self.TYPE_URL}")
        _require(isinstance(key_data.value, self.KEY_CLASS),
                 f"Key material for {self.TYPE_URL} must be {self.KEY_CLASS.__name__}")
        self._validate_params(key_data.params)
        return self._make_verifier(key_data.value, key_data.params)

    def _validate_params(self, params: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def _make_verifier(self, public_key: Any, params: Dict[str, Any]) -> PublicKeyVerify:
        pass


# ----------------------------------------------------------------------
# ECDSA
# ----------------------------------------------------------------------

class EcdsaSignKeyManager(_SignKeyManager):
    TYPE_URL = ECDSA_PRIVATE_KEY_TYPE
    PUBLIC_TYPE_URL = ECDSA_PUBLIC_KEY_TYPE
    KEY_CLASS = ec.EllipticCurvePrivateKey

    def _validate_params(self, params):
        _ecdsa_params(params)

    def _generate(self, params):
        curve, _ = _ecdsa_params(params)
        return ec.generate_private_key(CURVES[curve]())

    def _make_signer(self, private_key, params):
        curve, hash_name = _ecdsa_params(params)
        _require(isinstance(private_key.curve, CURVES[curve]),
                 f"Key curve {private_key.curve.name} does not match {curve}")
        return EcdsaSign(private_key, hash_name)


class EcdsaVerifyKeyManager(_VerifyKeyManager):
    TYPE_URL = ECDSA_PUBLIC_KEY_TYPE
    KEY_CLASS = ec.EllipticCurvePublicKey

    def _validate_params(self, params):
        _ecdsa_params(params)

    def _make_verifier(self, public_key, params):
        curve, hash_name = _ecdsa_params(params)
        _require(isinstance(public_key.curve, CURVES[curve]),
                 f"Key curve {public_key.curve.name} does not match {curve}")
        return EcdsaVerify(public_key, hash_name)


# ----------------------------------------------------------------------
# Ed25519
# ----------------------------------------------------------------------

class Ed25519SignKeyManager(_SignKeyManager):
    TYPE_URL = ED25519_PRIVATE_KEY_TYPE
    PUBLIC_TYPE_URL = ED25519_PUBLIC_KEY_TYPE
    KEY_CLASS = ed25519.Ed25519PrivateKey

    def _generate(self, params):
        return ed25519.Ed25519PrivateKey.generate()

    def _make_signer(self, private_key, params):
        return Ed25519Sign(private_key)


class Ed25519VerifyKeyManager(_VerifyKeyManager):
    TYPE_URL = ED25519_PUBLIC_KEY_TYPE
    KEY_CLASS = ed25519.Ed25519PublicKey

    def _make_verifier(self, public_key, params):
        return Ed25519Verify(public_key)


# ----------------------------------------------------------------------
# RSASSA-PSS
# ----------------------------------------------------------------------

class RsaSsaPssSignKeyManager(_SignKeyManager):
    TYPE_URL = RSA_SSA_PSS_PRIVATE_KEY_TYPE
    PUBLIC_TYPE_URL = RSA_SSA_PSS_PUBLIC_KEY_TYPE
    KEY_CLASS = rsa.RSAPrivateKey

    def _validate_params(self, params):
        _rsa_params(params)
        _pss_salt_length(params)

    def _generate(self, params):
        modulus_size, public_exponent, _ = _rsa_params(params)
        return rsa.generate_private_key(public_exponent=public_exponent, key_size=modulus_size)

    def _make_signer(self, private_key, params):
        hash_name = _check_rsa_key(private_key, params)
        return RsaSsaPssSign(private_key, hash_name, _pss_salt_length(params))


class RsaSsaPssVerifyKeyManager(_VerifyKeyManager):
    TYPE_URL = RSA_SSA_PSS_PUBLIC_KEY_TYPE
    KEY_CLASS = rsa.RSAPublicKey

    def _validate_params(self, params):
        _rsa_params(params)
        _pss_salt_length(params)

    def _make_verifier(self, public_key, params):
        hash_name = _check_rsa_key(public_key, params)
        return RsaSsaPssVerify(public_key, hash_name, _pss_salt_length(params))


# ----------------------------------------------------------------------
# RSASSA-PKCS1
# ----------------------------------------------------------------------

class RsaSsaPkcs1SignKeyManager(_SignKeyManager):
    TYPE_URL = RSA_SSA_PKCS1_PRIVATE_KEY_TYPE
    PUBLIC_TYPE_URL = RSA_SSA_PKCS1_PUBLIC_KEY_TYPE
    KEY_CLASS = rsa.RSAPrivateKey

    def _validate_params(self, params):
        _rsa_params(params)

    def _generate(self, params):
        modulus_size, public_exponent, _ = _rsa_params(params)
        return rsa.generate_private_key(public_exponent=public_exponent, key_size=modulus_size)

    def _make_signer(self, private_key, params):
        hash_name = _check_rsa_key(private_key, params)
        return RsaSsaPkcs1Sign(private_key, hash_name)


class RsaSsaPkcs1VerifyKeyManager(_VerifyKeyManager):
    TYPE_URL = RSA_SSA_PKCS1_PUBLIC_KEY_TYPE
    KEY_CLASS = rsa.RSAPublicKey

    def _validate_params(self, params):
        _rsa_params(params)

    def _make_verifier(self, public_key, params):
        hash_name = _check_rsa_key(public_key, params)
        return RsaSsaPkcs1Verify(public_key, hash_name)


# ----------------------------------------------------------------------
# HMAC
# ----------------------------------------------------------------------

def _hmac_params(params: Dict[str, Any]) -> Tuple[int, str, int]:
    key_size = params.get("key_size", 32)
    hash_name = params.get("hash", "SHA256")
    tag_size = params.get("tag_size", 32)
    _require(key_size >= MIN_HMAC_KEY_SIZE, f"HMAC key too small: {key_size}")
    _require(hash_name in HASH_ALGORITHMS, f"Unsupported HMAC hash: {hash_name}")
    digest_size = hash_algorithm(hash_name).digest_size
    _require(MIN_TAG_SIZE <= tag_size <= digest_size,
             f"HMAC tag size {tag_size} outside [{MIN_TAG_SIZE}, {digest_size}]")
    return key_size, hash_name, tag_size


class HmacKeyManager(KeyManager[Mac]):
    """Symmetric HMAC keys."""

    VERSION = 0

    @property
    def key_type(self) -> str:
        return HMAC_KEY_TYPE

    def primitive_class(self) -> type:
        return Mac

    def version(self) -> int:
        return self.VERSION

    def primitive(self, key_data: KeyData) -> Mac:
        self._check_key_data(key_data)
        _require(key_data.key_material_type == KeyMaterialType.SYMMETRIC,
                 "Expected symmetric key material for HMAC")
        _require(isinstance(key_data.value, bytes), "HMAC key material must be bytes")
        key_size, hash_name, tag_size = _hmac_params(key_data.params)
        _require(len(key_data.value) == key_size,
                 f"HMAC key is {len(key_data.value)} bytes, expected {key_size}")
        return HmacMac(key_data.value, hash_name, tag_size)

    def new_key_data(self, template: KeyTemplate) -> KeyData:
        _require(template.type_url == HMAC_KEY_TYPE,
                 f"Template type {template.type_url} not handled by HmacKeyManager")
        params = dict(template.params)
        key_size, _, _ = _hmac_params(params)
        params["key_size"] = key_size

        logger.info("key_material_generated", type_url=HMAC_KEY_TYPE)
        return KeyData(
            type_url=HMAC_KEY_TYPE,
            value=os.urandom(key_size),
            key_material_type=KeyMaterialType.SYMMETRIC,
            params=params,
        )
