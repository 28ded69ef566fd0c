"""
Signature Key Templates

Ready-made templates for generating signing keys.
"""

from core.key_data import KeyTemplate, OutputPrefixType
from crypto.keys import (
    ECDSA_PRIVATE_KEY_TYPE,
    ED25519_PRIVATE_KEY_TYPE,
    RSA_SSA_PKCS1_PRIVATE_KEY_TYPE,
    RSA_SSA_PSS_PRIVATE_KEY_TYPE,
)


def ecdsa_template(curve: str, hash_name: str,
                   output_prefix_type: OutputPrefixType = OutputPrefixType.TINK) -> KeyTemplate:
    return KeyTemplate(
        type_url=ECDSA_PRIVATE_KEY_TYPE,
        output_prefix_type=output_prefix_type,
        params={"curve": curve, "hash": hash_name},
    )


def rsa_ssa_pss_template(modulus_size: int, hash_name: str, salt_length: int,
                         output_prefix_type: OutputPrefixType = OutputPrefixType.TINK) -> KeyTemplate:
    return KeyTemplate(
        type_url=RSA_SSA_PSS_PRIVATE_KEY_TYPE,
        output_prefix_type=output_prefix_type,
        params={
            "modulus_size": modulus_size,
            "public_exponent": 65537,
            "hash": hash_name,
            "salt_length": salt_length,
        },
    )


def rsa_ssa_pkcs1_template(modulus_size: int, hash_name: str,
                           output_prefix_type: OutputPrefixType = OutputPrefixType.TINK) -> KeyTemplate:
    return KeyTemplate(
        type_url=RSA_SSA_PKCS1_PRIVATE_KEY_TYPE,
        output_prefix_type=output_prefix_type,
        params={"modulus_size": modulus_size, "public_exponent": 65537, "hash": hash_name},
    )


ECDSA_P256 = ecdsa_template("NIST_P256", "SHA256")
ECDSA_P256_RAW = ecdsa_template("NIST_P256", "SHA256", OutputPrefixType.RAW)
ECDSA_P384 = ecdsa_template("NIST_P384", "SHA384")

ED25519 = KeyTemplate(type_url=ED25519_PRIVATE_KEY_TYPE)
ED25519_RAW = KeyTemplate(type_url=ED25519_PRIVATE_KEY_TYPE, output_prefix_type=OutputPrefixType.RAW)

RSA_SSA_PSS_3072_SHA256 = rsa_ssa_pss_template(3072, "SHA256", 32)
RSA_SSA_PKCS1_3072_SHA256 = rsa_ssa_pkcs1_template(3072, "SHA256")
