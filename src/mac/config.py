"""
MAC Configuration

Registration table, catalogue and templates for MAC key types.
"""

from core.catalogue import KeyManagerCatalogue
from core.config import KeyTypeEntry, NamedConfig
from core.key_data import KeyTemplate, OutputPrefixType
from crypto.keys import HMAC_KEY_TYPE, HmacKeyManager
from crypto.mac import Mac

from .wrapper import MacWrapper

MAC_CATALOGUE_NAME = "KeyrailMac"
MAC_PRIMITIVE_NAME = "Mac"


class MacCatalogue(KeyManagerCatalogue):
    def __init__(self):
        super().__init__(MAC_PRIMITIVE_NAME, Mac, [HmacKeyManager])


class MacConfig(NamedConfig):
    """MAC key types, first release."""

    CONFIG_NAME = "KEYRAIL_MAC_1_0_0"
    ENTRIES = (
        KeyTypeEntry(
            catalogue_name=MAC_CATALOGUE_NAME,
            primitive_name=MAC_PRIMITIVE_NAME,
            type_url=HMAC_KEY_TYPE,
            new_key_allowed=True,
            key_manager_version=0,
        ),
    )
    CATALOGUES = {MAC_CATALOGUE_NAME: MacCatalogue()}
    WRAPPERS = {MAC_PRIMITIVE_NAME: MacWrapper()}


def hmac_template(key_size: int, tag_size: int, hash_name: str,
                  output_prefix_type: OutputPrefixType = OutputPrefixType.TINK) -> KeyTemplate:
    return KeyTemplate(
        type_url=HMAC_KEY_TYPE,
        output_prefix_type=output_prefix_type,
        params={"key_size": key_size, "tag_size": tag_size, "hash": hash_name},
    )


HMAC_SHA256_128BITTAG = hmac_template(32, 16, "SHA256")
HMAC_SHA256_256BITTAG = hmac_template(32, 32, "SHA256")
HMAC_SHA512_512BITTAG = hmac_template(64, 64, "SHA512")
