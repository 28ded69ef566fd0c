"""
Keyrail CLI

Commands:
  entries   - Print a configuration's registration table
  register  - Register a configuration into a fresh registry and list key types
  selftest  - Round-trip the built-in signature and MAC templates (RSA with --with-rsa)
"""

import argparse
import os
import sys


def _configs():
    from signature.config import SignatureConfig
    from mac.config import MacConfig

    return {
        "signature": SignatureConfig,
        "mac": MacConfig,
    }


def _config_class(name):
    configs = _configs()
    config = configs.get(name.lower())
    if config is None:
        print(f"Error: Unknown config '{name}'. Use: {list(configs.keys())}")
        sys.exit(1)
    return config


def cmd_entries(args):
    """Print a configuration's registration table."""
    config = _config_class(args.config).latest()

    print(f"{config.config_name} ({config.entry_size()} entries)")
    print("=" * 40)
    for i, entry in enumerate(config):
        print(f"[{i}] {entry.type_url}")
        print(f"  Catalogue: {entry.catalogue_name}")
        print(f"  Primitive: {entry.primitive_name}")
        print(f"  New keys allowed: {'Yes' if entry.new_key_allowed else 'No'}")
        print(f"  Key manager version: {entry.key_manager_version}")


def cmd_register(args):
    """Register a configuration into a fresh registry."""
    from core.errors import KeyrailError
    from core.registry import Registry

    registry = Registry()
    try:
        _config_class(args.config).register(registry)
    except KeyrailError as e:
        print(f"Registration failed: {e}")
        sys.exit(1)

    print(repr(registry))
    for type_url in registry.key_types():
        manager = registry.get_key_manager(type_url)
        print(f"  {type_url} -> {type(manager).__name__} v{manager.version()}")


def cmd_selftest(args):
    """Round-trip every built-in template through a wrapped primitive."""
    from core.errors import KeyrailError
    from core.registry import Registry
    from crypto.mac import Mac
    from crypto.signer import PublicKeySign, PublicKeyVerify
    from keyset.handle import KeysetHandle
    from mac import config as mac_config
    from mac.config import MacConfig
    from signature import key_templates
    from signature.config import SignatureConfig

    registry = Registry()
    SignatureConfig.register(registry)
    MacConfig.register(registry)

    signature_templates = {
        "ECDSA_P256": key_templates.ECDSA_P256,
        "ECDSA_P384": key_templates.ECDSA_P384,
        "ED25519": key_templates.ED25519,
        "ED25519_RAW": key_templates.ED25519_RAW,
    }
    if args.with_rsa:
        signature_templates["RSA_SSA_PSS_3072_SHA256"] = key_templates.RSA_SSA_PSS_3072_SHA256
        signature_templates["RSA_SSA_PKCS1_3072_SHA256"] = key_templates.RSA_SSA_PKCS1_3072_SHA256

    mac_templates = {
        "HMAC_SHA256_128BITTAG": mac_config.HMAC_SHA256_128BITTAG,
        "HMAC_SHA512_512BITTAG": mac_config.HMAC_SHA512_512BITTAG,
    }

    message = args.message.encode("utf-8")
    failures = 0

    for name, template in signature_templates.items():
        try:
            private_handle = KeysetHandle.generate_new(template, registry)
            signer = private_handle.primitive(PublicKeySign, registry)
            verifier = private_handle.public_keyset_handle(registry).primitive(PublicKeyVerify, registry)
            result = signer.sign(message)
            ok = verifier.verify(message, result.signature).valid
            rejects = not verifier.verify(message + b"!", result.signature).valid
        except KeyrailError as e:
            print(f"  {name}: ERROR {e}")
            failures += 1
            continue
        if ok and rejects:
            print(f"  {name}: OK")
        else:
            print(f"  {name}: FAIL")
            failures += 1

    for name, template in mac_templates.items():
        try:
            mac = KeysetHandle.generate_new(template, registry).primitive(Mac, registry)
            tag = mac.compute_mac(message)
            ok = mac.verify_mac(message, tag).valid
            rejects = not mac.verify_mac(message + b"!", tag).valid
        except KeyrailError as e:
            print(f"  {name}: ERROR {e}")
            failures += 1
            continue
        if ok and rejects:
            print(f"  {name}: OK")
        else:
            print(f"  {name}: FAIL")
            failures += 1

    if failures:
        print(f"{failures} template(s) failed")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        description="Keyrail - Primitive registry and keyset dispatch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")
    default_config = os.environ.get("KEYRAIL_CONFIG", "signature")

    # entries
    entries_parser = subparsers.add_parser("entries", help="Print a registration table")
    entries_parser.add_argument("--config", default=default_config, help="signature or mac")

    # register
    register_parser = subparsers.add_parser("register", help="Register a config and list key types")
    register_parser.add_argument("--config", default=default_config, help="signature or mac")

    # selftest
    selftest_parser = subparsers.add_parser("selftest", help="Round-trip built-in templates")
    selftest_parser.add_argument("--message", default="signed text")
    selftest_parser.add_argument("--with-rsa", action="store_true", help="Include slow RSA key generation")

    args = parser.parse_args()

    if args.command == "entries":
        cmd_entries(args)
    elif args.command == "register":
        cmd_register(args)
    elif args.command == "selftest":
        cmd_selftest(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
