"""
Pytest Configuration and Fixtures
"""

import os
import sys
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

from core.registry import Registry  # noqa: E402
from mac.config import MacConfig  # noqa: E402
from signature.config import SignatureConfig  # noqa: E402


@pytest.fixture
def registry():
    """An empty registry."""
    registry = Registry()
    yield registry
    registry.reset()


@pytest.fixture
def signature_registry(registry):
    """A registry with the signature configuration registered."""
    SignatureConfig.register(registry)
    return registry


@pytest.fixture
def mac_registry(registry):
    """A registry with the MAC configuration registered."""
    MacConfig.register(registry)
    return registry


@pytest.fixture
def fast_rsa_params():
    """RSA parameters small enough to keep key generation quick."""
    return {"modulus_size": 2048, "public_exponent": 65537, "hash": "SHA256"}
