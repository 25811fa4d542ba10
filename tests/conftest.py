"""
Pytest configuration and shared fixtures for Merkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

SAMPLE_EMAILS = _common.SAMPLE_EMAILS
make_leaves = _common.make_leaves
hash_strings = _common.hash_strings


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def sample_emails():
    """The three sample e-mail addresses, in commitment order."""
    return list(SAMPLE_EMAILS)


@pytest.fixture
def email_leaves(sample_emails):
    """SHA-256 leaf digests of the sample e-mail addresses."""
    return hash_strings(sample_emails)


@pytest.fixture
def seven_leaves():
    """Seven leaves: odd lengths at levels 0 and 1."""
    return make_leaves(7)


@pytest.fixture(autouse=True)
def _clean_merkle_env(monkeypatch):
    """Keep MERKLE_* variables from the developer's shell out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("MERKLE_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
