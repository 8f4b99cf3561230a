"""
Pytest configuration and shared fixtures for MerkleDrop tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

ADDRESSES = _common.ADDRESSES
fixed_clock = _common.fixed_clock
make_records = _common.make_records
make_csv = _common.make_csv


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def addresses():
    """Provide the checksummed reference addresses."""
    return list(ADDRESSES)


@pytest.fixture
def records():
    """Provide four AllocationRecords of 1..4 ether."""
    return make_records()


@pytest.fixture
def sample_csv():
    """Provide a three-row CSV with header (1, 2 and 3 ether)."""
    return make_csv()


@pytest.fixture
def store(tmp_path):
    """Provide a DatasetStore persisting into a temporary directory."""
    from orchestrator.store import DatasetStore
    return DatasetStore(tmp_path / "merkle.json", clock=fixed_clock)


@pytest.fixture
def memory_store():
    """Provide a DatasetStore without persistence."""
    from orchestrator.store import DatasetStore
    return DatasetStore(clock=fixed_clock)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
