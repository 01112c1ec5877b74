"""
Pytest configuration and shared fixtures for the airdrop builder tests.

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
_vectors = importlib.import_module("fixtures.vectors")

make_records = _common.make_records
make_artifact = _common.make_artifact
write_csv = _common.write_csv


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_airdrop_env(monkeypatch):
    """Keep AIRDROP_* variables from the developer's shell out of tests."""
    for name in [
        "AIRDROP_INPUT_PATH",
        "AIRDROP_OUTPUT_DIR",
        "AIRDROP_OUTPUT_FILE",
        "AIRDROP_WORKERS",
        "AIRDROP_VERIFY_PROOFS",
        "AIRDROP_LOG_LEVEL",
        "AIRDROP_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def records():
    """Provide the Alice/Bob/Creator records."""
    return make_records()


@pytest.fixture
def artifact():
    """Provide a valid three-entry artifact."""
    return make_artifact(3)


@pytest.fixture
def two_entry_csv(tmp_path):
    """Provide a recipient CSV with Alice and Bob."""
    return write_csv(tmp_path / "airdrop.csv", _vectors.TWO_ENTRY_CSV)


@pytest.fixture
def three_entry_csv(tmp_path):
    """Provide a recipient CSV with Alice, Bob and Creator."""
    return write_csv(tmp_path / "airdrop.csv", _vectors.THREE_ENTRY_CSV)


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


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
