"""
Test configuration and fixtures for the latticearith package.

Provides seeded random generators, small reference parameter sets and the
custom pytest markers used across the suite.
"""

import numpy as np
import pytest

from latticearith.core import generate_primes
from latticearith.schemes import LWEParameters


@pytest.fixture(scope="session")
def test_seed():
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(test_seed):
    """Seeded numpy Generator, fresh for every test."""
    return np.random.default_rng(test_seed)


@pytest.fixture
def literal_lwe_instance():
    """Hand-checked LWE instance over Z_11."""
    return {
        'q': 11,
        'A': [[1, 2, 3], [4, 5, 6], [7, 8, 9]],
        's': [1, 2, 3],
        'e': [1, -1, -1],
        'b': [4, 9, 5],
        'r': [1, 0, 1],
        'u': [8, 10, 1],
        'v_one': 3,
        'v_zero': 9,
    }


@pytest.fixture
def toy_params():
    """Small LWE parameters with low decryption failure rate."""
    return LWEParameters(n=4, m=8, q=11, sigma=0.5)


@pytest.fixture(scope="session")
def rns_moduli():
    """First 20 primes, a pairwise coprime modulus set."""
    return generate_primes(20)


@pytest.fixture
def statistical_config():
    """Configuration for statistical tests."""
    return {
        'n_samples': 10000,      # Number of samples for distribution tests
        'n_trials': 1000,        # Number of trials for round-trip tests
        'max_failure_rate': 0.05,
        'statistical_rtol': 0.1,
    }


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual functions/methods"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for module interactions"
    )
    config.addinivalue_line(
        "markers", "statistical: Tests that verify statistical properties"
    )
    config.addinivalue_line(
        "markers", "edge_case: Tests for edge cases and error conditions"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test paths."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
