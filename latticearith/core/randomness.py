"""
Explicit randomness handles.

Every operation that needs entropy takes an ``rng`` argument instead of
reaching for a process-wide generator. ``rng`` may be a
``numpy.random.Generator``, an integer seed, or None for a fresh generator
seeded from the operating system.
"""

import numpy as np
from typing import List, Optional, Union

RandomSource = Optional[Union[int, np.random.Generator]]

# Largest modulus that numpy's integer sampler handles directly
_MAX_NATIVE_MODULUS = 2**62


def resolve_rng(rng: RandomSource = None) -> np.random.Generator:
    """Normalise a seed, generator or None into a numpy Generator."""
    return np.random.default_rng(rng)


def random_residue(rng: np.random.Generator, q: int) -> int:
    """Draw one integer uniformly from [0, q)."""
    if q <= 0:
        raise ValueError(f"Modulus q must be positive, got {q}")
    if q <= _MAX_NATIVE_MODULUS:
        return int(rng.integers(0, q))

    # Rejection sampling from raw bytes for wide moduli
    bits = (q - 1).bit_length()
    n_bytes = (bits + 7) // 8
    excess = 8 * n_bytes - bits
    while True:
        x = int.from_bytes(rng.bytes(n_bytes), "little") >> excess
        if x < q:
            return x


def generate_random_vector(n: int, q: int, rng: RandomSource = None) -> List[int]:
    """
    Vector of n residues drawn uniformly from [0, q).

    Args:
        n: Length of the vector
        q: Positive modulus
        rng: Randomness source

    Returns:
        List of n Python ints
    """
    if n < 0:
        raise ValueError(f"Vector length must be non-negative, got {n}")
    if q <= 0:
        raise ValueError(f"Modulus q must be positive, got {q}")
    rng = resolve_rng(rng)
    if q <= _MAX_NATIVE_MODULUS:
        return [int(x) for x in rng.integers(0, q, size=n)]
    return [random_residue(rng, q) for _ in range(n)]


def generate_random_matrix(m: int, n: int, q: int,
                           rng: RandomSource = None) -> List[List[int]]:
    """m x n matrix of residues drawn uniformly from [0, q)."""
    rng = resolve_rng(rng)
    return [generate_random_vector(n, q, rng) for _ in range(m)]


def generate_random_bit_vector(m: int, rng: RandomSource = None) -> List[int]:
    """Vector of m uniform bits."""
    return generate_random_vector(m, 2, rng)
