"""Core modular arithmetic, randomness and prime utilities."""

from .modular import (
    mod_add, mod_sub, mod_mul, center_mod, mod_inv,
    add_vec, inner_product_and_add, matrix_mul_vector, transpose_matrix,
)
from .primes import is_prime, sieve_primes, generate_primes, primes_up_to
from .randomness import (
    resolve_rng, random_residue,
    generate_random_vector, generate_random_matrix, generate_random_bit_vector,
)

__all__ = [
    "mod_add", "mod_sub", "mod_mul", "center_mod", "mod_inv",
    "add_vec", "inner_product_and_add", "matrix_mul_vector", "transpose_matrix",
    "is_prime", "sieve_primes", "generate_primes", "primes_up_to",
    "resolve_rng", "random_residue",
    "generate_random_vector", "generate_random_matrix", "generate_random_bit_vector",
]
