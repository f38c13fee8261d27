"""
Modular arithmetic over Z_q.

Scalar, vector and matrix operations used by the LWE scheme, the
polynomial ring engine and the RNS engine. Vectors are lists of Python
integers and matrices are lists of rows. Internally the arithmetic runs on
numpy arrays of ``dtype=object`` so that every product is formed with
arbitrary precision before the final reduction mod q.
"""

import numpy as np
from typing import List, Optional, Sequence


def _check_modulus(q: int):
    if q <= 0:
        raise ValueError(f"Modulus q must be positive, got {q}")


def as_int_array(values: Sequence[int]) -> np.ndarray:
    """Convert a vector of integers to an exact 1D object array."""
    array = np.empty(len(values), dtype=object)
    array[:] = [int(x) for x in values]
    return array


def as_matrix(rows: Sequence[Sequence[int]]) -> np.ndarray:
    """
    Convert a list of rows to an exact 2D object array.

    Raises:
        ValueError: If the matrix is empty or its rows differ in length
    """
    if len(rows) == 0:
        raise ValueError("Matrix must have at least one row")
    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Matrix row {i} has length {len(row)} != {width}")
    matrix = np.empty((len(rows), width), dtype=object)
    for i, row in enumerate(rows):
        matrix[i, :] = [int(x) for x in row]
    return matrix


def to_int_list(array: np.ndarray) -> List[int]:
    """Convert an object array back to a plain list of Python ints."""
    return [int(x) for x in array]


# Scalar operations

def mod_add(a: int, b: int, q: int) -> int:
    """(a + b) mod q."""
    return (a + b) % q


def mod_sub(a: int, b: int, q: int) -> int:
    """(a - b) mod q."""
    return (a - b) % q


def mod_mul(a: int, b: int, q: int) -> int:
    """(a * b) mod q."""
    return (a * b) % q


def center_mod(val: int, q: int) -> int:
    """
    Centered reduction of val modulo q.

    Maps val to the representative of smallest absolute value in
    (-q/2, q/2]. For q = 11 the residues 0..10 map to
    0, 1, 2, 3, 4, 5, -5, -4, -3, -2, -1.

    Args:
        val: Any integer
        q: Positive modulus

    Returns:
        Centered representative of val mod q
    """
    _check_modulus(q)
    v = val % q
    if v > q // 2:
        v -= q
    return v


def mod_inv(a: int, m: int) -> Optional[int]:
    """
    Modular inverse via the extended Euclidean algorithm.

    Args:
        a: Integer to invert
        m: Positive modulus

    Returns:
        x in [0, m) with (a * x) mod m == 1, or None if gcd(a, m) != 1
    """
    _check_modulus(m)
    old_r, r = a % m, m
    old_s, s = 1, 0
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s

    if old_r != 1:
        return None
    return old_s % m


# Vector and matrix operations

def add_vec(vec_1: Sequence[int], vec_2: Sequence[int], q: int) -> List[int]:
    """Elementwise (vec_1 + vec_2) mod q."""
    if len(vec_1) != len(vec_2):
        raise ValueError(f"Vector dimensions differ: {len(vec_1)} != {len(vec_2)}")
    _check_modulus(q)
    return to_int_list((as_int_array(vec_1) + as_int_array(vec_2)) % q)


def inner_product_and_add(vec_1: Sequence[int], vec_2: Sequence[int],
                          carry: int, q: int) -> int:
    """
    Sum of (vec_1[i] * vec_2[i] + carry) mod q over all i, reduced mod q.

    The carry is added to every term, so the result equals
    (vec_1 . vec_2 + len(vec_1) * carry) mod q. Empty vectors give 0.
    """
    if len(vec_1) != len(vec_2):
        raise ValueError(f"Vector dimensions differ: {len(vec_1)} != {len(vec_2)}")
    _check_modulus(q)
    terms = (as_int_array(vec_1) * as_int_array(vec_2) + carry) % q
    return int(sum(terms) % q)


def transpose_matrix(a: Sequence[Sequence[int]]) -> List[List[int]]:
    """Transpose a rectangular matrix given as a list of rows."""
    matrix = as_matrix(a)
    return [to_int_list(row) for row in matrix.T]


def matrix_mul_vector(a: Sequence[Sequence[int]], b: Sequence[int], q: int) -> List[int]:
    """
    Matrix-vector product a . b mod q.

    Args:
        a: m x n matrix (list of rows)
        b: Vector of length n
        q: Positive modulus

    Returns:
        Vector of length m with entries in [0, q)

    Raises:
        ValueError: If the column count of a differs from len(b)
    """
    _check_modulus(q)
    matrix = as_matrix(a)
    if matrix.shape[1] != len(b):
        raise ValueError(
            f"Matrix has {matrix.shape[1]} columns but vector has length {len(b)}")
    return to_int_list(np.dot(matrix, as_int_array(b)) % q)
