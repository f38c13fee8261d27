"""
Unit tests for modular arithmetic utilities.

Covers scalar operations, centered reduction, the modular inverse, and
the vector/matrix helpers used by the LWE scheme.
"""

import math

import numpy as np
import pytest

from latticearith.core import (
    mod_add, mod_sub, mod_mul, center_mod, mod_inv,
    add_vec, inner_product_and_add, matrix_mul_vector, transpose_matrix,
)


class TestScalarOperations:
    """Test scalar modular arithmetic."""

    def test_add_sub_mul(self):
        assert mod_add(7, 9, 11) == 5
        assert mod_sub(3, 9, 11) == 5
        assert mod_mul(7, 8, 11) == 1

    def test_results_are_canonical(self, rng):
        q = 97
        for _ in range(100):
            a, b = (int(x) for x in rng.integers(-1000, 1000, size=2))
            for result in (mod_add(a, b, q), mod_sub(a, b, q), mod_mul(a, b, q)):
                assert 0 <= result < q

    def test_large_operands_do_not_overflow(self):
        q = (1 << 127) - 1
        a = q - 1
        assert mod_mul(a, a, q) == 1


class TestCenterMod:
    """Test centered reduction into (-q/2, q/2]."""

    def test_center_mod_q11(self):
        centered = [center_mod(x, 11) for x in range(11)]
        assert centered == [0, 1, 2, 3, 4, 5, -5, -4, -3, -2, -1]

    def test_center_mod_even_modulus_keeps_half(self):
        # q/2 itself is in the half-open range (-q/2, q/2]
        assert center_mod(5, 10) == 5
        assert center_mod(6, 10) == -4

    def test_center_mod_reduces_first(self):
        assert center_mod(-1, 11) == -1
        assert center_mod(23, 11) == 1
        assert center_mod(-6, 11) == 5

    @pytest.mark.edge_case
    def test_center_mod_invalid_modulus(self):
        with pytest.raises(ValueError, match="must be positive"):
            center_mod(3, 0)


class TestModInverse:
    """Test extended-Euclid modular inverse."""

    def test_known_inverse(self):
        assert mod_inv(7, 5) == 3
        assert mod_inv(3, 11) == 4

    def test_inverse_property(self):
        m = 101
        for a in range(1, m):
            x = mod_inv(a, m)
            assert x is not None
            assert (a * x) % m == 1
            assert 0 <= x < m

    def test_no_inverse_when_not_coprime(self):
        assert mod_inv(6, 9) is None
        assert mod_inv(0, 7) is None
        assert mod_inv(10, 5) is None

    def test_negative_argument(self):
        x = mod_inv(-3, 11)
        assert x is not None
        assert (-3 * x) % 11 == 1

    def test_composite_modulus(self):
        for a in range(1, 36):
            x = mod_inv(a, 36)
            if math.gcd(a, 36) == 1:
                assert (a * x) % 36 == 1
            else:
                assert x is None


class TestVectorOperations:
    """Test vector and matrix helpers."""

    def test_add_vec(self):
        assert add_vec([1, 2, 10], [10, 9, 10], 11) == [0, 0, 9]

    def test_inner_product_and_add(self):
        # The carry joins every term: (4+1) + (10+1) + (18+1) = 35 = 2 (mod 11)
        assert inner_product_and_add([1, 2, 3], [4, 5, 6], 1, 11) == 2
        # (1+1) + (4+1) + (9+1) = 17 = 6 (mod 11)
        assert inner_product_and_add([1, 2, 3], [1, 2, 3], 1, 11) == 6
        # (4-1) + (10-1) + (18-1) = 29 = 7 (mod 11)
        assert inner_product_and_add([4, 5, 6], [1, 2, 3], -1, 11) == 7
        assert inner_product_and_add([], [], 5, 11) == 0

    def test_inner_product_and_add_matches_closed_form(self, rng):
        q = 257
        for _ in range(50):
            n = int(rng.integers(1, 10))
            v1 = [int(x) for x in rng.integers(-1000, 1000, size=n)]
            v2 = [int(x) for x in rng.integers(-1000, 1000, size=n)]
            carry = int(rng.integers(-50, 50))
            expected = (sum(a * b for a, b in zip(v1, v2)) + n * carry) % q
            assert inner_product_and_add(v1, v2, carry, q) == expected

    def test_transpose_matrix(self):
        matrix = [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]]
        expected = [[1, 4, 7, 10], [2, 5, 8, 11], [3, 6, 9, 12]]
        assert transpose_matrix(matrix) == expected

    def test_matrix_mul_vector(self):
        matrix = [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]]
        assert matrix_mul_vector(matrix, [1, 2, 3], 11) == [3, 10, 6, 2]

        matrix = [[2, 5, 1, 9], [7, 4, 8, 0], [6, 3, 2, 10]]
        assert matrix_mul_vector(matrix, [3, 7, 1, 4], 11) == [1, 2, 4]

    def test_matrix_mul_vector_returns_python_ints(self):
        matrix = np.array([[2**40, 1], [3, 2**40]], dtype=np.int64)
        result = matrix_mul_vector(matrix.tolist(), [2**40, 5], (1 << 61) - 1)
        assert all(type(x) is int for x in result)
        assert result[0] == (2**80 + 5) % ((1 << 61) - 1)

    def test_modular_closure(self, rng):
        q = 257
        matrix = rng.integers(0, 10**6, size=(6, 5)).tolist()
        vector = rng.integers(-10**6, 10**6, size=5).tolist()
        for x in matrix_mul_vector(matrix, vector, q):
            assert 0 <= x < q
        for x in add_vec(vector, vector, q):
            assert 0 <= x < q

    @pytest.mark.edge_case
    def test_dimension_mismatch(self):
        with pytest.raises(ValueError, match="columns"):
            matrix_mul_vector([[1, 2, 3]], [1, 2], 11)
        with pytest.raises(ValueError, match="differ"):
            add_vec([1, 2], [1], 11)
        with pytest.raises(ValueError, match="differ"):
            inner_product_and_add([1, 2], [1, 2, 3], 0, 11)

    @pytest.mark.edge_case
    def test_ragged_matrix_rejected(self):
        with pytest.raises(ValueError, match="row 1"):
            transpose_matrix([[1, 2], [3]])
