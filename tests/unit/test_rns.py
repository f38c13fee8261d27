"""
Unit tests for the RNS/CRT engine.

Round-trip and homomorphism properties are checked over random values with
the first k primes as moduli.
"""

from functools import reduce
from operator import mul

import numpy as np
import pytest

from latticearith.core import generate_primes
from latticearith.lattices import (
    RnsValue, construct, add_res, sub_res, mul_res,
    crt_coefficients, deconstruct, deconstruct_signed,
)


def product(moduli):
    return reduce(mul, moduli, 1)


class TestConstruct:
    """Test forward decomposition."""

    def test_residues(self):
        value = construct(100, [3, 5, 7])
        assert value.residues == (1, 0, 2)
        assert value.moduli == (3, 5, 7)
        assert value.modulus == 105
        assert len(value) == 3

    def test_negative_input_reduced(self):
        assert construct(-1, [3, 5, 7]).residues == (2, 4, 6)

    def test_numpy_moduli(self):
        value = construct(np.int64(100), np.array([3, 5, 7]))
        assert value.residues == (1, 0, 2)
        assert all(type(r) is int for r in value.residues)
        assert deconstruct(value) == 100
        with pytest.raises(ValueError, match="At least one modulus"):
            construct(5, np.array([], dtype=np.int64))

    @pytest.mark.edge_case
    def test_invalid_moduli(self):
        with pytest.raises(ValueError, match="At least one modulus"):
            construct(5, [])
        with pytest.raises(ValueError, match="must be positive"):
            construct(5, [3, 0])

    @pytest.mark.edge_case
    def test_mismatched_lengths(self):
        with pytest.raises(ValueError, match="residues"):
            RnsValue((1, 2), (3,))


class TestReconstruction:
    """Test CRT reconstruction."""

    def test_round_trip_random(self, rng):
        for _ in range(100):
            k = int(rng.integers(1, 21))
            moduli = generate_primes(k)
            Q = product(moduli)
            x = int(rng.integers(0, min(Q, 2**62)))
            assert deconstruct(construct(x, moduli)) == x

    def test_round_trip_five_digit_values(self, rng, rns_moduli):
        for _ in range(100):
            x = int(rng.integers(10000, 100000))
            assert deconstruct(construct(x, rns_moduli)) == x

    def test_round_trip_full_range(self, rns_moduli):
        Q = product(rns_moduli)
        for x in (0, 1, Q // 2, Q - 1):
            assert deconstruct(construct(x, rns_moduli)) == x

    def test_bare_residue_sequence(self):
        assert deconstruct([1, 0, 2], [3, 5, 7]) == 100

    def test_out_of_range_wraps_mod_Q(self):
        moduli = [3, 5, 7]
        assert deconstruct(construct(105 + 4, moduli)) == 4
        assert deconstruct(construct(-1, moduli)) == 104

    def test_signed_reconstruction(self):
        moduli = [3, 5, 7]
        assert deconstruct_signed(construct(-1, moduli)) == -1
        assert deconstruct_signed(construct(52, moduli)) == 52
        assert deconstruct_signed(construct(-52, moduli)) == -52
        assert deconstruct_signed([2, 4, 6], moduli) == -1

    def test_crt_coefficients(self):
        moduli = [3, 5, 7]
        for q_i, (Q_i, M_i) in zip(moduli, crt_coefficients(moduli)):
            assert Q_i == 105 // q_i
            assert (Q_i * M_i) % q_i == 1

    @pytest.mark.edge_case
    def test_non_coprime_moduli_rejected(self):
        with pytest.raises(ValueError, match="not coprime"):
            deconstruct(construct(10, [4, 6]))


class TestHomomorphism:
    """Test that componentwise ops agree with arithmetic mod Q."""

    @pytest.mark.parametrize("op, res_op", [
        (lambda a, b: a + b, add_res),
        (lambda a, b: a - b, sub_res),
        (lambda a, b: a * b, mul_res),
    ])
    def test_operation_matches_integer_arithmetic(self, rng, rns_moduli, op, res_op):
        Q = product(rns_moduli)
        for _ in range(100):
            x = int(rng.integers(10000, 100000))
            y = int(rng.integers(10000, 100000))
            result = res_op(construct(x, rns_moduli), construct(y, rns_moduli))
            assert deconstruct(result) == op(x, y) % Q

    def test_large_products(self, rng):
        moduli = generate_primes(40)
        Q = product(moduli)
        x = Q // 3 + 12345
        y = Q // 7 + 999
        result = mul_res(construct(x, moduli), construct(y, moduli))
        assert deconstruct(result) == (x * y) % Q

    def test_residues_stay_canonical(self, rns_moduli):
        x = construct(99999, rns_moduli)
        y = construct(12345, rns_moduli)
        for result in (add_res(x, y), sub_res(y, x), mul_res(x, y)):
            assert all(0 <= r < q for r, q in zip(result.residues, result.moduli))

    @pytest.mark.edge_case
    def test_mismatched_moduli(self):
        with pytest.raises(ValueError, match="different moduli"):
            add_res(construct(1, [3, 5]), construct(1, [3, 7]))
