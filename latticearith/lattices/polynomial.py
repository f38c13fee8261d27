"""
Polynomial arithmetic in Z_q[x]/(x^n - 1) and Z_q[x]/(x^n + 1).

A ring element is stored as its n coefficients [a_0, ..., a_{n-1}] in
increasing degree. The same representation serves the cyclic ring (``multiply``,
x^n = 1) and the negacyclic ring used by Ring-LWE (``negacyclic_multiply``,
x^n = -1). The modulus is passed to each operation.

Multiplication is schoolbook O(n^2); products are formed on Python integers
so no intermediate can overflow before reduction mod q.

EXAMPLES::

    >>> p = Polynomial.from_coeffs([0, 0, 0, 1], 100)   # x^3
    >>> p.negacyclic_multiply(p, 100).coefficients      # x^6 = -x^2
    [0, 0, 99, 0]
"""

import numpy as np
from typing import Sequence

from ..core.modular import as_int_array, to_int_list
from ..core.randomness import RandomSource, resolve_rng, generate_random_vector
from ..samplers.discrete_gaussian import sample_discrete_gaussian_vector


class Polynomial:
    """
    Element of a quotient ring Z_q[x]/(x^n +- 1).

    Attributes:
        coefficients: List of n integer coefficients, lowest degree first
        degree: Number of coefficients n (the ring dimension)
    """

    def __init__(self, coefficients: Sequence[int]):
        self.coefficients = [int(c) for c in coefficients]
        self.degree = len(self.coefficients)

    @classmethod
    def zero(cls, degree: int) -> 'Polynomial':
        """The zero polynomial with the given number of coefficients."""
        return cls([0] * degree)

    @classmethod
    def constant(cls, value: int, degree: int) -> 'Polynomial':
        """Constant polynomial value + 0x + ... + 0x^{n-1}."""
        if degree < 1:
            raise ValueError(f"degree must be positive, got {degree}")
        return cls([value] + [0] * (degree - 1))

    @classmethod
    def from_coeffs(cls, coeffs: Sequence[int], q: int) -> 'Polynomial':
        """Build a polynomial from coefficients, reducing each into [0, q)."""
        return cls(coeffs).mod_reduce(q)

    @classmethod
    def random_uniform(cls, degree: int, q: int, rng: RandomSource = None) -> 'Polynomial':
        """Coefficients drawn uniformly from [0, q)."""
        return cls(generate_random_vector(degree, q, rng))

    @classmethod
    def random_binary(cls, degree: int, rng: RandomSource = None) -> 'Polynomial':
        """Coefficients drawn uniformly from {0, 1}."""
        return cls(generate_random_vector(degree, 2, rng))

    @classmethod
    def random_gaussian(cls, degree: int, sigma: float, q: int,
                        rng: RandomSource = None) -> 'Polynomial':
        """
        Coefficients drawn from a rounded Gaussian with standard deviation sigma.

        Negative samples are mapped to their additive inverse mod q, so a
        sample of -1 becomes q - 1.
        """
        rng = resolve_rng(rng)
        return cls.from_coeffs(sample_discrete_gaussian_vector(sigma, degree, rng), q)

    def _check_compatible(self, other: 'Polynomial'):
        if self.degree != other.degree:
            raise ValueError(
                f"Polynomials must have same degree: {self.degree} != {other.degree}")

    def _array(self) -> np.ndarray:
        return as_int_array(self.coefficients)

    def add(self, other: 'Polynomial', q: int) -> 'Polynomial':
        """Coefficient-wise sum mod q."""
        self._check_compatible(other)
        return Polynomial(to_int_list((self._array() + other._array()) % q))

    def subtract(self, other: 'Polynomial', q: int) -> 'Polynomial':
        """Coefficient-wise difference mod q."""
        self._check_compatible(other)
        return Polynomial(to_int_list((self._array() - other._array()) % q))

    def negate(self, q: int) -> 'Polynomial':
        """Additive inverse mod q."""
        return Polynomial(to_int_list((-self._array()) % q))

    def _convolve(self, other: 'Polynomial') -> np.ndarray:
        """Full linear convolution of length 2n - 1 (unreduced)."""
        n = self.degree
        full = np.zeros(max(2 * n - 1, 0), dtype=object)
        b = other._array()
        for i, a_i in enumerate(self.coefficients):
            if a_i:
                full[i:i + n] += a_i * b
        return full

    def multiply(self, other: 'Polynomial', q: int) -> 'Polynomial':
        """
        Cyclic product mod (x^n - 1, q).

        Coefficient k accumulates a_i * b_j over all i + j = k (mod n).
        """
        self._check_compatible(other)
        n = self.degree
        full = self._convolve(other)
        result = full[:n].copy()
        result[:n - 1] += full[n:]
        return Polynomial(to_int_list(result % q))

    def negacyclic_multiply(self, other: 'Polynomial', q: int) -> 'Polynomial':
        """
        Negacyclic product mod (x^n + 1, q).

        Terms are folded in row order (i outer, j inner), skipping zero
        coefficients. Whenever i + j >= n the product wraps to slot
        (i + j) mod n and, since x^n = -1, the value accumulated at that
        slot is negated after the term is added.
        """
        self._check_compatible(other)
        n = self.degree
        result = [0] * n
        for i, a_i in enumerate(self.coefficients):
            if not a_i:
                continue
            for j, b_j in enumerate(other.coefficients):
                if not b_j:
                    continue
                k = (i + j) % n
                result[k] = (result[k] + a_i * b_j) % q
                if i + j >= n:
                    result[k] = -result[k] % q
        return Polynomial(result)

    def mod_reduce(self, q: int) -> 'Polynomial':
        """Return a copy with every coefficient in [0, q)."""
        if q <= 0:
            raise ValueError(f"Modulus q must be positive, got {q}")
        return Polynomial([c % q for c in self.coefficients])

    def norm(self) -> int:
        """Infinity norm: the largest stored coefficient (0 if empty)."""
        return max(self.coefficients, default=0)

    def __len__(self) -> int:
        return self.degree

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coefficients == other.coefficients

    def __repr__(self) -> str:
        return f"Polynomial(degree={self.degree}, coefficients={self.coefficients})"
