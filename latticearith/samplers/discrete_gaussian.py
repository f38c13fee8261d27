"""
Discrete Gaussian Samplers for Lattice Cryptography.

Integer-valued error terms for LWE and Ring-LWE. Two samplers are provided:

- ``RoundingSampler``: draw y ~ N(c, sigma^2) and round to the nearest
  integer. This is the sampler used for LWE error vectors and Gaussian
  polynomial coefficients.
- ``RejectionSampler``: exact sampling from D_{Z,sigma,c}, where
  D_{Z,sigma,c}(x) is proportional to exp(-(x-c)^2 / (2 sigma^2)), by
  rounding a continuous sample and accepting with probability
  exp(-(x-y)^2 / (2 sigma^2)), with a tail cut at tau * sigma.

References:
    - Peikert, C. (2010). "An Efficient and Parallel Gaussian Sampler for Lattices"
    - Regev, O. (2005). "On Lattices, Learning with Errors, Random Linear Codes,
      and Cryptography"
"""

import math
import numpy as np
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from ..core.randomness import RandomSource, resolve_rng


class DiscreteGaussianSampler(ABC):
    """Abstract base class for one-dimensional discrete Gaussian samplers."""

    def __init__(self, sigma: float, center: float = 0.0, rng: RandomSource = None):
        if not np.isfinite(sigma):
            raise ValueError(f"sigma must be finite, got {sigma}")
        self.sigma = float(sigma)
        self.center = float(center)
        self.rng = resolve_rng(rng)

    @abstractmethod
    def sample_one(self) -> int:
        """Draw a single integer."""
        pass

    def sample_vector(self, n: int) -> List[int]:
        """Draw n independent samples as a list."""
        return [self.sample_one() for _ in range(n)]

    def sample(self, n: int = 1) -> Union[int, List[int]]:
        """
        Sample from the distribution.

        Args:
            n: Number of samples

        Returns:
            Single integer if n=1, list of integers otherwise
        """
        samples = self.sample_vector(n)
        return samples[0] if n == 1 else samples


class RoundingSampler(DiscreteGaussianSampler):
    """
    Rounded continuous Gaussian.

    sigma = 0 is allowed and always yields round(center).
    """

    def __init__(self, sigma: float, center: float = 0.0, rng: RandomSource = None):
        if sigma < 0:
            raise ValueError(f"sigma must be non-negative, got {sigma}")
        super().__init__(sigma, center, rng)

    def sample_one(self) -> int:
        return int(round(self.rng.normal(self.center, self.sigma)))

    def sample_vector(self, n: int) -> List[int]:
        values = np.rint(self.rng.normal(self.center, self.sigma, size=n))
        return [int(x) for x in values]


class RejectionSampler(DiscreteGaussianSampler):
    """
    Rejection sampling for discrete Gaussian D_{Z,sigma,c}.

    ALGORITHM:
        1. Sample y from continuous Gaussian N(c, sigma^2)
        2. Round to nearest integer x
        3. Reject x outside [c - tau*sigma, c + tau*sigma]
        4. Accept x with probability exp(-(x-y)^2 / (2 sigma^2))
    """

    def __init__(self, sigma: float, center: float = 0.0,
                 tail_bound: Optional[float] = None, rng: RandomSource = None):
        """
        Initialize rejection sampler.

        Args:
            sigma: Standard deviation sigma > 0
            center: Center c (can be any real number)
            tail_bound: Tail cut parameter tau (default: 12)
            rng: Randomness source
        """
        if sigma <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")
        super().__init__(sigma, center, rng)

        self.tail_bound = float(tail_bound if tail_bound is not None else 12.0)
        self.two_sigma_sq = 2 * self.sigma ** 2
        self.log_normalizer = None  # Computed on demand

        self.min_support = int(math.floor(self.center - self.tail_bound * self.sigma))
        self.max_support = int(math.ceil(self.center + self.tail_bound * self.sigma))

    def sample_one(self) -> int:
        while True:
            y = self.rng.normal(self.center, self.sigma)
            x = int(round(y))

            if x < self.min_support or x > self.max_support:
                continue

            t = x - y
            if self.rng.random() <= math.exp(-t * t / self.two_sigma_sq):
                return x

    def log_probability(self, x: int) -> float:
        """
        Compute log probability log P(X = x).

        Values outside the tail-cut support have probability zero.
        """
        if x < self.min_support or x > self.max_support:
            return float('-inf')
        if self.log_normalizer is None:
            self._compute_normalizer()
        return -(x - self.center) ** 2 / self.two_sigma_sq - self.log_normalizer

    def _compute_normalizer(self):
        """Compute normalization constant over the support."""
        support = np.arange(self.min_support, self.max_support + 1)
        weights = np.exp(-(support - self.center) ** 2 / self.two_sigma_sq)
        self.log_normalizer = float(np.log(weights.sum()))

    def probability(self, x: int) -> float:
        """Compute probability P(X = x)."""
        return float(math.exp(self.log_probability(x)))


def _make_sampler(sigma: float, rng: RandomSource, method: str) -> DiscreteGaussianSampler:
    if method == 'round':
        return RoundingSampler(sigma, rng=rng)
    elif method == 'rejection':
        return RejectionSampler(sigma, rng=rng)
    else:
        raise ValueError(f"Unknown sampling method: {method}")


def sample_discrete_gaussian(sigma: float, rng: RandomSource = None,
                             method: str = 'round') -> int:
    """
    Sample a single integer error term.

    Args:
        sigma: Standard deviation (non-negative for 'round', positive for
            'rejection')
        rng: Randomness source
        method: 'round' or 'rejection'

    Returns:
        Integer sample centered at 0
    """
    return _make_sampler(sigma, rng, method).sample_one()


def sample_discrete_gaussian_vector(sigma: float, m: int, rng: RandomSource = None,
                                    method: str = 'round') -> List[int]:
    """Sample a length-m vector of independent error terms."""
    if m < 0:
        raise ValueError(f"Vector length must be non-negative, got {m}")
    return _make_sampler(sigma, rng, method).sample_vector(m)
