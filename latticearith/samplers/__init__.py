"""Discrete Gaussian samplers for lattice error terms."""

from .discrete_gaussian import (
    DiscreteGaussianSampler,
    RoundingSampler,
    RejectionSampler,
    sample_discrete_gaussian,
    sample_discrete_gaussian_vector,
)

__all__ = [
    "DiscreteGaussianSampler", "RoundingSampler", "RejectionSampler",
    "sample_discrete_gaussian", "sample_discrete_gaussian_vector",
]
