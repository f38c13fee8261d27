"""
LWE parameter sets.

Correct decryption needs the accumulated noise r.e to stay below q/4, so
the modulus q, the Gaussian width sigma and the number of public samples m
must be chosen together. ``LWEParameters`` warns when its estimated failure
probability is above 5%.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Failure probability above which a parameter set is reported
FAILURE_WARNING_THRESHOLD = 0.05


@dataclass(frozen=True)
class LWEParameters:
    """
    LWE (Learning With Errors) parameters.

    Attributes:
        n: Dimension of the secret vector
        m: Number of public samples (rows of A)
        q: Modulus
        sigma: Standard deviation of the error distribution
    """
    n: int
    m: int
    q: int
    sigma: float

    def __post_init__(self):
        if self.n <= 0 or self.m <= 0:
            raise ValueError(f"Dimensions must be positive, got n={self.n}, m={self.m}")
        if self.q < 2:
            raise ValueError(f"Modulus q must be at least 2, got {self.q}")
        if self.sigma < 0:
            raise ValueError(f"sigma must be non-negative, got {self.sigma}")

        failure = self.failure_probability
        if failure > FAILURE_WARNING_THRESHOLD:
            logger.warning(f"LWE parameters n={self.n}, m={self.m}, q={self.q}, "
                           f"sigma={self.sigma} have estimated decryption failure "
                           f"probability {failure:.3g}")

    @property
    def failure_probability(self) -> float:
        """Estimated probability that one decryption returns the wrong bit."""
        # Deferred import: lwe imports this module
        from .lwe import decryption_failure_probability
        return decryption_failure_probability(self.q, self.m, self.sigma)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'LWEParameters':
        """Build parameters from a mapping with keys n, m, q, sigma."""
        missing = {'n', 'm', 'q', 'sigma'} - set(config)
        if missing:
            raise ValueError(f"Missing LWE parameters: {sorted(missing)}")
        return cls(n=int(config['n']), m=int(config['m']),
                   q=int(config['q']), sigma=float(config['sigma']))


_PRESETS = {
    'toy': {'n': 4, 'm': 8, 'q': 11, 'sigma': 0.5},
    'small': {'n': 16, 'm': 32, 'q': 257, 'sigma': 1.0},
    'medium': {'n': 64, 'm': 128, 'q': 4093, 'sigma': 2.0},
}


def lwe_parameters(name: str) -> LWEParameters:
    """
    Get a named LWE parameter set.

    Args:
        name: 'toy', 'small' or 'medium'

    Returns:
        LWEParameters for the preset
    """
    if name not in _PRESETS:
        raise ValueError(f"Unknown LWE parameter set: {name}")
    return LWEParameters.from_dict(_PRESETS[name])


def available_presets():
    """Names of the built-in parameter sets."""
    return sorted(_PRESETS)
