"""
Regev-style LWE public-key encryption of single bits.

Key generation publishes (A, b = A.s + e mod q) for a uniform m x n matrix
A, a secret s in Z_q^n and a small Gaussian error e. A bit is encrypted by
summing a random subset of the public samples, selected by a fresh binary
vector r:

    u = A^T . r (mod q)
    v = b . r + bit * floor(q/2) (mod q)

Decryption computes t = v - u.s = r.e + bit * floor(q/2) (mod q), centres t
into (-q/2, q/2], and decodes 0 when |t| <= q/4 and 1 otherwise.

Decryption threshold:
    The result is correct exactly when the accumulated noise |r.e| stays
    below q/4. This is a statistical property of (q, m, sigma), not
    something decrypt can detect: a noisy ciphertext silently decodes to
    the wrong bit. ``decryption_failure_probability`` estimates how often
    that happens for a parameter set.

This implementation is not constant-time.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass
from scipy import stats
from scipy.special import erfc
from typing import Iterable, List, Sequence, Tuple, Union

from ..core.modular import as_int_array, as_matrix, center_mod, to_int_list
from ..core.randomness import (
    RandomSource, resolve_rng,
    generate_random_vector, generate_random_matrix, generate_random_bit_vector,
)
from ..samplers.discrete_gaussian import sample_discrete_gaussian_vector
from .parameters import LWEParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecretKey:
    """LWE secret key: vector s of length n over Z_q."""
    s: List[int]

    def __repr__(self) -> str:
        return f"SecretKey(n={len(self.s)})"


@dataclass(frozen=True)
class PublicKey:
    """LWE public key (A, b) with b = A.s + e mod q."""
    A: List[List[int]]
    b: List[int]

    @property
    def m(self) -> int:
        """Number of public samples."""
        return len(self.A)

    @property
    def n(self) -> int:
        """Secret dimension."""
        return len(self.A[0]) if self.A else 0

    def __iter__(self):
        return iter((self.A, self.b))


@dataclass(frozen=True)
class Ciphertext:
    """Encryption (u, v) of one bit."""
    u: List[int]
    v: int

    def __iter__(self):
        return iter((self.u, self.v))


def _secret_vector(s: Union[SecretKey, Sequence[int]]) -> Sequence[int]:
    return s.s if isinstance(s, SecretKey) else s


def generate_public_key(A: Sequence[Sequence[int]], s: Union[SecretKey, Sequence[int]],
                        e: Sequence[int], q: int) -> PublicKey:
    """
    Compute the public key b = A.s + e (mod q).

    Args:
        A: m x n matrix over Z_q
        s: Secret vector of length n
        e: Error vector of length m (entries may be negative)
        q: Modulus

    Returns:
        PublicKey (A, b) with every entry of b in [0, q)

    Raises:
        ValueError: If the dimensions of A, s and e disagree
    """
    if q <= 0:
        raise ValueError(f"Modulus q must be positive, got {q}")
    s = _secret_vector(s)
    matrix = as_matrix(A)
    m, n = matrix.shape
    if n != len(s):
        raise ValueError(f"Rows of A have length {n} but secret has length {len(s)}")
    if m != len(e):
        raise ValueError(f"A has {m} rows but error vector has length {len(e)}")

    b = (np.dot(matrix, as_int_array(s)) + as_int_array(e)) % q
    return PublicKey([to_int_list(row % q) for row in matrix], to_int_list(b))


def encrypt(pk: PublicKey, r: Sequence[int], message_bit: int, q: int) -> Ciphertext:
    """
    Encrypt one bit under pk with the randomizer r.

    Args:
        pk: Public key (A, b)
        r: Binary selector vector of length m; must be freshly random for
            every encryption
        message_bit: 0 or 1
        q: Modulus

    Returns:
        Ciphertext (u = A^T.r mod q, v = b.r + bit*floor(q/2) mod q)

    Raises:
        ValueError: If message_bit is not a bit or len(r) != m
    """
    if not isinstance(message_bit, (int, np.integer)) or message_bit not in (0, 1):
        raise ValueError(f"message_bit must be 0 or 1, got {message_bit}")
    message_bit = int(message_bit)
    if len(r) != pk.m:
        raise ValueError(f"Randomizer has length {len(r)} but public key has {pk.m} samples")
    if any(r_i not in (0, 1) for r_i in r):
        raise ValueError("Randomizer must be a binary vector")

    selector = as_int_array(r)
    u = np.dot(as_matrix(pk.A).T, selector) % q
    v = (int(np.dot(as_int_array(pk.b), selector)) + message_bit * (q // 2)) % q
    return Ciphertext(to_int_list(u), v)


def decrypt(ciphertext: Ciphertext, s: Union[SecretKey, Sequence[int]], q: int) -> int:
    """
    Recover the bit encrypted in ciphertext.

    Computes t = v - u.s (mod q), centres it into (-q/2, q/2] and returns 0
    when |t| <= q/4, else 1. Always returns a bit; if the noise exceeded
    q/4 the bit is silently wrong.

    Raises:
        ValueError: If len(u) != len(s)
    """
    s = _secret_vector(s)
    u, v = ciphertext
    if len(u) != len(s):
        raise ValueError(f"Ciphertext has dimension {len(u)} but secret has length {len(s)}")

    inner = int(np.dot(as_int_array(u), as_int_array(s))) if len(s) else 0
    centered = center_mod(v - inner, q)
    return 0 if 4 * abs(centered) <= q else 1


def keygen(n: int, m: int, q: int, sigma: float,
           rng: RandomSource = None) -> Tuple[SecretKey, PublicKey]:
    """
    Generate an LWE key pair.

    Args:
        n: Secret dimension
        m: Number of public samples
        q: Modulus
        sigma: Standard deviation of the error
        rng: Randomness source

    Returns:
        (SecretKey, PublicKey)
    """
    rng = resolve_rng(rng)
    logger.debug(f"Generating LWE key pair with n={n}, m={m}, q={q}, sigma={sigma}")
    A = generate_random_matrix(m, n, q, rng)
    s = generate_random_vector(n, q, rng)
    e = sample_discrete_gaussian_vector(sigma, m, rng)
    return SecretKey(s), generate_public_key(A, s, e, q)


def encrypt_bit(pk: PublicKey, message_bit: int, q: int,
                rng: RandomSource = None) -> Ciphertext:
    """Encrypt one bit with a freshly sampled binary randomizer."""
    r = generate_random_bit_vector(pk.m, rng)
    return encrypt(pk, r, message_bit, q)


def rounded_gaussian_variance(sigma: float) -> float:
    """
    Variance of round(Y) for Y ~ N(0, sigma^2).

    Summed over the support |k| <= 12 sigma + 1 using the normal CDF.
    """
    if sigma == 0:
        return 0.0
    bound = int(math.ceil(12 * sigma)) + 1
    k = np.arange(-bound, bound + 1)
    probs = stats.norm.cdf((k + 0.5) / sigma) - stats.norm.cdf((k - 0.5) / sigma)
    return float(np.sum(probs * k ** 2))


def decryption_failure_probability(q: int, m: int, sigma: float) -> float:
    """
    Estimate P(|r.e| >= q/4) for a uniform binary r of length m.

    Each r_i e_i has mean 0 and variance Var(e)/2, so r.e is approximately
    normal with variance m * Var(e) / 2. The two-sided tail beyond q/4 is
    erfc(q / (4 sqrt(2) std)).

    Args:
        q: Modulus
        m: Number of public samples
        sigma: Error standard deviation

    Returns:
        Estimated per-ciphertext failure probability in [0, 1]
    """
    variance = m * rounded_gaussian_variance(sigma) / 2
    if variance == 0:
        return 0.0
    return float(erfc((q / 4) / math.sqrt(2 * variance)))


class LWECryptosystem:
    """
    LWE bit-encryption bound to one parameter set and randomness source.

    EXAMPLES::

        >>> lwe = LWECryptosystem(lwe_parameters('small'), rng=7)
        >>> sk, pk = lwe.keygen()
        >>> lwe.decrypt(sk, lwe.encrypt(pk, 1))
        1
    """

    def __init__(self, params: LWEParameters, rng: RandomSource = None):
        """
        Initialize the cryptosystem.

        Args:
            params: LWE parameters (n, m, q, sigma)
            rng: Randomness source shared by keygen and encryption
        """
        self.params = params
        self.rng = resolve_rng(rng)

    def keygen(self) -> Tuple[SecretKey, PublicKey]:
        p = self.params
        return keygen(p.n, p.m, p.q, p.sigma, self.rng)

    def encrypt(self, pk: PublicKey, message_bit: int) -> Ciphertext:
        return encrypt_bit(pk, message_bit, self.params.q, self.rng)

    def decrypt(self, sk: SecretKey, ciphertext: Ciphertext) -> int:
        return decrypt(ciphertext, sk, self.params.q)

    def encrypt_bits(self, pk: PublicKey, bits: Iterable[int]) -> List[Ciphertext]:
        """Encrypt each bit independently."""
        return [self.encrypt(pk, bit) for bit in bits]

    def decrypt_bits(self, sk: SecretKey, ciphertexts: Iterable[Ciphertext]) -> List[int]:
        return [self.decrypt(sk, ct) for ct in ciphertexts]

    def __repr__(self) -> str:
        p = self.params
        return f"LWECryptosystem(n={p.n}, m={p.m}, q={p.q}, sigma={p.sigma})"
