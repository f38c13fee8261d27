"""Prime generation by trial division, used to build RNS modulus sets."""

from typing import Iterator, List


def is_prime(n: int) -> bool:
    """Trial-division primality test."""
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def sieve_primes() -> Iterator[int]:
    """
    Infinite stream of primes in increasing order.

    Each candidate is tested by trial division against the primes found so
    far, stopping once the divisor exceeds the square root of the candidate.
    """
    found: List[int] = []
    candidate = 2
    while True:
        is_composite = False
        for p in found:
            if p * p > candidate:
                break
            if candidate % p == 0:
                is_composite = True
                break
        if not is_composite:
            found.append(candidate)
            yield candidate
        candidate += 1


def generate_primes(k: int) -> List[int]:
    """
    Return the first k primes.

    Args:
        k: Number of primes (non-negative)

    Returns:
        List [2, 3, 5, ...] of length k
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    primes = []
    for p in sieve_primes():
        if len(primes) == k:
            break
        primes.append(p)
    return primes


def primes_up_to(limit: int) -> List[int]:
    """Return every prime p <= limit."""
    primes = []
    for p in sieve_primes():
        if p > limit:
            break
        primes.append(p)
    return primes
