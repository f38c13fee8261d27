"""
Residue Number System (RNS) representation via the Chinese Remainder Theorem.

An integer x in [0, Q), Q = q_1 * ... * q_k with pairwise coprime q_i, is
stored as its residues (x mod q_1, ..., x mod q_k). Addition, subtraction
and multiplication act on each residue independently, so one large-modulus
operation becomes k small-modulus ones with no carries between them.

Reconstruction uses

    x = sum_i r_i * Q_i * (Q_i^{-1} mod q_i)  (mod Q),   Q_i = Q / q_i.

Only integers in [0, Q) are recovered exactly. Anything else comes back as
its residue mod Q; this is arithmetic in Z_Q, not an error.
"""

import logging
from dataclasses import dataclass
from functools import reduce
from operator import mul
from typing import List, Optional, Sequence, Tuple, Union

from ..core.modular import mod_inv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RnsValue:
    """
    Residues of one integer with respect to a fixed set of moduli.

    Attributes:
        residues: residues[i] = x mod moduli[i]
        moduli: Pairwise coprime positive moduli
    """
    residues: Tuple[int, ...]
    moduli: Tuple[int, ...]

    def __post_init__(self):
        if len(self.residues) != len(self.moduli):
            raise ValueError(
                f"Got {len(self.residues)} residues for {len(self.moduli)} moduli")

    @property
    def modulus(self) -> int:
        """Product Q of all moduli."""
        return reduce(mul, self.moduli, 1)

    def __len__(self) -> int:
        return len(self.moduli)


def construct(x: int, moduli: Sequence[int]) -> RnsValue:
    """
    Decompose x into residues modulo each of the given moduli.

    The moduli are assumed pairwise coprime; this is not checked here.

    Args:
        x: Integer to represent (negative values are reduced into [0, q_i))
        moduli: Positive moduli

    Returns:
        RnsValue holding x mod q_i for every modulus
    """
    if len(moduli) == 0:
        raise ValueError("At least one modulus is required")
    for q_i in moduli:
        if q_i <= 0:
            raise ValueError(f"Moduli must be positive, got {q_i}")
    moduli = tuple(int(q_i) for q_i in moduli)
    return RnsValue(tuple(int(x) % q_i for q_i in moduli), moduli)


def _componentwise(x: RnsValue, y: RnsValue, op) -> RnsValue:
    if x.moduli != y.moduli:
        raise ValueError(f"RNS operands use different moduli: {x.moduli} != {y.moduli}")
    residues = tuple(op(a, b) % q_i for a, b, q_i in zip(x.residues, y.residues, x.moduli))
    return RnsValue(residues, x.moduli)


def add_res(x: RnsValue, y: RnsValue) -> RnsValue:
    """Componentwise (x + y) mod q_i."""
    return _componentwise(x, y, lambda a, b: a + b)


def sub_res(x: RnsValue, y: RnsValue) -> RnsValue:
    """Componentwise (x - y) mod q_i."""
    return _componentwise(x, y, lambda a, b: a - b)


def mul_res(x: RnsValue, y: RnsValue) -> RnsValue:
    """Componentwise (x * y) mod q_i."""
    return _componentwise(x, y, mul)


def crt_coefficients(moduli: Sequence[int]) -> List[Tuple[int, int]]:
    """
    Compute the CRT basis pairs (Q_i, Q_i^{-1} mod q_i).

    Raises:
        ValueError: If some Q_i has no inverse mod q_i, i.e. the moduli
            are not pairwise coprime
    """
    Q = reduce(mul, moduli, 1)
    pairs = []
    for q_i in moduli:
        Q_i = Q // q_i
        M_i = mod_inv(Q_i, q_i)
        if M_i is None:
            raise ValueError(f"Modulus {q_i} is not coprime to the other moduli")
        pairs.append((Q_i, M_i))
    return pairs


def _as_rns_value(value, moduli) -> RnsValue:
    if moduli is None:
        return value
    return RnsValue(tuple(int(r) for r in value), tuple(int(q_i) for q_i in moduli))


def deconstruct(value: Union[RnsValue, Sequence[int]],
                moduli: Optional[Sequence[int]] = None) -> int:
    """
    Reconstruct the integer in [0, Q) represented by value.

    Args:
        value: RNS representation with pairwise coprime moduli, or a bare
            residue sequence when moduli is given
        moduli: Moduli for a bare residue sequence

    Returns:
        The unique x in [0, Q) with x = residues[i] (mod moduli[i])
    """
    value = _as_rns_value(value, moduli)
    Q = value.modulus
    logger.debug(f"CRT reconstruction over {len(value)} moduli, Q has {Q.bit_length()} bits")
    x = 0
    for r_i, (Q_i, M_i) in zip(value.residues, crt_coefficients(value.moduli)):
        x += r_i * Q_i * M_i
    return x % Q


def deconstruct_signed(value: Union[RnsValue, Sequence[int]],
                       moduli: Optional[Sequence[int]] = None) -> int:
    """Reconstruct into [-Q/2, Q/2), for values that encode signed integers."""
    value = _as_rns_value(value, moduli)
    Q = value.modulus
    x = deconstruct(value)
    if x >= (Q + 1) // 2:
        x -= Q
    return x
