"""Ring and residue-number representations of lattice data."""

from .polynomial import Polynomial
from .rns import (
    RnsValue, construct, add_res, sub_res, mul_res,
    crt_coefficients, deconstruct, deconstruct_signed,
)

__all__ = [
    "Polynomial",
    "RnsValue", "construct", "add_res", "sub_res", "mul_res",
    "crt_coefficients", "deconstruct", "deconstruct_signed",
]
