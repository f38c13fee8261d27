"""
Lattice Arithmetic Package

Arithmetic primitives for lattice-based public-key cryptography: LWE
encryption, polynomial rings Z_q[x]/(x^n +- 1) and RNS/CRT integers.
"""

__version__ = "0.1.0"
__author__ = "Nicholas Zhao"

from . import core
from . import samplers
from . import lattices
from . import schemes

__all__ = ["core", "samplers", "lattices", "schemes"]
