"""Lattice public-key schemes."""

from .parameters import LWEParameters, lwe_parameters, available_presets
from .lwe import (
    SecretKey, PublicKey, Ciphertext,
    generate_public_key, encrypt, decrypt, keygen, encrypt_bit,
    decryption_failure_probability, LWECryptosystem,
)

__all__ = [
    "LWEParameters", "lwe_parameters", "available_presets",
    "SecretKey", "PublicKey", "Ciphertext",
    "generate_public_key", "encrypt", "decrypt", "keygen", "encrypt_bit",
    "decryption_failure_probability", "LWECryptosystem",
]
