"""Reference finite-field arithmetic."""

from .field import BN254_SCALAR_FIELD, PrimeField, PrimeFieldElement

__all__ = ["BN254_SCALAR_FIELD", "PrimeField", "PrimeFieldElement"]
