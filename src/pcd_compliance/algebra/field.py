"""Reference prime-field implementation.

Elements are stored as canonical residues in ``[0, modulus)``. The field
object doubles as the element factory and the text codec required by
:class:`pcd_compliance.core.contracts.Field`.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class PrimeFieldElement:
    """Element of ``GF(modulus)``.

    Parameters
    ----------
    value : int
        Residue. Reduced modulo ``modulus`` on construction.
    modulus : int
        Field characteristic.

    Raises
    ------
    ValueError
        If arithmetic mixes elements of different fields.
    """

    value: int
    modulus: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", int(self.value) % int(self.modulus))

    def _coerce(self, other: PrimeFieldElement | int) -> int:
        if isinstance(other, PrimeFieldElement):
            if other.modulus != self.modulus:
                raise ValueError(
                    f"cannot combine elements of GF({self.modulus}) and GF({other.modulus})"
                )
            return other.value
        if isinstance(other, int):
            return other
        return NotImplemented

    def __add__(self, other: PrimeFieldElement | int) -> PrimeFieldElement:
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return PrimeFieldElement(self.value + rhs, self.modulus)

    __radd__ = __add__

    def __sub__(self, other: PrimeFieldElement | int) -> PrimeFieldElement:
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return PrimeFieldElement(self.value - rhs, self.modulus)

    def __rsub__(self, other: int) -> PrimeFieldElement:
        return PrimeFieldElement(other - self.value, self.modulus)

    def __mul__(self, other: PrimeFieldElement | int) -> PrimeFieldElement:
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return PrimeFieldElement(self.value * rhs, self.modulus)

    __rmul__ = __mul__

    def __neg__(self) -> PrimeFieldElement:
        return PrimeFieldElement(-self.value, self.modulus)

    def __truediv__(self, other: PrimeFieldElement | int) -> PrimeFieldElement:
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self * PrimeFieldElement(rhs, self.modulus).inverse()

    def __rtruediv__(self, other: int) -> PrimeFieldElement:
        if not isinstance(other, int):
            return NotImplemented
        return PrimeFieldElement(other, self.modulus) * self.inverse()

    def inverse(self) -> PrimeFieldElement:
        """Return the multiplicative inverse.

        Raises
        ------
        ZeroDivisionError
            If the element is zero.
        """

        if self.value == 0:
            raise ZeroDivisionError("zero has no inverse")
        return PrimeFieldElement(pow(self.value, -1, self.modulus), self.modulus)

    def to_int(self) -> int:
        """Return the canonical residue."""

        return self.value

    def __repr__(self) -> str:
        return f"{self.value} (mod {self.modulus})"


@dataclass(frozen=True, slots=True)
class PrimeField:
    """The prime field ``GF(modulus)``.

    Parameters
    ----------
    modulus : int
        Field characteristic. Primality is assumed, not verified.

    Raises
    ------
    ValueError
        If ``modulus`` is smaller than 2.
    """

    modulus: int

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError("modulus must be >= 2")

    def element(self, value: int) -> PrimeFieldElement:
        return PrimeFieldElement(int(value), self.modulus)

    def elements(self, values) -> tuple[PrimeFieldElement, ...]:
        """Lift an iterable of integers into the field."""

        return tuple(self.element(value) for value in values)

    def zero(self) -> PrimeFieldElement:
        return PrimeFieldElement(0, self.modulus)

    def one(self) -> PrimeFieldElement:
        return PrimeFieldElement(1, self.modulus)

    def parse(self, text: str) -> PrimeFieldElement:
        """Decode a decimal residue.

        Raises
        ------
        ValueError
            If ``text`` is not a decimal integer in ``[0, modulus)``.
        """

        stripped = text.strip()
        try:
            value = int(stripped, 10)
        except ValueError as exc:
            raise ValueError(f"invalid field element encoding {stripped!r}") from exc
        if not 0 <= value < self.modulus:
            raise ValueError(f"field element {value} out of range for GF({self.modulus})")
        return PrimeFieldElement(value, self.modulus)

    def format(self, element: PrimeFieldElement) -> str:
        return str(element.value)

    def random_element(self, rng: np.random.Generator) -> PrimeFieldElement:
        """Draw a near-uniform element.

        Parameters
        ----------
        rng : numpy.random.Generator
            Random generator supplied by the caller for deterministic seeding.
        """

        n_bytes = (self.modulus.bit_length() + 7) // 8 + 8
        return self.element(int.from_bytes(rng.bytes(n_bytes), "big"))


BN254_SCALAR_FIELD = PrimeField(
    0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
)

__all__ = ["BN254_SCALAR_FIELD", "PrimeField", "PrimeFieldElement"]
