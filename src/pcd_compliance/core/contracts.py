"""Protocol contracts for field elements, fields, and constraint systems.

The compliance-predicate layer never performs field arithmetic or constraint
evaluation itself. It consumes these collaborators through structural
protocols so any field implementation and any R1CS backend that honors the
contracts can be plugged in.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TextIO, TypeVar, runtime_checkable

FieldT = TypeVar("FieldT", bound="FieldElement")


@runtime_checkable
class FieldElement(Protocol):
    """Interface for elements of a finite field.

    Notes
    -----
    Elements must be immutable values. Equality compares residues, not object
    identity.
    """

    def __add__(self, other: FieldElement, /) -> FieldElement: ...

    def __sub__(self, other: FieldElement, /) -> FieldElement: ...

    def __mul__(self, other: FieldElement, /) -> FieldElement: ...

    def __neg__(self) -> FieldElement: ...

    def __eq__(self, other: object, /) -> bool: ...


@runtime_checkable
class Field(Protocol[FieldT]):
    """Interface for a finite field acting as an element factory and codec."""

    def element(self, value: int) -> FieldT:
        """Lift an integer into the field.

        Parameters
        ----------
        value : int
            Integer to reduce into the field.

        Returns
        -------
        FieldT
            Field element congruent to ``value``.
        """

    def zero(self) -> FieldT:
        """Return the additive identity."""

    def one(self) -> FieldT:
        """Return the multiplicative identity."""

    def parse(self, text: str) -> FieldT:
        """Decode one serialized element.

        Parameters
        ----------
        text : str
            Serialized element as produced by :meth:`format`.

        Returns
        -------
        FieldT
            Decoded element.

        Raises
        ------
        ValueError
            If ``text`` is not a valid element encoding.
        """

    def format(self, element: FieldT) -> str:
        """Encode one element as single-line text."""


@runtime_checkable
class ConstraintSystem(Protocol[FieldT]):
    """Interface for the rank-1 constraint system bound to a predicate.

    Notes
    -----
    ``num_public_inputs`` and ``num_total_variables`` are the shape the
    predicate checks in :meth:`CompliancePredicate.is_well_formed`. Both counts
    include the constraint system's constant one wire.

    A backend may also expose a ``field`` attribute. The predicate uses it to
    encode arities, types, and slot padding when no field is passed explicitly.
    """

    def num_public_inputs(self) -> int:
        """Return the number of public inputs, the constant wire included."""

    def num_total_variables(self) -> int:
        """Return the number of variables, the constant wire included."""

    def is_satisfied(
        self,
        primary_input: Sequence[FieldT],
        auxiliary_input: Sequence[FieldT],
    ) -> bool:
        """Test whether an assignment satisfies every constraint.

        Parameters
        ----------
        primary_input : Sequence[FieldT]
            Public input vector, without the constant wire.
        auxiliary_input : Sequence[FieldT]
            Private assignment vector.

        Returns
        -------
        bool
            ``True`` if all constraints hold.
        """

    def write(self, stream: TextIO) -> None:
        """Serialize the constraint system as line-oriented text records."""
