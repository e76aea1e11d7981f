"""Reference rank-1 constraint system.

A constraint ``(a, b, c)`` holds for a full assignment ``z`` when
``<a, z> * <b, z> == <c, z>``. The full assignment is
``z = [1, *primary_input, *auxiliary_input]``: index 0 is the constant one wire
and is counted in both :meth:`R1CSConstraintSystem.num_public_inputs` and
:meth:`R1CSConstraintSystem.num_total_variables`.

Serialized form (one record per line)::

    num_public_inputs
    num_total_variables
    num_constraints
    # per constraint, for each of a, b, c:
    num_terms
    index coefficient      # num_terms times
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any, TextIO

from pcd_compliance.core.contracts import Field
from pcd_compliance.core.errors import PredicateFormatError, ShapeMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LinearCombination:
    """Sparse linear combination over the full assignment.

    Parameters
    ----------
    terms : tuple[tuple[int, Any], ...]
        ``(variable_index, coefficient)`` pairs. Index 0 is the constant wire.
    """

    terms: tuple[tuple[int, Any], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "terms",
            tuple((int(index), coefficient) for index, coefficient in self.terms),
        )
        for index, _ in self.terms:
            if index < 0:
                raise ValueError("variable index must be >= 0")

    @classmethod
    def of(cls, field: Field[Any], coefficients: dict[int, int]) -> LinearCombination:
        """Build a combination from integer coefficients keyed by variable index."""

        return cls(tuple((index, field.element(value)) for index, value in sorted(coefficients.items())))

    def max_index(self) -> int:
        """Return the largest referenced variable index, or ``-1`` when empty."""

        return max((index for index, _ in self.terms), default=-1)

    def evaluate(self, assignment: Sequence[Any], field: Field[Any]) -> Any:
        """Return ``<self, assignment>``."""

        total = field.zero()
        for index, coefficient in self.terms:
            total = total + coefficient * assignment[index]
        return total


@dataclass(frozen=True, slots=True)
class R1CSConstraint:
    """One rank-1 constraint ``a * b = c``."""

    a: LinearCombination
    b: LinearCombination
    c: LinearCombination

    def max_index(self) -> int:
        return max(self.a.max_index(), self.b.max_index(), self.c.max_index())

    def is_satisfied(self, assignment: Sequence[Any], field: Field[Any]) -> bool:
        lhs = self.a.evaluate(assignment, field) * self.b.evaluate(assignment, field)
        return lhs == self.c.evaluate(assignment, field)


@dataclass(frozen=True, slots=True)
class R1CSConstraintSystem:
    """Rank-1 constraint system with a public/private variable split.

    Parameters
    ----------
    field : Field
        Field over which constraints are evaluated.
    n_public_inputs : int
        Number of public inputs, the constant one wire included.
    n_total_variables : int
        Number of variables, the constant one wire included.
    constraints : tuple[R1CSConstraint, ...], optional
        Constraint rows.

    Raises
    ------
    ValueError
        If the counts are inconsistent or a constraint references a variable
        outside ``[0, n_total_variables)``.
    """

    field: Field[Any]
    n_public_inputs: int
    n_total_variables: int
    constraints: tuple[R1CSConstraint, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))
        if self.n_public_inputs < 1:
            raise ValueError("n_public_inputs must count the constant wire (>= 1)")
        if self.n_total_variables < self.n_public_inputs:
            raise ValueError("n_total_variables must be >= n_public_inputs")
        for position, constraint in enumerate(self.constraints):
            if constraint.max_index() >= self.n_total_variables:
                raise ValueError(
                    f"constraint {position} references variable {constraint.max_index()} "
                    f"but only {self.n_total_variables} variables exist"
                )

    def num_public_inputs(self) -> int:
        return self.n_public_inputs

    def num_total_variables(self) -> int:
        return self.n_total_variables

    def num_constraints(self) -> int:
        return len(self.constraints)

    def is_satisfied(self, primary_input: Sequence[Any], auxiliary_input: Sequence[Any]) -> bool:
        """Test whether ``[1, *primary_input, *auxiliary_input]`` satisfies all rows.

        Raises
        ------
        ShapeMismatchError
            If the vector lengths disagree with the declared variable counts.
        """

        if len(primary_input) != self.n_public_inputs - 1:
            raise ShapeMismatchError(
                f"primary input has {len(primary_input)} entries, "
                f"expected {self.n_public_inputs - 1}"
            )
        if len(primary_input) + len(auxiliary_input) != self.n_total_variables - 1:
            raise ShapeMismatchError(
                f"auxiliary input has {len(auxiliary_input)} entries, "
                f"expected {self.n_total_variables - self.n_public_inputs}"
            )

        assignment = [self.field.one(), *primary_input, *auxiliary_input]
        for position, constraint in enumerate(self.constraints):
            if not constraint.is_satisfied(assignment, self.field):
                logger.debug("constraint %d of %d is not satisfied", position, len(self.constraints))
                return False
        return True

    def write(self, stream: TextIO) -> None:
        """Serialize as line-oriented text records."""

        stream.write(f"{self.n_public_inputs}\n")
        stream.write(f"{self.n_total_variables}\n")
        stream.write(f"{len(self.constraints)}\n")
        for constraint in self.constraints:
            for combination in (constraint.a, constraint.b, constraint.c):
                stream.write(f"{len(combination.terms)}\n")
                for index, coefficient in combination.terms:
                    stream.write(f"{index} {self.field.format(coefficient)}\n")

    @classmethod
    def read(cls, stream: TextIO, field: Field[Any]) -> R1CSConstraintSystem:
        """Deserialize a constraint system written by :meth:`write`.

        Raises
        ------
        PredicateFormatError
            If the stream is truncated or holds malformed records.
        """

        n_public_inputs = read_int_record(stream, "num_public_inputs")
        n_total_variables = read_int_record(stream, "num_total_variables")
        n_constraints = read_int_record(stream, "num_constraints")

        constraints = []
        for _ in range(n_constraints):
            a, b, c = (_read_combination(stream, field) for _ in range(3))
            constraints.append(R1CSConstraint(a, b, c))

        try:
            return cls(field, n_public_inputs, n_total_variables, tuple(constraints))
        except ValueError as exc:
            raise PredicateFormatError(f"inconsistent constraint system: {exc}") from exc


def read_record(stream: TextIO, label: str) -> str:
    """Read one non-empty line record.

    Raises
    ------
    PredicateFormatError
        If the stream ends before the record.
    """

    line = stream.readline()
    if not line:
        raise PredicateFormatError(f"stream ended before {label}")
    record = line.strip()
    if not record:
        raise PredicateFormatError(f"empty record for {label}")
    return record


def read_int_record(stream: TextIO, label: str) -> int:
    """Read one non-negative decimal integer record."""

    record = read_record(stream, label)
    if not record.isdecimal():
        raise PredicateFormatError(f"{label} must be a non-negative integer, got {record!r}")
    return int(record)


def _read_combination(stream: TextIO, field: Field[Any]) -> LinearCombination:
    n_terms = read_int_record(stream, "num_terms")
    terms: list[tuple[int, Any]] = []
    for _ in range(n_terms):
        parts = read_record(stream, "term").split()
        if len(parts) != 2 or not parts[0].isdecimal():
            raise PredicateFormatError(f"malformed term record {' '.join(parts)!r}")
        try:
            coefficient = field.parse(parts[1])
        except ValueError as exc:
            raise PredicateFormatError(str(exc)) from exc
        terms.append((int(parts[0]), coefficient))
    return LinearCombination(tuple(terms))


def constraint_from_coefficients(
    field: Field[Any],
    a: dict[int, int],
    b: dict[int, int],
    c: dict[int, int],
) -> R1CSConstraint:
    """Build one constraint from integer coefficient maps."""

    return R1CSConstraint(
        LinearCombination.of(field, a),
        LinearCombination.of(field, b),
        LinearCombination.of(field, c),
    )

