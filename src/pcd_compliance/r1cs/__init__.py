"""Reference rank-1 constraint system backend."""

from .constraint_system import (
    LinearCombination,
    R1CSConstraint,
    R1CSConstraintSystem,
    constraint_from_coefficients,
    read_int_record,
    read_record,
)

__all__ = [
    "LinearCombination",
    "R1CSConstraint",
    "R1CSConstraintSystem",
    "constraint_from_coefficients",
    "read_int_record",
    "read_record",
]
