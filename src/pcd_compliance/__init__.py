"""Top-level package for ``pcd_compliance``.

The package implements the compliance-predicate layer of an R1CS
proof-carrying-data scheme:

1. a :class:`~pcd_compliance.predicate.messages.Message` carries a typed
   payload along an edge of the computation DAG,
2. a :class:`~pcd_compliance.predicate.compliance.CompliancePredicate` binds a
   constraint system to a fixed message, local-data, and witness shape,
3. :mod:`pcd_compliance.predicate.inputs` flattens a node's arguments into the
   constraint system's primary and auxiliary vectors,
4. the constraint system decides satisfaction.

Notes
-----
Proof generation and verification are out of scope. The reference field
(:mod:`pcd_compliance.algebra`) and reference R1CS
(:mod:`pcd_compliance.r1cs`) exist so predicates can be built and checked
without an external backend.
"""

from .algebra import BN254_SCALAR_FIELD, PrimeField, PrimeFieldElement
from .core import ComplianceError, PredicateFormatError, ShapeMismatchError
from .predicate import (
    CompliancePredicate,
    ComplianceWitness,
    LocalData,
    Message,
    WellFormednessReport,
    load_compliance_predicate,
    save_compliance_predicate,
)
from .r1cs import LinearCombination, R1CSConstraint, R1CSConstraintSystem

__all__ = [
    "BN254_SCALAR_FIELD",
    "ComplianceError",
    "CompliancePredicate",
    "ComplianceWitness",
    "LinearCombination",
    "LocalData",
    "Message",
    "PredicateFormatError",
    "PrimeField",
    "PrimeFieldElement",
    "R1CSConstraint",
    "R1CSConstraintSystem",
    "ShapeMismatchError",
    "WellFormednessReport",
    "load_compliance_predicate",
    "save_compliance_predicate",
]
