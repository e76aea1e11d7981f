"""Compliance predicates for R1CS proof-carrying data.

A compliance predicate is the contract a PCD prover enforces at every node of
the computation DAG. It binds a constraint system to a fixed shape:

* ``max_arity`` incoming message slots with fixed payload lengths,
* one outgoing message with a fixed payload length,
* fixed local-data and witness lengths.

The shape determines the constraint system's variable layout exactly (see
:mod:`pcd_compliance.predicate.inputs`), so downstream key generators and
recursive verifiers can rely on it. :meth:`CompliancePredicate.is_well_formed`
re-derives that layout and compares it with the constraint system's declared
counts.

Notes
-----
Shape violations in arguments (wrong payload lengths, too many incoming
messages) raise :class:`~pcd_compliance.core.errors.ShapeMismatchError`.
Well-formedness and satisfaction are plain boolean queries.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import dataclasses
from dataclasses import dataclass
import logging
from typing import Any, TextIO

from pcd_compliance.core.contracts import ConstraintSystem, Field
from pcd_compliance.core.errors import ShapeMismatchError

from .inputs import (
    auxiliary_input_length,
    compliance_predicate_auxiliary_input,
    compliance_predicate_primary_input,
)
from .messages import ComplianceWitness, LocalData, Message

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WellFormednessReport:
    """Outcome of the structural checks behind :meth:`CompliancePredicate.is_well_formed`.

    Parameters
    ----------
    type_not_zero : bool
        Predicate type is non-zero and does not reduce to zero in the field.
    incoming_message_payload_lengths_well_specified : bool
        One incoming payload length per slot.
    correct_num_inputs : bool
        ``outgoing_message_payload_length + 1`` equals the constraint system's
        public input count.
    correct_num_variables : bool
        The derived variable count equals the constraint system's total.
    issues : tuple[str, ...]
        Human-readable description of every failed check.
    """

    type_not_zero: bool
    incoming_message_payload_lengths_well_specified: bool
    correct_num_inputs: bool
    correct_num_variables: bool
    issues: tuple[str, ...] = ()

    @property
    def is_well_formed(self) -> bool:
        return (
            self.type_not_zero
            and self.incoming_message_payload_lengths_well_specified
            and self.correct_num_inputs
            and self.correct_num_variables
        )


@dataclass(frozen=True, slots=True)
class CompliancePredicate:
    """Constraint system bound to a fixed PCD message shape.

    Parameters
    ----------
    name : int
        Identifier of the predicate within a predicate family.
    type : int
        Node type governed by the predicate. Must be non-zero, also as a field
        element, to be well formed.
    constraint_system : ConstraintSystem
        Constraint system owned by the predicate.
    outgoing_message_payload_length : int
        Payload length of the outgoing message.
    max_arity : int
        Maximum number of incoming messages.
    incoming_message_payload_lengths : tuple[int, ...]
        Payload length of every incoming slot; one entry per slot.
    local_data_length : int
        Local-data payload length.
    witness_length : int
        Witness length.
    relies_on_same_type_inputs : bool, optional
        Composition hint: all incoming messages share the predicate's type.
        Not enforced here and not part of equality.
    field : Field | None, optional
        Field used to encode the arity, message types, and slot padding.
        Defaults to the constraint system's ``field`` attribute when it has
        one. Not part of equality.

    Raises
    ------
    ShapeMismatchError
        If ``len(incoming_message_payload_lengths) != max_arity`` or any
        identifier or length is negative.
    ValueError
        If no field is given and the constraint system exposes none.
    """

    name: int
    type: int
    constraint_system: ConstraintSystem[Any]
    outgoing_message_payload_length: int
    max_arity: int
    incoming_message_payload_lengths: tuple[int, ...]
    local_data_length: int
    witness_length: int
    relies_on_same_type_inputs: bool = dataclasses.field(default=False, compare=False)
    field: Field[Any] | None = dataclasses.field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "incoming_message_payload_lengths",
            tuple(int(length) for length in self.incoming_message_payload_lengths),
        )
        if len(self.incoming_message_payload_lengths) != self.max_arity:
            raise ShapeMismatchError(
                f"incoming_message_payload_lengths has {len(self.incoming_message_payload_lengths)} "
                f"entries but max_arity is {self.max_arity}"
            )
        scalars = {
            "name": self.name,
            "type": self.type,
            "max_arity": self.max_arity,
            "outgoing_message_payload_length": self.outgoing_message_payload_length,
            "local_data_length": self.local_data_length,
            "witness_length": self.witness_length,
        }
        for label, value in scalars.items():
            if value < 0:
                raise ShapeMismatchError(f"{label} must be >= 0, got {value}")
        for slot, length in enumerate(self.incoming_message_payload_lengths):
            if length < 0:
                raise ShapeMismatchError(f"incoming_message_payload_lengths[{slot}] must be >= 0, got {length}")

        if self.field is None:
            field = getattr(self.constraint_system, "field", None)
            if field is None:
                raise ValueError("field is required when the constraint system does not expose one")
            object.__setattr__(self, "field", field)

    def expected_num_public_inputs(self) -> int:
        """Return the public input count implied by the outgoing payload length."""

        return self.outgoing_message_payload_length + 1

    def expected_num_total_variables(self) -> int:
        """Return the variable count implied by the predicate shape."""

        return (
            sum(self.incoming_message_payload_lengths)
            + self.outgoing_message_payload_length
            + self.local_data_length
            + (self.max_arity + 1)
            + 1
            + self.witness_length
        )

    def well_formedness_report(self) -> WellFormednessReport:
        """Run every structural check and collect failures.

        Returns
        -------
        WellFormednessReport
            Individual check results and issue descriptions.
        """

        num_public_inputs = self.constraint_system.num_public_inputs()
        num_total_variables = self.constraint_system.num_total_variables()

        type_not_zero = self.type != 0 and self.field.element(self.type) != self.field.zero()
        lengths_well_specified = len(self.incoming_message_payload_lengths) == self.max_arity
        correct_num_inputs = self.expected_num_public_inputs() == num_public_inputs
        correct_num_variables = self.expected_num_total_variables() == num_total_variables

        issues: list[str] = []
        if not type_not_zero:
            issues.append(f"predicate type {self.type} is zero in the field")
        if not lengths_well_specified:
            issues.append(
                f"{len(self.incoming_message_payload_lengths)} incoming payload lengths "
                f"for max_arity {self.max_arity}"
            )
        if not correct_num_inputs:
            issues.append(
                f"constraint system declares {num_public_inputs} public inputs, "
                f"expected {self.expected_num_public_inputs()}"
            )
        if not correct_num_variables:
            issues.append(
                f"constraint system declares {num_total_variables} variables, "
                f"expected {self.expected_num_total_variables()}"
            )

        if issues:
            logger.debug("compliance predicate %d is not well formed: %s", self.name, "; ".join(issues))

        return WellFormednessReport(
            type_not_zero=type_not_zero,
            incoming_message_payload_lengths_well_specified=lengths_well_specified,
            correct_num_inputs=correct_num_inputs,
            correct_num_variables=correct_num_variables,
            issues=tuple(issues),
        )

    def is_well_formed(self) -> bool:
        """Return whether the predicate's shape matches its constraint system."""

        return self.well_formedness_report().is_well_formed

    def has_equal_input_and_output_lengths(self) -> bool:
        """Return whether every incoming slot has the outgoing payload length."""

        return all(
            length == self.outgoing_message_payload_length
            for length in self.incoming_message_payload_lengths
        )

    def has_equal_input_lengths(self) -> bool:
        """Return whether all incoming slots share one payload length."""

        return len(set(self.incoming_message_payload_lengths)) <= 1

    def primary_input(self, outgoing_message: Message) -> list[Any]:
        """Flatten ``outgoing_message`` into the primary input vector."""

        return compliance_predicate_primary_input(
            outgoing_message,
            outgoing_message_payload_length=self.outgoing_message_payload_length,
        )

    def auxiliary_input(
        self,
        incoming_messages: Sequence[Message],
        local_data: LocalData,
        witness: ComplianceWitness,
    ) -> list[Any]:
        """Flatten incoming messages, local data, and witness into the auxiliary vector."""

        return compliance_predicate_auxiliary_input(
            incoming_messages,
            local_data,
            witness,
            incoming_message_payload_lengths=self.incoming_message_payload_lengths,
            local_data_length=self.local_data_length,
            witness_length=self.witness_length,
            field=self.field,
        )

    def auxiliary_input_length(self) -> int:
        return auxiliary_input_length(
            self.incoming_message_payload_lengths,
            local_data_length=self.local_data_length,
            witness_length=self.witness_length,
        )

    def is_satisfied(
        self,
        outgoing_message: Message,
        incoming_messages: Sequence[Message],
        local_data: LocalData,
        witness: ComplianceWitness,
    ) -> bool:
        """Check the predicate on one node's messages and private inputs.

        Parameters
        ----------
        outgoing_message : Message
            Message the node emits.
        incoming_messages : Sequence[Message]
            Between zero and ``max_arity`` messages received by the node.
        local_data : LocalData
            Node-private input.
        witness : ComplianceWitness
            Remaining private assignment.

        Returns
        -------
        bool
            The constraint system's satisfaction result, unchanged.

        Raises
        ------
        ShapeMismatchError
            If any argument disagrees with the declared shape.
        """

        primary = self.primary_input(outgoing_message)
        auxiliary = self.auxiliary_input(incoming_messages, local_data, witness)
        return bool(self.constraint_system.is_satisfied(primary, auxiliary))

    def accepts_incoming_types(self, incoming_messages: Sequence[Message]) -> bool:
        """Return whether incoming message types fit ``relies_on_same_type_inputs``.

        Always ``True`` when the predicate does not rely on same-type inputs.
        """

        if not self.relies_on_same_type_inputs:
            return True
        return all(message.type == self.type for message in incoming_messages)

    def encode(self, stream: TextIO) -> None:
        """Write the predicate as line-oriented text records.

        See :func:`pcd_compliance.predicate.serialization.write_compliance_predicate`.
        """

        from .serialization import write_compliance_predicate

        write_compliance_predicate(self, stream)

    @classmethod
    def decode(
        cls,
        stream: TextIO,
        *,
        read_constraint_system: Callable[[TextIO], ConstraintSystem[Any]],
        field: Field[Any] | None = None,
    ) -> CompliancePredicate:
        """Read a predicate written by :meth:`encode`.

        See :func:`pcd_compliance.predicate.serialization.read_compliance_predicate`.
        """

        from .serialization import read_compliance_predicate

        return read_compliance_predicate(stream, read_constraint_system=read_constraint_system, field=field)


__all__ = ["CompliancePredicate", "WellFormednessReport"]
