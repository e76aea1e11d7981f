"""Tally compliance predicate.

Every node contributes a summand (its local data) and forwards
``[sum, count]``: the sum of its summand and all incoming sums, and one plus
all incoming counts. Absent incoming slots are zero-filled by the auxiliary
input layout, so the sums need no arity-dependent selection.

Variable layout for ``max_arity = k``::

    0            constant one
    1, 2         outgoing sum, count
    3            arity
    4 + 3i       type of incoming slot i
    5 + 3i       sum of incoming slot i
    6 + 3i       count of incoming slot i
    4 + 3k       summand
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pcd_compliance.core.contracts import Field
from pcd_compliance.r1cs.constraint_system import R1CSConstraintSystem, constraint_from_coefficients

from .compliance import CompliancePredicate
from .messages import ComplianceWitness, LocalData, Message

TALLY_TYPE = 1
TALLY_PAYLOAD_LENGTH = 2


def tally_compliance_predicate(
    field: Field[Any],
    *,
    max_arity: int,
    type: int = TALLY_TYPE,
    name: int = 0,
) -> CompliancePredicate:
    """Build the tally predicate for up to ``max_arity`` incoming messages.

    Constraints
    -----------
    * ``(summand + sum_0 + ... + sum_{k-1}) * 1 = sum_out``
    * ``(1 + count_0 + ... + count_{k-1}) * 1 = count_out``
    * ``type_i * (type_i - type) = 0`` for every slot
    * ``(type * arity) * 1 = type_0 + ... + type_{k-1}``

    Returns
    -------
    CompliancePredicate
        Well-formed predicate with ``relies_on_same_type_inputs=True``.
    """

    if type == 0 or field.element(type) == field.zero():
        raise ValueError("tally type must be non-zero in the field")

    slot_type = [4 + 3 * slot for slot in range(max_arity)]
    slot_sum = [5 + 3 * slot for slot in range(max_arity)]
    slot_count = [6 + 3 * slot for slot in range(max_arity)]
    summand = 4 + 3 * max_arity
    one, sum_out, count_out, arity = 0, 1, 2, 3

    constraints = [
        constraint_from_coefficients(
            field,
            {summand: 1, **{index: 1 for index in slot_sum}},
            {one: 1},
            {sum_out: 1},
        ),
        constraint_from_coefficients(
            field,
            {one: 1, **{index: 1 for index in slot_count}},
            {one: 1},
            {count_out: 1},
        ),
    ]
    for index in slot_type:
        constraints.append(constraint_from_coefficients(field, {index: 1}, {index: 1, one: -type}, {}))
    constraints.append(
        constraint_from_coefficients(field, {arity: type}, {one: 1}, {index: 1 for index in slot_type})
    )

    constraint_system = R1CSConstraintSystem(
        field=field,
        n_public_inputs=1 + TALLY_PAYLOAD_LENGTH,
        n_total_variables=summand + 1,
        constraints=tuple(constraints),
    )
    return CompliancePredicate(
        name=name,
        type=type,
        constraint_system=constraint_system,
        outgoing_message_payload_length=TALLY_PAYLOAD_LENGTH,
        max_arity=max_arity,
        incoming_message_payload_lengths=(TALLY_PAYLOAD_LENGTH,) * max_arity,
        local_data_length=1,
        witness_length=0,
        relies_on_same_type_inputs=True,
    )


def tally_message(field: Field[Any], *, total: int, count: int, type: int = TALLY_TYPE) -> Message:
    return Message(type=type, payload=(field.element(total), field.element(count)))


def tally_local_data(field: Field[Any], summand: int) -> LocalData:
    return LocalData((field.element(summand),))


def tally_witness() -> ComplianceWitness:
    return ComplianceWitness(())


def tally_outgoing_message(
    field: Field[Any],
    incoming_messages: Sequence[Message],
    summand: int,
    *,
    type: int = TALLY_TYPE,
) -> Message:
    """Compute the message a tally node emits."""

    total = field.element(summand)
    count = field.one()
    for message in incoming_messages:
        total = total + message.payload[0]
        count = count + message.payload[1]
    return Message(type=type, payload=(total, count))


__all__ = [
    "TALLY_PAYLOAD_LENGTH",
    "TALLY_TYPE",
    "tally_compliance_predicate",
    "tally_local_data",
    "tally_message",
    "tally_outgoing_message",
    "tally_witness",
]
