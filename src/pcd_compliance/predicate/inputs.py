"""Flatten messages, local data, and witnesses into constraint-system vectors.

The constraint system sees the assignment ``[1, *primary, *auxiliary]``.

Primary input
    The outgoing message payload, in order.

Auxiliary input
    1. the number of incoming messages actually supplied (the arity);
    2. for every incoming slot ``i < max_arity``, the message type followed by
       its payload; slots beyond the supplied arity are zero-filled with
       ``1 + incoming_message_payload_lengths[i]`` entries;
    3. the local-data payload;
    4. the witness payload.

These functions only do length and position bookkeeping. Field values are
never inspected.

The arity and message types enter the assignment through ``field.element``,
so they are reduced modulo the field characteristic. Types congruent modulo
the characteristic are indistinguishable to the constraint system, and a type
congruent to zero looks like an empty slot.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pcd_compliance.core.contracts import Field
from pcd_compliance.core.errors import ShapeMismatchError

from .messages import ComplianceWitness, LocalData, Message


def compliance_predicate_primary_input(
    outgoing_message: Message,
    *,
    outgoing_message_payload_length: int,
) -> list[Any]:
    """Build the primary input vector from an outgoing message.

    Parameters
    ----------
    outgoing_message : Message
        Message produced by the current node.
    outgoing_message_payload_length : int
        Declared outgoing payload length.

    Returns
    -------
    list[Any]
        The outgoing payload.

    Raises
    ------
    ShapeMismatchError
        If the payload length differs from the declared length.
    """

    if outgoing_message.payload_length != outgoing_message_payload_length:
        raise ShapeMismatchError(
            f"outgoing message payload has length {outgoing_message.payload_length}, "
            f"expected {outgoing_message_payload_length}"
        )
    return list(outgoing_message.payload)


def compliance_predicate_auxiliary_input(
    incoming_messages: Sequence[Message],
    local_data: LocalData,
    witness: ComplianceWitness,
    *,
    incoming_message_payload_lengths: Sequence[int],
    local_data_length: int,
    witness_length: int,
    field: Field[Any],
) -> list[Any]:
    """Build the auxiliary input vector.

    Parameters
    ----------
    incoming_messages : Sequence[Message]
        Between zero and ``len(incoming_message_payload_lengths)`` messages.
    local_data : LocalData
        Node-private input.
    witness : ComplianceWitness
        Remaining private assignment.
    incoming_message_payload_lengths : Sequence[int]
        Declared payload length of every incoming slot.
    local_data_length, witness_length : int
        Declared local-data and witness lengths.
    field : Field
        Field used to encode the arity, message types, and padding.

    Returns
    -------
    list[Any]
        Auxiliary vector of length
        ``1 + max_arity + sum(incoming_message_payload_lengths)
        + local_data_length + witness_length``.

    Raises
    ------
    ShapeMismatchError
        If more messages than slots are supplied or any payload length
        disagrees with its declared length.
    """

    arity = len(incoming_messages)
    max_arity = len(incoming_message_payload_lengths)
    if arity > max_arity:
        raise ShapeMismatchError(f"got {arity} incoming messages but max_arity is {max_arity}")

    result: list[Any] = [field.element(arity)]
    for slot, expected_length in enumerate(incoming_message_payload_lengths):
        if slot < arity:
            message = incoming_messages[slot]
            if message.payload_length != expected_length:
                raise ShapeMismatchError(
                    f"incoming message {slot} payload has length {message.payload_length}, "
                    f"expected {expected_length}"
                )
            result.extend(message.as_variable_assignment(field))
        else:
            result.extend(field.zero() for _ in range(1 + expected_length))

    if local_data.payload_length != local_data_length:
        raise ShapeMismatchError(
            f"local data payload has length {local_data.payload_length}, expected {local_data_length}"
        )
    result.extend(local_data.as_variable_assignment())

    if witness.payload_length != witness_length:
        raise ShapeMismatchError(
            f"witness has length {witness.payload_length}, expected {witness_length}"
        )
    result.extend(witness.as_variable_assignment())
    return result


def auxiliary_input_length(
    incoming_message_payload_lengths: Sequence[int],
    *,
    local_data_length: int,
    witness_length: int,
) -> int:
    """Return the auxiliary vector length for a predicate shape."""

    max_arity = len(incoming_message_payload_lengths)
    return 1 + max_arity + sum(incoming_message_payload_lengths) + local_data_length + witness_length


__all__ = [
    "auxiliary_input_length",
    "compliance_predicate_auxiliary_input",
    "compliance_predicate_primary_input",
]
