"""Tests for primary/auxiliary input layout adapters."""

from __future__ import annotations

import pytest

from pcd_compliance.algebra import PrimeField
from pcd_compliance.core import ShapeMismatchError
from pcd_compliance.predicate import (
    ComplianceWitness,
    LocalData,
    Message,
    auxiliary_input_length,
    compliance_predicate_auxiliary_input,
    compliance_predicate_primary_input,
)

F = PrimeField(97)


def _aux(incoming, local=(9,), witness=(8,), lengths=(2, 1)):
    return compliance_predicate_auxiliary_input(
        incoming,
        LocalData(F.elements(local)),
        ComplianceWitness(F.elements(witness)),
        incoming_message_payload_lengths=lengths,
        local_data_length=len(local),
        witness_length=len(witness),
        field=F,
    )


def test_primary_input_is_outgoing_payload() -> None:
    """Primary input should equal the outgoing payload in order."""

    outgoing = Message(type=1, payload=F.elements([7, 3]))

    primary = compliance_predicate_primary_input(outgoing, outgoing_message_payload_length=2)
    assert primary == [F.element(7), F.element(3)]


def test_primary_input_rejects_wrong_length() -> None:
    """A mismatched outgoing payload is a shape error."""

    with pytest.raises(ShapeMismatchError, match="outgoing message payload has length 1"):
        compliance_predicate_primary_input(
            Message(type=1, payload=F.elements([7])),
            outgoing_message_payload_length=2,
        )


def test_auxiliary_input_layout_with_padding() -> None:
    """Layout is arity, typed slots (zero padded), local data, witness."""

    incoming = (Message(type=5, payload=F.elements([4, 6])),)

    assert _aux(incoming) == list(F.elements([1, 5, 4, 6, 0, 0, 9, 8]))


def test_auxiliary_input_with_all_slots_filled() -> None:
    """Every supplied message should contribute its type and payload."""

    incoming = (
        Message(type=5, payload=F.elements([4, 6])),
        Message(type=2, payload=F.elements([1])),
    )

    assert _aux(incoming) == list(F.elements([2, 5, 4, 6, 2, 1, 9, 8]))


def test_auxiliary_input_for_zero_arity_shape() -> None:
    """Without incoming slots only the arity, local data, and witness remain."""

    aux = _aux((), local=(3, 4), witness=(), lengths=())

    assert aux == list(F.elements([0, 3, 4]))
    assert len(aux) == auxiliary_input_length((), local_data_length=2, witness_length=0)


def test_auxiliary_input_length_matches_layout() -> None:
    """Declared length formula should match the built vector."""

    assert len(_aux(())) == auxiliary_input_length((2, 1), local_data_length=1, witness_length=1) == 8


@pytest.mark.parametrize(
    ("incoming", "local", "witness", "match"),
    [
        (
            tuple(Message(type=1, payload=F.elements([1, 1])) for _ in range(3)),
            (9,),
            (8,),
            "got 3 incoming messages but max_arity is 2",
        ),
        ((Message(type=1, payload=F.elements([1])),), (9,), (8,), "incoming message 0"),
        ((), (), (8,), "local data payload"),
        ((), (9,), (), "witness has length 0"),
    ],
)
def test_auxiliary_input_rejects_shape_mismatches(incoming, local, witness, match) -> None:
    """Every length disagreement should raise instead of returning a vector."""

    with pytest.raises(ShapeMismatchError, match=match):
        compliance_predicate_auxiliary_input(
            incoming,
            LocalData(F.elements(local)),
            ComplianceWitness(F.elements(witness)),
            incoming_message_payload_lengths=(2, 1),
            local_data_length=1,
            witness_length=1,
            field=F,
        )
