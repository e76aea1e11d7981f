"""Tests for compliance predicate text serialization."""

from __future__ import annotations

import io

import numpy as np
import pytest

from pcd_compliance.algebra import BN254_SCALAR_FIELD, PrimeField
from pcd_compliance.core import PredicateFormatError, ShapeMismatchError
from pcd_compliance.predicate import (
    CompliancePredicate,
    compliance_predicate_from_text,
    compliance_predicate_to_text,
    load_compliance_predicate,
    r1cs_reader,
    random_compliance_predicate,
    read_compliance_predicate,
    save_compliance_predicate,
)
from pcd_compliance.r1cs import R1CSConstraintSystem

F = PrimeField(97)


def _shape_only_predicate(**overrides) -> CompliancePredicate:
    params = {
        "name": 3,
        "type": 7,
        "constraint_system": R1CSConstraintSystem(field=F, n_public_inputs=3, n_total_variables=11),
        "outgoing_message_payload_length": 2,
        "max_arity": 2,
        "incoming_message_payload_lengths": (2, 1),
        "local_data_length": 1,
        "witness_length": 1,
    }
    params.update(overrides)
    return CompliancePredicate(**params)


def test_records_follow_documented_order() -> None:
    """Scalars come first, then the constraint system records."""

    text = compliance_predicate_to_text(_shape_only_predicate())

    assert text.splitlines() == ["3", "7", "2", "2", "1", "2", "1", "1", "3", "11", "0"]


@pytest.mark.parametrize("max_arity", [0, 1, 5])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_round_trip_preserves_equality(max_arity: int, seed: int) -> None:
    """Encode then decode should yield an equal predicate."""

    rng = np.random.default_rng(seed)
    predicate = random_compliance_predicate(BN254_SCALAR_FIELD, max_arity=max_arity, rng=rng, name=seed, type=9)

    buffer = io.StringIO()
    predicate.encode(buffer)
    buffer.seek(0)
    decoded = CompliancePredicate.decode(buffer, read_constraint_system=r1cs_reader(BN254_SCALAR_FIELD))

    assert decoded == predicate
    assert decoded.is_well_formed()
    assert buffer.read() == ""


def test_same_type_flag_is_not_serialized() -> None:
    """The composition flag decodes to its default and equality still holds."""

    predicate = _shape_only_predicate(relies_on_same_type_inputs=True)

    decoded = compliance_predicate_from_text(
        compliance_predicate_to_text(predicate),
        read_constraint_system=r1cs_reader(F),
    )

    assert decoded.relies_on_same_type_inputs is False
    assert decoded == predicate


def test_decoding_trusts_stream_max_arity() -> None:
    """The incoming lengths are sized by the stream's ``max_arity``."""

    text = "1\n2\n3\n4\n5\n6\n2\n0\n0\n3\n22\n0\n"

    decoded = compliance_predicate_from_text(text, read_constraint_system=r1cs_reader(F))

    assert decoded.max_arity == 3
    assert decoded.incoming_message_payload_lengths == (4, 5, 6)
    assert decoded.is_well_formed()


def test_truncated_stream_raises_format_error() -> None:
    """Missing records are a parse failure."""

    text = compliance_predicate_to_text(_shape_only_predicate())
    truncated = "\n".join(text.splitlines()[:5]) + "\n"

    with pytest.raises(PredicateFormatError, match="stream ended before"):
        read_compliance_predicate(io.StringIO(truncated), read_constraint_system=r1cs_reader(F))


def test_reordered_stream_decodes_to_ill_formed_predicate() -> None:
    """Swapped scalar records decode but fail the structural checks."""

    lines = compliance_predicate_to_text(_shape_only_predicate()).splitlines()
    lines[5], lines[6] = lines[6], lines[5]

    decoded = compliance_predicate_from_text("\n".join(lines) + "\n", read_constraint_system=r1cs_reader(F))

    assert decoded.outgoing_message_payload_length == 1
    assert not decoded.is_well_formed()


def test_non_integer_record_raises_format_error() -> None:
    """Non-numeric scalar records are rejected."""

    with pytest.raises(PredicateFormatError, match="max_arity"):
        compliance_predicate_from_text("1\n2\nmany\n", read_constraint_system=r1cs_reader(F))


def test_save_and_load_file(tmp_path) -> None:
    """File helpers should round trip through nested directories."""

    predicate = random_compliance_predicate(F, max_arity=2, rng=np.random.default_rng(11))

    path = save_compliance_predicate(predicate, tmp_path / "nested" / "predicate.txt")

    assert path.exists()
    assert load_compliance_predicate(path, field=F) == predicate
    assert load_compliance_predicate(path, read_constraint_system=r1cs_reader(F)) == predicate
    with pytest.raises(ValueError, match="either field or read_constraint_system"):
        load_compliance_predicate(path)


class _CountsOnly:
    """Constraint system with counts and a writer but no ``field`` attribute."""

    def __init__(self, n_public_inputs: int, n_total_variables: int) -> None:
        self.n_public_inputs = n_public_inputs
        self.n_total_variables = n_total_variables

    def num_public_inputs(self) -> int:
        return self.n_public_inputs

    def num_total_variables(self) -> int:
        return self.n_total_variables

    def is_satisfied(self, primary_input, auxiliary_input) -> bool:
        return True

    def write(self, stream) -> None:
        stream.write(f"{self.n_public_inputs}\n{self.n_total_variables}\n")


def _read_counts_only(stream) -> _CountsOnly:
    return _CountsOnly(int(stream.readline()), int(stream.readline()))


def test_decoding_with_explicit_field_for_fieldless_backend() -> None:
    """Backends without a field attribute decode when the field is supplied."""

    text = "3\n7\n0\n2\n0\n0\n3\n4\n"

    predicate = compliance_predicate_from_text(text, read_constraint_system=_read_counts_only, field=F)

    assert predicate.field is F
    assert predicate.is_well_formed()
    assert compliance_predicate_to_text(predicate) == text
    with pytest.raises(ValueError, match="field is required"):
        compliance_predicate_from_text(text, read_constraint_system=_read_counts_only)


def test_negative_scalars_cannot_reach_the_writer() -> None:
    """Every predicate that can be written can also be read back."""

    with pytest.raises(ShapeMismatchError, match="name must be >= 0"):
        _shape_only_predicate(name=-1)
    with pytest.raises(ShapeMismatchError, match="witness_length must be >= 0"):
        _shape_only_predicate(witness_length=-1)
