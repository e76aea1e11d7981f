"""Tests for building compliance predicates from shape configs."""

from __future__ import annotations

import json

import pytest

from pcd_compliance.algebra import PrimeField
from pcd_compliance.core import ShapeMismatchError
from pcd_compliance.predicate import (
    compliance_predicate_from_config,
    compliance_predicate_from_config_file,
    compliance_predicate_shape_config,
    tally_compliance_predicate,
)
from pcd_compliance.r1cs import R1CSConstraintSystem

F = PrimeField(97)
CS = R1CSConstraintSystem(field=F, n_public_inputs=3, n_total_variables=11)


def _config(**overrides):
    config = {
        "name": 3,
        "type": 7,
        "outgoing_message_payload_length": 2,
        "incoming_message_payload_lengths": [2, 1],
        "local_data_length": 1,
        "witness_length": 1,
    }
    config.update(overrides)
    return config


def test_config_builds_well_formed_predicate() -> None:
    """Required keys are enough; ``max_arity`` follows the incoming lengths."""

    predicate = compliance_predicate_from_config(_config(), constraint_system=CS)

    assert predicate.max_arity == 2
    assert predicate.incoming_message_payload_lengths == (2, 1)
    assert predicate.relies_on_same_type_inputs is False
    assert predicate.is_well_formed()


def test_explicit_max_arity_must_match_lengths() -> None:
    """A conflicting explicit arity is a shape error."""

    with pytest.raises(ShapeMismatchError):
        compliance_predicate_from_config(_config(max_arity=3), constraint_system=CS)


@pytest.mark.parametrize(
    ("overrides", "match"),
    [
        ({"extra": 1}, "unknown keys"),
        ({"witness_length": -1}, "predicate.witness_length must be >= 0"),
        ({"incoming_message_payload_lengths": [2, True]}, r"incoming_message_payload_lengths\[1\]"),
        ({"incoming_message_payload_lengths": "21"}, "must be a list"),
        ({"relies_on_same_type_inputs": "yes"}, "must be a boolean"),
    ],
)
def test_invalid_configs_are_rejected(overrides, match) -> None:
    """Invalid keys and values should raise ``ValueError``."""

    with pytest.raises(ValueError, match=match):
        compliance_predicate_from_config(_config(**overrides), constraint_system=CS)


def test_missing_keys_are_rejected() -> None:
    """Every shape length must be declared."""

    config = _config()
    del config["local_data_length"]

    with pytest.raises(ValueError, match="missing required keys"):
        compliance_predicate_from_config(config, constraint_system=CS)


def test_config_file_and_shape_config_round_trip(tmp_path) -> None:
    """Exported shape configs should rebuild an equal predicate."""

    predicate = tally_compliance_predicate(F, max_arity=3)
    shape = compliance_predicate_shape_config(predicate)

    path = tmp_path / "tally.json"
    path.write_text(json.dumps(shape), encoding="utf-8")
    rebuilt = compliance_predicate_from_config_file(path, constraint_system=predicate.constraint_system)

    assert rebuilt == predicate
    assert rebuilt.relies_on_same_type_inputs is True
