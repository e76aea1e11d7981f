"""Build compliance predicates from declarative shape configs.

Example YAML::

    name: 1
    type: 7
    outgoing_message_payload_length: 2
    incoming_message_payload_lengths: [2, 2]
    local_data_length: 1
    witness_length: 0
    relies_on_same_type_inputs: true

The constraint system is supplied separately; configs only describe shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pcd_compliance.core.config_loading import (
    coerce_non_negative_int,
    load_config_mapping,
    validate_allowed_keys,
    validate_required_keys,
)
from pcd_compliance.core.contracts import ConstraintSystem, Field

from .compliance import CompliancePredicate

_REQUIRED_KEYS = (
    "name",
    "type",
    "outgoing_message_payload_length",
    "incoming_message_payload_lengths",
    "local_data_length",
    "witness_length",
)
_OPTIONAL_KEYS = ("max_arity", "relies_on_same_type_inputs")


def compliance_predicate_from_config(
    config: Mapping[str, Any],
    *,
    constraint_system: ConstraintSystem[Any],
    field: Field[Any] | None = None,
) -> CompliancePredicate:
    """Create a predicate from a shape mapping.

    Parameters
    ----------
    config : Mapping[str, Any]
        Shape mapping. ``max_arity`` defaults to the number of incoming
        lengths; ``relies_on_same_type_inputs`` defaults to ``False``.
    constraint_system : ConstraintSystem
        Constraint system bound to the predicate.
    field : Field | None, optional
        Field for the predicate when the constraint system exposes none.

    Returns
    -------
    CompliancePredicate
        Constructed predicate. Well-formedness is not checked.

    Raises
    ------
    ValueError
        If keys are unknown or missing, or lengths are not non-negative
        integers.
    ShapeMismatchError
        If an explicit ``max_arity`` disagrees with the incoming lengths.
    """

    validate_allowed_keys(config, field_name="predicate", allowed_keys=_REQUIRED_KEYS + _OPTIONAL_KEYS)
    validate_required_keys(config, field_name="predicate", required_keys=_REQUIRED_KEYS)

    raw_lengths = config["incoming_message_payload_lengths"]
    if isinstance(raw_lengths, (str, bytes)) or not isinstance(raw_lengths, (list, tuple)):
        raise ValueError("predicate.incoming_message_payload_lengths must be a list")
    incoming = tuple(
        coerce_non_negative_int(value, field_name=f"predicate.incoming_message_payload_lengths[{slot}]")
        for slot, value in enumerate(raw_lengths)
    )

    max_arity = config.get("max_arity", len(incoming))
    relies = config.get("relies_on_same_type_inputs", False)
    if not isinstance(relies, bool):
        raise ValueError("predicate.relies_on_same_type_inputs must be a boolean")

    return CompliancePredicate(
        name=coerce_non_negative_int(config["name"], field_name="predicate.name"),
        type=coerce_non_negative_int(config["type"], field_name="predicate.type"),
        constraint_system=constraint_system,
        outgoing_message_payload_length=coerce_non_negative_int(
            config["outgoing_message_payload_length"],
            field_name="predicate.outgoing_message_payload_length",
        ),
        max_arity=coerce_non_negative_int(max_arity, field_name="predicate.max_arity"),
        incoming_message_payload_lengths=incoming,
        local_data_length=coerce_non_negative_int(
            config["local_data_length"], field_name="predicate.local_data_length"
        ),
        witness_length=coerce_non_negative_int(config["witness_length"], field_name="predicate.witness_length"),
        relies_on_same_type_inputs=relies,
        field=field,
    )


def compliance_predicate_from_config_file(
    path: str | Path,
    *,
    constraint_system: ConstraintSystem[Any],
    field: Field[Any] | None = None,
) -> CompliancePredicate:
    """Load a JSON/YAML shape file and create a predicate."""

    return compliance_predicate_from_config(
        load_config_mapping(path),
        constraint_system=constraint_system,
        field=field,
    )


def compliance_predicate_shape_config(predicate: CompliancePredicate) -> dict[str, Any]:
    """Return the shape mapping accepted by :func:`compliance_predicate_from_config`."""

    return {
        "name": predicate.name,
        "type": predicate.type,
        "max_arity": predicate.max_arity,
        "outgoing_message_payload_length": predicate.outgoing_message_payload_length,
        "incoming_message_payload_lengths": list(predicate.incoming_message_payload_lengths),
        "local_data_length": predicate.local_data_length,
        "witness_length": predicate.witness_length,
        "relies_on_same_type_inputs": predicate.relies_on_same_type_inputs,
    }


__all__ = [
    "compliance_predicate_from_config",
    "compliance_predicate_from_config_file",
    "compliance_predicate_shape_config",
]
