"""Text serialization for compliance predicates.

Records are written one per line in this order::

    name
    type
    max_arity
    incoming_message_payload_lengths[0]
    ...
    incoming_message_payload_lengths[max_arity - 1]
    outgoing_message_payload_length
    local_data_length
    witness_length
    <constraint system records>

There are no length prefixes or checksums. ``relies_on_same_type_inputs`` is
not part of the format and decodes as ``False``.
"""

from __future__ import annotations

from collections.abc import Callable
import io
from pathlib import Path
from typing import Any, TextIO

from pcd_compliance.core.contracts import ConstraintSystem, Field
from pcd_compliance.r1cs.constraint_system import R1CSConstraintSystem, read_int_record

from .compliance import CompliancePredicate

ConstraintSystemReader = Callable[[TextIO], ConstraintSystem[Any]]


def write_compliance_predicate(predicate: CompliancePredicate, stream: TextIO) -> None:
    """Write ``predicate`` to a text stream.

    Parameters
    ----------
    predicate : CompliancePredicate
        Predicate to serialize.
    stream : TextIO
        Destination. The caller owns and closes it.
    """

    stream.write(f"{predicate.name}\n")
    stream.write(f"{predicate.type}\n")
    stream.write(f"{predicate.max_arity}\n")
    for length in predicate.incoming_message_payload_lengths:
        stream.write(f"{length}\n")
    stream.write(f"{predicate.outgoing_message_payload_length}\n")
    stream.write(f"{predicate.local_data_length}\n")
    stream.write(f"{predicate.witness_length}\n")
    predicate.constraint_system.write(stream)


def read_compliance_predicate(
    stream: TextIO,
    *,
    read_constraint_system: ConstraintSystemReader,
    field: Field[Any] | None = None,
) -> CompliancePredicate:
    """Read a predicate written by :func:`write_compliance_predicate`.

    Parameters
    ----------
    stream : TextIO
        Source positioned at the first record.
    read_constraint_system : Callable[[TextIO], ConstraintSystem]
        Reader for the trailing constraint-system records.
    field : Field | None, optional
        Field for the predicate. Required when the decoded constraint system
        exposes no ``field`` attribute.

    Returns
    -------
    CompliancePredicate
        Decoded predicate. Callers should check
        :meth:`CompliancePredicate.is_well_formed` before use.

    Raises
    ------
    PredicateFormatError
        If a record is missing or not a non-negative integer.
    """

    name = read_int_record(stream, "name")
    type_ = read_int_record(stream, "type")
    max_arity = read_int_record(stream, "max_arity")
    incoming_message_payload_lengths = tuple(
        read_int_record(stream, f"incoming_message_payload_lengths[{slot}]")
        for slot in range(max_arity)
    )
    outgoing_message_payload_length = read_int_record(stream, "outgoing_message_payload_length")
    local_data_length = read_int_record(stream, "local_data_length")
    witness_length = read_int_record(stream, "witness_length")
    constraint_system = read_constraint_system(stream)

    return CompliancePredicate(
        name=name,
        type=type_,
        constraint_system=constraint_system,
        outgoing_message_payload_length=outgoing_message_payload_length,
        max_arity=max_arity,
        incoming_message_payload_lengths=incoming_message_payload_lengths,
        local_data_length=local_data_length,
        witness_length=witness_length,
        field=field,
    )


def r1cs_reader(field: Field[Any]) -> ConstraintSystemReader:
    """Return a reader for :class:`R1CSConstraintSystem` records over ``field``."""

    def _read(stream: TextIO) -> ConstraintSystem[Any]:
        return R1CSConstraintSystem.read(stream, field)

    return _read


def compliance_predicate_to_text(predicate: CompliancePredicate) -> str:
    """Serialize ``predicate`` to a string."""

    buffer = io.StringIO()
    write_compliance_predicate(predicate, buffer)
    return buffer.getvalue()


def compliance_predicate_from_text(
    text: str,
    *,
    read_constraint_system: ConstraintSystemReader,
    field: Field[Any] | None = None,
) -> CompliancePredicate:
    """Deserialize a predicate from a string."""

    return read_compliance_predicate(
        io.StringIO(text),
        read_constraint_system=read_constraint_system,
        field=field,
    )


def save_compliance_predicate(predicate: CompliancePredicate, path: str | Path) -> Path:
    """Write ``predicate`` to ``path``, creating parent directories.

    Returns
    -------
    pathlib.Path
        Output path.
    """

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="\n") as handle:
        write_compliance_predicate(predicate, handle)
    return output_path


def load_compliance_predicate(
    path: str | Path,
    *,
    field: Field[Any] | None = None,
    read_constraint_system: ConstraintSystemReader | None = None,
) -> CompliancePredicate:
    """Read a predicate from ``path``.

    Parameters
    ----------
    path : str | pathlib.Path
        Source file.
    field : Field | None, optional
        Field for the reference :class:`R1CSConstraintSystem` reader and for
        the predicate itself.
    read_constraint_system : Callable[[TextIO], ConstraintSystem] | None, optional
        Custom constraint-system reader. Takes precedence over ``field``.

    Raises
    ------
    ValueError
        If neither ``field`` nor ``read_constraint_system`` is given.
    """

    if read_constraint_system is None:
        if field is None:
            raise ValueError("either field or read_constraint_system is required")
        read_constraint_system = r1cs_reader(field)

    with Path(path).open("r", encoding="utf-8") as handle:
        return read_compliance_predicate(handle, read_constraint_system=read_constraint_system, field=field)


__all__ = [
    "ConstraintSystemReader",
    "compliance_predicate_from_text",
    "compliance_predicate_to_text",
    "load_compliance_predicate",
    "r1cs_reader",
    "read_compliance_predicate",
    "save_compliance_predicate",
    "write_compliance_predicate",
]
