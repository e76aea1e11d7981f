"""Random predicates, messages, and satisfying instances.

All randomness flows through a caller-supplied ``numpy.random.Generator`` so
results are reproducible from a seed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from pcd_compliance.algebra.field import PrimeField
from pcd_compliance.r1cs.constraint_system import LinearCombination, R1CSConstraint, R1CSConstraintSystem

from .compliance import CompliancePredicate
from .inputs import compliance_predicate_auxiliary_input, compliance_predicate_primary_input
from .messages import ComplianceWitness, LocalData, Message


@dataclass(frozen=True, slots=True)
class ComplianceInstance:
    """A predicate together with arguments that satisfy it."""

    predicate: CompliancePredicate
    outgoing_message: Message
    incoming_messages: tuple[Message, ...]
    local_data: LocalData
    witness: ComplianceWitness


def random_payload(field: PrimeField, length: int, rng: np.random.Generator) -> tuple[Any, ...]:
    """Draw ``length`` random field elements."""

    return tuple(field.random_element(rng) for _ in range(length))


def random_message(
    field: PrimeField,
    *,
    type: int,
    payload_length: int,
    rng: np.random.Generator,
) -> Message:
    """Draw a message with a random payload."""

    return Message(type=type, payload=random_payload(field, payload_length, rng))


def _random_combination(
    field: PrimeField,
    n_variables: int,
    rng: np.random.Generator,
    *,
    max_terms: int,
) -> LinearCombination:
    n_terms = int(rng.integers(1, max_terms + 1))
    indices = sorted({int(index) for index in rng.integers(0, n_variables, size=n_terms)})
    return LinearCombination(tuple((index, field.random_element(rng)) for index in indices))


def random_satisfiable_constraint_system(
    field: PrimeField,
    *,
    num_public_inputs: int,
    assignment: Sequence[Any],
    num_constraints: int,
    rng: np.random.Generator,
    max_terms: int = 3,
) -> R1CSConstraintSystem:
    """Draw a constraint system satisfied by ``[1, *assignment]``.

    Parameters
    ----------
    field : PrimeField
        Field of the constraint system.
    num_public_inputs : int
        Public input count, the constant wire included.
    assignment : Sequence[Any]
        Primary input followed by auxiliary input.
    num_constraints : int
        Number of rows to draw.
    rng : numpy.random.Generator
        Random generator.
    max_terms : int, optional
        Upper bound on terms in each random ``a`` and ``b`` combination.

    Returns
    -------
    R1CSConstraintSystem
        Constraint system with ``len(assignment) + 1`` variables.

    Notes
    -----
    Each row has random ``a`` and ``b``; ``c`` places ``<a,z> * <b,z>`` on the
    constant wire.
    """

    full = [field.one(), *assignment]
    constraints: list[R1CSConstraint] = []
    for _ in range(num_constraints):
        a = _random_combination(field, len(full), rng, max_terms=max_terms)
        b = _random_combination(field, len(full), rng, max_terms=max_terms)
        product = a.evaluate(full, field) * b.evaluate(full, field)
        constraints.append(R1CSConstraint(a, b, LinearCombination(((0, product),))))

    return R1CSConstraintSystem(
        field=field,
        n_public_inputs=num_public_inputs,
        n_total_variables=len(full),
        constraints=tuple(constraints),
    )


def random_compliance_instance(
    field: PrimeField,
    *,
    max_arity: int,
    rng: np.random.Generator,
    arity: int | None = None,
    max_payload_length: int = 4,
    num_constraints: int = 4,
    name: int = 0,
    type: int = 1,
) -> ComplianceInstance:
    """Draw a well-formed predicate and a satisfying set of arguments.

    Parameters
    ----------
    field : PrimeField
        Field of the constraint system.
    max_arity : int
        Number of incoming slots.
    rng : numpy.random.Generator
        Random generator.
    arity : int | None, optional
        Number of incoming messages to supply. Drawn from ``[0, max_arity]``
        when omitted.
    max_payload_length : int, optional
        Upper bound on every drawn length.
    num_constraints : int, optional
        Number of constraint rows.
    name, type : int, optional
        Predicate identifiers. ``type`` is also used for incoming messages.

    Returns
    -------
    ComplianceInstance
        Predicate and arguments for which ``is_satisfied`` holds.
    """

    def draw_length() -> int:
        return int(rng.integers(0, max_payload_length + 1))

    incoming_lengths = tuple(draw_length() for _ in range(max_arity))
    outgoing_length = draw_length()
    local_data_length = draw_length()
    witness_length = draw_length()
    if arity is None:
        arity = int(rng.integers(0, max_arity + 1))

    outgoing = random_message(field, type=type, payload_length=outgoing_length, rng=rng)
    incoming = tuple(
        random_message(field, type=type, payload_length=incoming_lengths[slot], rng=rng)
        for slot in range(arity)
    )
    local_data = LocalData(random_payload(field, local_data_length, rng))
    witness = ComplianceWitness(random_payload(field, witness_length, rng))

    primary = compliance_predicate_primary_input(outgoing, outgoing_message_payload_length=outgoing_length)
    auxiliary = compliance_predicate_auxiliary_input(
        incoming,
        local_data,
        witness,
        incoming_message_payload_lengths=incoming_lengths,
        local_data_length=local_data_length,
        witness_length=witness_length,
        field=field,
    )
    constraint_system = random_satisfiable_constraint_system(
        field,
        num_public_inputs=outgoing_length + 1,
        assignment=[*primary, *auxiliary],
        num_constraints=num_constraints,
        rng=rng,
    )

    predicate = CompliancePredicate(
        name=name,
        type=type,
        constraint_system=constraint_system,
        outgoing_message_payload_length=outgoing_length,
        max_arity=max_arity,
        incoming_message_payload_lengths=incoming_lengths,
        local_data_length=local_data_length,
        witness_length=witness_length,
    )
    return ComplianceInstance(
        predicate=predicate,
        outgoing_message=outgoing,
        incoming_messages=incoming,
        local_data=local_data,
        witness=witness,
    )


def random_compliance_predicate(
    field: PrimeField,
    *,
    max_arity: int,
    rng: np.random.Generator,
    **kwargs: Any,
) -> CompliancePredicate:
    """Draw a well-formed predicate. See :func:`random_compliance_instance`."""

    return random_compliance_instance(field, max_arity=max_arity, rng=rng, **kwargs).predicate


__all__ = [
    "ComplianceInstance",
    "random_compliance_instance",
    "random_compliance_predicate",
    "random_message",
    "random_payload",
    "random_satisfiable_constraint_system",
]
