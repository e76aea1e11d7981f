"""Messages, local data, and witnesses exchanged with compliance predicates.

A :class:`Message` travels along an edge of the PCD computation DAG: the
outgoing message of one node becomes an incoming message of the next.
:class:`LocalData` and :class:`ComplianceWitness` are held only by the node
computing the proof and are never forwarded.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any

from pcd_compliance.core.contracts import Field


@dataclass(frozen=True, slots=True)
class Message:
    """Typed payload exchanged between predicate instances.

    Parameters
    ----------
    type : int
        Identifier of the node type that produced the message.
    payload : tuple[Any, ...]
        Field elements carried by the message.

    Raises
    ------
    ValueError
        If ``type`` is negative.
    """

    type: int
    payload: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if self.type < 0:
            raise ValueError("message type must be >= 0")
        object.__setattr__(self, "payload", tuple(self.payload))

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    def as_variable_assignment(self, field: Field[Any]) -> list[Any]:
        """Return ``[type, *payload]`` as field elements.

        The type is lifted with ``field.element`` and therefore reduced modulo
        the field characteristic.
        """

        return [field.element(self.type), *self.payload]


@dataclass(frozen=True, slots=True)
class LocalData:
    """Private per-node input that is never forwarded downstream."""

    payload: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", tuple(self.payload))

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    def as_variable_assignment(self) -> list[Any]:
        return list(self.payload)


@dataclass(frozen=True, slots=True)
class ComplianceWitness:
    """Private assignment completing the constraint system's variables."""

    payload: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", tuple(self.payload))

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    def as_variable_assignment(self) -> list[Any]:
        return list(self.payload)


def format_message(message: Message, field: Field[Any]) -> str:
    """Render a message's type and payload for diagnostics."""

    values = ", ".join(field.format(value) for value in message.payload)
    return f"Message(type={message.type}, payload_length={message.payload_length}, payload=[{values}])"


def log_message(
    message: Message,
    field: Field[Any],
    *,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Emit :func:`format_message` output on ``logger``."""

    target = logger if logger is not None else logging.getLogger(__name__)
    if target.isEnabledFor(level):
        target.log(level, "%s", format_message(message, field))


def messages_from_payloads(
    field: Field[Any],
    *,
    type: int,
    payloads: Sequence[Sequence[int]],
) -> tuple[Message, ...]:
    """Build same-type messages from integer payloads."""

    return tuple(
        Message(type=type, payload=tuple(field.element(value) for value in payload))
        for payload in payloads
    )


__all__ = [
    "ComplianceWitness",
    "LocalData",
    "Message",
    "format_message",
    "log_message",
    "messages_from_payloads",
]
