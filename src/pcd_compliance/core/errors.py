"""Exception types raised by the compliance-predicate layer."""

from __future__ import annotations


class ComplianceError(ValueError):
    """Base class for compliance-predicate errors."""


class ShapeMismatchError(ComplianceError):
    """A supplied argument disagrees with a declared predicate shape.

    Notes
    -----
    This signals a bug in the caller or in the predicate compiler. It is never
    converted into a ``False`` satisfaction result.
    """


class PredicateFormatError(ComplianceError):
    """A serialized predicate or constraint system stream is malformed."""


__all__ = ["ComplianceError", "PredicateFormatError", "ShapeMismatchError"]
