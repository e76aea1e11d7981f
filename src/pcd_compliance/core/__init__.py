"""Core contracts, errors, and config helpers for compliance predicates."""

from .config_loading import (
    SUPPORTED_CONFIG_SUFFIXES,
    coerce_non_negative_int,
    load_config_mapping,
    validate_allowed_keys,
    validate_required_keys,
)
from .contracts import ConstraintSystem, Field, FieldElement
from .errors import ComplianceError, PredicateFormatError, ShapeMismatchError

__all__ = [
    "ComplianceError",
    "ConstraintSystem",
    "Field",
    "FieldElement",
    "PredicateFormatError",
    "SUPPORTED_CONFIG_SUFFIXES",
    "ShapeMismatchError",
    "coerce_non_negative_int",
    "load_config_mapping",
    "validate_allowed_keys",
    "validate_required_keys",
]
