"""Compliance predicates, their messages, and input layout adapters."""

from .compliance import CompliancePredicate, WellFormednessReport
from .config import (
    compliance_predicate_from_config,
    compliance_predicate_from_config_file,
    compliance_predicate_shape_config,
)
from .generators import (
    ComplianceInstance,
    random_compliance_instance,
    random_compliance_predicate,
    random_message,
    random_payload,
    random_satisfiable_constraint_system,
)
from .inputs import (
    auxiliary_input_length,
    compliance_predicate_auxiliary_input,
    compliance_predicate_primary_input,
)
from .messages import (
    ComplianceWitness,
    LocalData,
    Message,
    format_message,
    log_message,
    messages_from_payloads,
)
from .serialization import (
    compliance_predicate_from_text,
    compliance_predicate_to_text,
    load_compliance_predicate,
    r1cs_reader,
    read_compliance_predicate,
    save_compliance_predicate,
    write_compliance_predicate,
)
from .tally import (
    TALLY_PAYLOAD_LENGTH,
    TALLY_TYPE,
    tally_compliance_predicate,
    tally_local_data,
    tally_message,
    tally_outgoing_message,
    tally_witness,
)

__all__ = [
    "ComplianceInstance",
    "CompliancePredicate",
    "ComplianceWitness",
    "LocalData",
    "Message",
    "TALLY_PAYLOAD_LENGTH",
    "TALLY_TYPE",
    "WellFormednessReport",
    "auxiliary_input_length",
    "compliance_predicate_auxiliary_input",
    "compliance_predicate_from_config",
    "compliance_predicate_from_config_file",
    "compliance_predicate_from_text",
    "compliance_predicate_primary_input",
    "compliance_predicate_shape_config",
    "compliance_predicate_to_text",
    "format_message",
    "load_compliance_predicate",
    "log_message",
    "messages_from_payloads",
    "r1cs_reader",
    "random_compliance_instance",
    "random_compliance_predicate",
    "random_message",
    "random_payload",
    "random_satisfiable_constraint_system",
    "read_compliance_predicate",
    "save_compliance_predicate",
    "tally_compliance_predicate",
    "tally_local_data",
    "tally_message",
    "tally_outgoing_message",
    "tally_witness",
    "write_compliance_predicate",
]
