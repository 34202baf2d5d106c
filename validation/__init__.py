from .field_rules import (
    Label, Required, Optional, TypeIs, MinLength, MaxLength, ValueKind,
    ValidationOutcome, RuleSet, as_id, field, rules, validate_fields,
)
from .request_validation import validate_body, validate_query, parse_id_list, id_list

__all__ = [
    "Label", "Required", "Optional", "TypeIs", "MinLength", "MaxLength", "ValueKind",
    "ValidationOutcome", "RuleSet", "as_id", "field", "rules", "validate_fields",
    "validate_body", "validate_query", "parse_id_list", "id_list",
]
