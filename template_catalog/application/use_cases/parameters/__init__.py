"""Parameter schema and dependency use cases."""

from .conditions import evaluate_condition
from .initial_values import build_initial_values
from .records import derive_difficulty, parse_parameter, parse_template_record
from .resolve_states import resolve_states
from .schema import ensure_valid_parameters, find_dependency_cycle
from .validators import validate_parameter_values, validate_value

__all__ = [
    "build_initial_values",
    "derive_difficulty",
    "ensure_valid_parameters",
    "evaluate_condition",
    "find_dependency_cycle",
    "parse_parameter",
    "parse_template_record",
    "resolve_states",
    "validate_parameter_values",
    "validate_value",
]
