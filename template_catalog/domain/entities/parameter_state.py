"""Domain entities produced when validating and resolving parameter input."""

from __future__ import annotations

from dataclasses import dataclass, field

MISSING_REQUIRED = "missing_required"
TYPE_MISMATCH = "type_mismatch"
OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one value against one parameter definition."""

    is_valid: bool
    code: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, code: str, message: str) -> "ValidationOutcome":
        return cls(is_valid=False, code=code, message=message)


@dataclass(frozen=True)
class ParameterState:
    """Effective state of a parameter once dependency rules are applied."""

    visible: bool = True
    required: bool = False
    enabled: bool = True


@dataclass(frozen=True)
class ParameterValidation:
    """Validation of a whole set of parameter values for a template."""

    errors: dict[str, ValidationOutcome] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)
    states: dict[str, ParameterState] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


__all__ = [
    "MISSING_REQUIRED",
    "OUT_OF_RANGE",
    "TYPE_MISMATCH",
    "ParameterState",
    "ParameterValidation",
    "ValidationOutcome",
]
