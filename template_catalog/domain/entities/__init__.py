"""Domain entities exposed by the application."""

from .calculation_template import (
    CONDITION_OPERATORS,
    DEPENDENCY_ACTIONS,
    DIFFICULTY_LEVELS,
    PARAMETER_TYPES,
    CalculationTemplate,
    ParameterCondition,
    ParameterDependency,
    ParameterPattern,
    TemplateParameter,
)
from .parameter_state import (
    MISSING_REQUIRED,
    OUT_OF_RANGE,
    TYPE_MISMATCH,
    ParameterState,
    ParameterValidation,
    ValidationOutcome,
)
from .template_category import TEMPLATE_CATEGORIES, TemplateCategory, TemplateSubcategory
from .template_filters import DEFAULT_SORT, SORT_OPTIONS, TemplateFilters
from .template_stats import CategoryStats, TemplateStats

__all__ = [
    "CONDITION_OPERATORS",
    "DEPENDENCY_ACTIONS",
    "DIFFICULTY_LEVELS",
    "PARAMETER_TYPES",
    "CalculationTemplate",
    "ParameterCondition",
    "ParameterDependency",
    "ParameterPattern",
    "TemplateParameter",
    "MISSING_REQUIRED",
    "OUT_OF_RANGE",
    "TYPE_MISMATCH",
    "ParameterState",
    "ParameterValidation",
    "ValidationOutcome",
    "TEMPLATE_CATEGORIES",
    "TemplateCategory",
    "TemplateSubcategory",
    "DEFAULT_SORT",
    "SORT_OPTIONS",
    "TemplateFilters",
    "CategoryStats",
    "TemplateStats",
]
