from .catalog import (
    CalculationTemplateRead,
    CategoryStatsRead,
    FavoriteToggleRead,
    ParameterConditionRead,
    ParameterDefaultsRead,
    ParameterDependencyRead,
    ParameterPatternRead,
    ParameterStateRead,
    ParameterValidationRead,
    ParameterValuesPayload,
    TemplateCategoryRead,
    TemplateParameterRead,
    TemplateStatsRead,
    TemplateSubcategoryRead,
    ValidationOutcomeRead,
)

__all__ = [
    "CalculationTemplateRead",
    "CategoryStatsRead",
    "FavoriteToggleRead",
    "ParameterConditionRead",
    "ParameterDefaultsRead",
    "ParameterDependencyRead",
    "ParameterPatternRead",
    "ParameterStateRead",
    "ParameterValidationRead",
    "ParameterValuesPayload",
    "TemplateCategoryRead",
    "TemplateParameterRead",
    "TemplateStatsRead",
    "TemplateSubcategoryRead",
    "ValidationOutcomeRead",
]
