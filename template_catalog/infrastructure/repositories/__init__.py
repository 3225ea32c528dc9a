"""Repository implementations for infrastructure layer."""

from .calculation_template_repository import CalculationTemplateRepository
from .favorites_repository import (
    DEFAULT_FAVORITES_KEY,
    FavoritesRepository,
    favorites_key,
)

__all__ = [
    "CalculationTemplateRepository",
    "DEFAULT_FAVORITES_KEY",
    "FavoritesRepository",
    "favorites_key",
]
