"""ORM models used by the application infrastructure."""

from .calculation_template import CalculationTemplateModel
from .store_entry import StoreEntryModel

__all__ = [
    "CalculationTemplateModel",
    "StoreEntryModel",
]
