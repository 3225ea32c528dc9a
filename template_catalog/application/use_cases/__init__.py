"""Aggregate application use cases."""

from .catalog import CatalogQueryEngine, get_template_stats
from .parameters import resolve_states, validate_value

__all__ = [
    "CatalogQueryEngine",
    "get_template_stats",
    "resolve_states",
    "validate_value",
]
