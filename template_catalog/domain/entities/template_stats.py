"""Domain entities with aggregate statistics over a template list."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryStats:
    """Aggregates for the templates of a single category."""

    count: int
    avg_rating: float
    total_usage: int


@dataclass(frozen=True)
class TemplateStats:
    """Aggregates derived on demand from an arbitrary template list."""

    total: int
    verified_count: int
    avg_rating: float
    total_usage: int
    trending_count: int
    popular_count: int
    by_category: dict[str, CategoryStats] = field(default_factory=dict)
    by_difficulty: dict[str, int] = field(default_factory=dict)


__all__ = ["CategoryStats", "TemplateStats"]
