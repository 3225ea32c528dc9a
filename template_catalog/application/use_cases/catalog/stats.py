"""Use case for aggregating statistics over a template list."""

from __future__ import annotations

from collections.abc import Sequence

from template_catalog.domain.entities import (
    DIFFICULTY_LEVELS,
    CalculationTemplate,
    CategoryStats,
    TemplateStats,
)


def get_template_stats(templates: Sequence[CalculationTemplate]) -> TemplateStats:
    """Return aggregate statistics for ``templates``; an empty list averages to 0."""

    total = len(templates)
    avg_rating = (
        sum(template.rating for template in templates) / total if total else 0
    )

    grouped: dict[str, list[CalculationTemplate]] = {}
    for template in templates:
        grouped.setdefault(template.category, []).append(template)
    by_category = {
        category: CategoryStats(
            count=len(members),
            avg_rating=sum(member.rating for member in members) / len(members),
            total_usage=sum(member.usage_count for member in members),
        )
        for category, members in grouped.items()
    }

    by_difficulty = {level: 0 for level in DIFFICULTY_LEVELS}
    for template in templates:
        if template.difficulty in by_difficulty:
            by_difficulty[template.difficulty] += 1

    return TemplateStats(
        total=total,
        verified_count=sum(1 for template in templates if template.verified),
        avg_rating=avg_rating,
        total_usage=sum(template.usage_count for template in templates),
        trending_count=sum(1 for template in templates if template.trending),
        popular_count=sum(1 for template in templates if template.popular),
        by_category=by_category,
        by_difficulty=by_difficulty,
    )


__all__ = ["get_template_stats"]
