"""Domain entity describing a catalog query."""

from dataclasses import dataclass

SORT_OPTIONS: tuple[str, ...] = ("popular", "rating", "trending", "recent", "name")
DEFAULT_SORT = "popular"


@dataclass(frozen=True)
class TemplateFilters:
    """Ephemeral filters supplied with every catalog query.

    Every field is optional; an unset field never excludes a template.
    """

    category: str | None = None
    subcategory: str | None = None
    search_term: str | None = None
    sort_by: str = DEFAULT_SORT
    show_only_favorites: bool = False
    show_only_verified: bool = False
    difficulty: str | None = None
    profession: str | None = None

    @property
    def effective_sort(self) -> str:
        """Return ``sort_by`` or the default ordering when it is unknown."""

        if self.sort_by in SORT_OPTIONS:
            return self.sort_by
        return DEFAULT_SORT


__all__ = ["DEFAULT_SORT", "SORT_OPTIONS", "TemplateFilters"]
