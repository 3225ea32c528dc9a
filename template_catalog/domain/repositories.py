"""Interfaces the catalog core expects from its persistence collaborators."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol


class TemplateSource(Protocol):
    """Supplies the raw, unfiltered collection of template records."""

    def list_records(self) -> Sequence[Mapping[str, Any]]:
        """Return JSON-shaped template records.

        Raises ``RepositoryUnavailableError`` when the backing store fails.
        """


class FavoritesStore(Protocol):
    """Persists the favorites list of a single owner."""

    def load(self) -> list[str]:
        """Return the persisted template ids, or an empty list."""

    def save(self, template_ids: Sequence[str]) -> None:
        """Replace the persisted list with ``template_ids``."""


__all__ = ["FavoritesStore", "TemplateSource"]
