"""Persistence of a user's favorite templates as a keyed store entry."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from template_catalog.domain.errors import RepositoryUnavailableError
from template_catalog.infrastructure.models import StoreEntryModel

logger = logging.getLogger(__name__)

DEFAULT_FAVORITES_KEY = "template-favorites"


def favorites_key(owner: str | None, *, base_key: str = DEFAULT_FAVORITES_KEY) -> str:
    """Return the store key holding the favorites of ``owner``."""

    normalized = (owner or "").strip()
    return f"{base_key}:{normalized}" if normalized else base_key


class FavoritesRepository:
    """Read and write the JSON array of favorite template ids for one owner."""

    def __init__(self, session: Session, *, key: str = DEFAULT_FAVORITES_KEY) -> None:
        self.session = session
        self.key = key

    def load(self) -> list[str]:
        try:
            entry = self.session.get(StoreEntryModel, self.key)
        except SQLAlchemyError as exc:
            raise RepositoryUnavailableError(
                "No se pudieron cargar las plantillas favoritas"
            ) from exc
        if entry is None:
            return []
        if not isinstance(entry.value, list):
            logger.warning("Ignoring malformed favorites entry stored under %s", self.key)
            return []
        return [str(item) for item in entry.value if isinstance(item, (str, int))]

    def save(self, template_ids: Sequence[str]) -> None:
        payload = [str(template_id) for template_id in template_ids]
        try:
            entry = self.session.get(StoreEntryModel, self.key)
            if entry is None:
                entry = StoreEntryModel(key=self.key, value=payload)
            else:
                entry.value = payload
            self.session.add(entry)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise RepositoryUnavailableError(
                "No se pudieron guardar las plantillas favoritas"
            ) from exc


__all__ = ["DEFAULT_FAVORITES_KEY", "FavoritesRepository", "favorites_key"]
