"""SQLAlchemy model for keyed JSON store entries."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.mssql import JSON as MSSQLJSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from template_catalog.infrastructure.database import Base
from template_catalog.utils import now_in_app_timezone

_entry_json_type = (
    JSONB().with_variant(JSON(), "sqlite").with_variant(MSSQLJSON(), "mssql")
)


class StoreEntryModel(Base):
    """A JSON document persisted under a stable string key."""

    __tablename__ = "store_entry"

    key = Column(String(150), primary_key=True)
    value = Column(_entry_json_type, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        onupdate=now_in_app_timezone,
    )


__all__ = ["StoreEntryModel"]
