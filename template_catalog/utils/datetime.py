"""Timezone helpers for template timestamps."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Any, Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from template_catalog.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "America/Guayaquil"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _offset_timezone(name: str) -> tzinfo | None:
    """Return a fixed-offset timezone for names like ``UTC-05:00``."""

    match = _UTC_OFFSET.match(name)
    if match is None:
        return None
    delta = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-delta if match.group("sign") == "-" else delta)


def _lookup_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return _offset_timezone(name) or ZoneInfo(_DEFAULT_TIMEZONE)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone named by ``APP_TIMEZONE``.

    IANA names and ``UTC±HH:MM`` offsets are accepted; anything else falls
    back to ``America/Guayaquil``.
    """

    configured = (get_settings().app_timezone or "").strip()
    return _lookup_timezone(configured or _DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app timezone, assuming it for naive values."""

    if value is None:
        return None
    app_tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=app_tz)
    return value.astimezone(app_tz)


def parse_app_datetime(value: Any) -> datetime | None:
    """Coerce a record timestamp into an aware datetime in the app timezone.

    Accepts ``datetime`` and ``date`` instances and ISO-8601 strings (a trailing
    ``Z`` is read as UTC). Returns ``None`` for missing or unparseable values so
    callers can treat them as "unknown".
    """

    if isinstance(value, datetime):
        return ensure_app_timezone(value)
    if isinstance(value, date):
        return ensure_app_timezone(datetime.combine(value, time.min))
    if not isinstance(value, str) or not value.strip():
        return None

    candidate = value.strip()
    if candidate[-1] in "Zz":
        candidate = candidate[:-1] + "+00:00"
    try:
        return ensure_app_timezone(datetime.fromisoformat(candidate))
    except ValueError:
        return None
