"""Conversion of the legacy ``/Date(...)/`` timestamps used by the export API."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
import logging
import re

LOGGER = logging.getLogger(__name__)

LEGACY_DATE_PREFIX = "/Date("

_LEGACY_DATE_RE = re.compile(r"^/Date\((?P<millis>-?\d+)(?:(?P<sign>[+-])(?P<hours>\d{2})(?P<minutes>\d{2}))?\)/$")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_legacy_date(value: str) -> datetime | None:
    """Parse ``/Date(<millis>[+-HHMM])/`` into an aware datetime.

    The instant is expressed in the embedded offset, or UTC if there is none.
    Returns ``None`` when ``value`` does not follow the format.
    """

    match = _LEGACY_DATE_RE.match(value)
    if not match:
        return None
    try:
        tz = timezone.utc
        if match.group("sign"):
            offset = timedelta(hours=int(match.group("hours")), minutes=int(match.group("minutes")))
            tz = timezone(offset if match.group("sign") == "+" else -offset)
        instant = _EPOCH + timedelta(milliseconds=int(match.group("millis")))
        return instant.astimezone(tz)
    except (ValueError, OverflowError):
        return None


def convert_dates(value: Any) -> Any:
    """Replace legacy date strings anywhere in a parsed JSON tree with ISO-8601.

    Objects are updated in place, lists are rebuilt. All other values are
    returned unchanged, which makes the conversion idempotent.
    """

    if isinstance(value, list):
        return [convert_dates(item) for item in value]
    if isinstance(value, dict):
        for key in value:
            value[key] = convert_dates(value[key])
        return value
    if isinstance(value, str) and value.startswith(LEGACY_DATE_PREFIX):
        parsed = parse_legacy_date(value)
        if parsed is None:
            LOGGER.debug("Leaving unparseable date %r untouched", value)
            return value
        return parsed.isoformat(timespec="seconds")
    return value


__all__ = ["LEGACY_DATE_PREFIX", "convert_dates", "parse_legacy_date"]
