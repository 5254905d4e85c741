"""
Calendar-day helpers.

Rows carry dates as ISO strings, sometimes bare days ("2024-05-01") and
sometimes timestamps with an offset ("2024-05-01T18:30:00+00:00"). Every
comparison in the services is done on local calendar days.
"""

import logging
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser, tz

from erp.core.config import settings

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, None]


def local_zone():
    if settings.TIMEZONE:
        return tz.gettz(settings.TIMEZONE) or tz.tzlocal()
    return tz.tzlocal()


def to_local_day(value: DateLike, zone=None) -> Optional[date]:
    """Reduce a date, datetime or ISO string to a local calendar day.

    Naive timestamps are taken to already be local. Returns None for
    missing, blank or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = parser.isoparse(value)
        except (ValueError, OverflowError):
            logger.warning("Ignoring unparseable date %r", value)
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(zone or local_zone())
        return value.date()
    return value


def local_today(zone=None) -> date:
    return datetime.now(zone or local_zone()).date()
