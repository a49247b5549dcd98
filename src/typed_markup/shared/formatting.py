"""Date and URL formatting collaborators used by dialect vocabularies.

Every function here is pure: the time zone is an explicit argument and no
formatter state is shared between calls.
"""

from datetime import date, datetime, timezone, tzinfo
from pathlib import PurePath
from typing import Any, Protocol, Union, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# English names regardless of the process locale.
_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

TimeZoneLike = Union[tzinfo, str, None]


@runtime_checkable
class _HasGetURL(Protocol):
    def geturl(self) -> str: ...


URLRepresentable = Union[str, PurePath, _HasGetURL, Any]


def resolve_time_zone(time_zone: TimeZoneLike) -> tzinfo:
    """Resolve a ``tzinfo``, IANA zone name or ``None`` (UTC) to a ``tzinfo``."""
    if time_zone is None:
        return timezone.utc
    if isinstance(time_zone, tzinfo):
        return time_zone
    if isinstance(time_zone, str):
        if time_zone.upper() in ("UTC", "Z", "GMT"):
            return timezone.utc
        try:
            return ZoneInfo(time_zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {time_zone!r}") from e
    raise TypeError(f"Unsupported time zone value: {type(time_zone).__name__}")


def _localize(moment: Union[datetime, date], time_zone: TimeZoneLike) -> datetime:
    zone = resolve_time_zone(time_zone)
    if not isinstance(moment, datetime):
        # Plain dates carry no time of day; treat them as midnight in the zone.
        return datetime(moment.year, moment.month, moment.day, tzinfo=zone)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(zone)


def _format_offset(moment: datetime) -> str:
    offset = moment.utcoffset()
    total_minutes = int(offset.total_seconds() // 60) if offset else 0
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}{minutes:02d}"


def format_rss_date(
    moment: Union[datetime, date],
    time_zone: TimeZoneLike = None
) -> str:
    """Format a point in time the way RSS ``pubDate``/``lastBuildDate`` expect.

    Naive datetimes are interpreted as UTC, then converted to ``time_zone``.

    >>> format_rss_date(datetime(2019, 10, 5, 14, 30, tzinfo=timezone.utc))
    'Sat, 5 Oct 2019 14:30:00 +0000'
    """
    local = _localize(moment, time_zone)
    return (
        f"{_DAY_NAMES[local.weekday()]}, {local.day} "
        f"{_MONTH_NAMES[local.month - 1]} {local.year:04d} "
        f"{local.hour:02d}:{local.minute:02d}:{local.second:02d} "
        f"{_format_offset(local)}"
    )


def format_sitemap_date(
    moment: Union[datetime, date],
    time_zone: TimeZoneLike = None
) -> str:
    """Format a date-only ``YYYY-MM-DD`` string for sitemap ``lastmod``."""
    local = _localize(moment, time_zone)
    return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"


def url_string(value: URLRepresentable) -> str:
    """Return the canonical string form of a URL-like value."""
    if isinstance(value, str):
        return value
    if isinstance(value, PurePath):
        return value.as_posix()
    if isinstance(value, _HasGetURL):
        return value.geturl()
    if value is None:
        raise TypeError("URL value cannot be None")
    return str(value)
