"""
Date-parts model for user-entered dates.

A date is entered as local calendar fields plus a UTC offset in whole
hours. ``DateParts`` validates the fields and converts them to the
ISO-8601 UTC instant stored in ``docProps/core.xml``.

Example:
    >>> DateParts(2024, 1, 1, hour=1, offset=5).to_utc_instant()
    '2023-12-31T20:00:00.000Z'
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ..constants import MAX_UTC_OFFSET, MIN_UTC_OFFSET

_LOCAL_PATTERN = re.compile(
    r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[ T](\d{1,2}):(\d{1,2})(?::(\d{1,2}))?)?\s*$"
)

# W3CDTF profile: YYYY, YYYY-MM, YYYY-MM-DD, or a date-time with optional
# seconds, fraction and zone designator
_W3CDTF_PATTERN = re.compile(
    r"^(\d{4})(?:-(\d{2})(?:-(\d{2})"
    r"(?:[Tt](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d+))?)?"
    r"([Zz]|[+-]\d{2}(?::?\d{2})?)?)?)?)?$"
)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a Gregorian month.

    Raises:
        ValueError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return calendar.monthrange(year, month)[1]


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 / W3CDTF string into an aware UTC datetime.

    Reduced precision (``2024``, ``2024-05``) fills the missing fields with
    their lowest value. Values without a zone are taken as UTC.

    Raises:
        ValueError: If the string is not ISO-8601 or a field is out of range
    """
    match = _W3CDTF_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Not an ISO-8601 date-time: {value!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()

    tz = timezone.utc
    if zone and zone not in ("Z", "z"):
        sign = -1 if zone[0] == "-" else 1
        digits = zone[1:].replace(":", "")
        delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:] or 0))
        tz = timezone(sign * delta)

    microsecond = int((fraction or "").ljust(6, "0")[:6])
    parsed = datetime(
        int(year),
        int(month or 1),
        int(day or 1),
        int(hour or 0),
        int(minute or 0),
        int(second or 0),
        microsecond,
        tzinfo=tz,
    )
    return parsed.astimezone(timezone.utc)


def format_instant(instant: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:mm:ss.sssZ`` in UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    utc = instant.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def is_iso_instant(value: object) -> bool:
    """True if value is a string that parses as an ISO-8601 date-time."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parse_instant(value)
    except ValueError:
        return False
    return True


def validate_offset(offset: int) -> int:
    """Check a UTC offset is a whole number of hours in [-12, 14]."""
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ValueError(f"UTC offset must be an integer, got {offset!r}")
    if not MIN_UTC_OFFSET <= offset <= MAX_UTC_OFFSET:
        raise ValueError(
            f"UTC offset must be between {MIN_UTC_OFFSET} and +{MAX_UTC_OFFSET}, got {offset}"
        )
    return offset


@dataclass(frozen=True)
class DateParts:
    """Local calendar fields plus a UTC offset in hours.

    Attributes:
        year: Four-digit year
        month: 1-12
        day: 1 to the length of the month
        hour: 0-23
        minute: 0-59
        second: 0-59
        offset: Hours from UTC, -12 to +14

    Raises:
        ValueError: If any field is out of range
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    offset: int = 0

    def __post_init__(self) -> None:
        for name in ("year", "month", "day", "hour", "minute", "second"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be between 1 and 9999, got {self.year}")
        max_day = days_in_month(self.year, self.month)
        if not 1 <= self.day <= max_day:
            raise ValueError(f"Day must be between 1 and {max_day}, got {self.day}")
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {self.minute}")
        if not 0 <= self.second <= 59:
            raise ValueError(f"Second must be between 0 and 59, got {self.second}")
        validate_offset(self.offset)

    def to_datetime(self) -> datetime:
        """The UTC instant these parts denote, as an aware datetime."""
        midnight = datetime(self.year, self.month, self.day, tzinfo=timezone.utc)
        try:
            return midnight + timedelta(
                hours=self.hour - self.offset, minutes=self.minute, seconds=self.second
            )
        except OverflowError as e:
            raise ValueError(f"{self} falls outside the representable date range") from e

    def to_utc_instant(self) -> str:
        """Serialize as an ISO-8601 UTC instant (``YYYY-MM-DDTHH:mm:ss.sssZ``).

        The offset is subtracted from the hour with calendar arithmetic, so
        the result may fall on a different day, month or year.
        """
        return format_instant(self.to_datetime())

    @classmethod
    def from_iso(cls, value: str, offset: int = 0) -> "DateParts":
        """Express a stored ISO instant as local parts at the given offset."""
        validate_offset(offset)
        local = parse_instant(value) + timedelta(hours=offset)
        return cls(
            year=local.year,
            month=local.month,
            day=local.day,
            hour=local.hour,
            minute=local.minute,
            second=local.second,
            offset=offset,
        )

    @classmethod
    def parse_local(cls, text: str, offset: int = 0) -> "DateParts":
        """Parse ``YYYY-MM-DD[ HH:MM[:SS]]`` as local time at the given offset.

        Raises:
            ValueError: If the text does not match or a field is out of range
        """
        match = _LOCAL_PATTERN.match(text)
        if not match:
            raise ValueError(f"Expected YYYY-MM-DD HH:MM:SS, got {text!r}")
        year, month, day, hour, minute, second = (int(g) if g else 0 for g in match.groups())
        return cls(year, month, day, hour, minute, second, offset)

    def __str__(self) -> str:
        sign = "+" if self.offset >= 0 else ""
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d} "
            f"(UTC{sign}{self.offset})"
        )
