"""Date parsing and PHP-style date formatting.

区块配置中的 date_format 采用 PHP date() 格式字符串（例如 "F j, Y"），
这里实现同样的格式化规则，名称固定为英文。
"""

from collections.abc import Callable
from datetime import UTC, datetime

import pytz
from loguru import logger

from src.modules.listings.domain.exceptions import MalformedDateError

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# 存储层常见的日期格式
_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _utc_offset(dt: datetime, colon: bool) -> str:
    offset = dt.utcoffset()
    seconds = int(offset.total_seconds()) if offset else 0
    sign = "+" if seconds >= 0 else "-"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    sep = ":" if colon else ""
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


def _days_in_month(dt: datetime) -> int:
    if dt.month == 12:
        return 31
    return (dt.replace(day=1, month=dt.month + 1) - dt.replace(day=1)).days


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _twelve_hour(dt: datetime) -> int:
    return dt.hour % 12 or 12


def _tz_offset_seconds(dt: datetime) -> str:
    offset = dt.utcoffset()
    return str(int(offset.total_seconds()) if offset else 0)


def _is_dst(dt: datetime) -> str:
    dst = dt.dst()
    return "1" if dst and dst.total_seconds() else "0"


def _iso_offset_or_z(dt: datetime) -> str:
    offset = _utc_offset(dt, colon=True)
    return "Z" if offset == "+00:00" else offset


# PHP date() 格式字符 -> 取值函数
_FORMAT_CHARS: dict[str, Callable[[datetime], str]] = {
    # Day
    "d": lambda dt: f"{dt.day:02d}",
    "D": lambda dt: _WEEKDAYS[dt.weekday()][:3],
    "j": lambda dt: str(dt.day),
    "l": lambda dt: _WEEKDAYS[dt.weekday()],
    "N": lambda dt: str(dt.isoweekday()),
    "S": lambda dt: _ordinal_suffix(dt.day),
    "w": lambda dt: str(dt.isoweekday() % 7),
    "z": lambda dt: str(dt.timetuple().tm_yday - 1),
    # Week
    "W": lambda dt: f"{dt.isocalendar()[1]:02d}",
    # Month
    "F": lambda dt: _MONTHS[dt.month - 1],
    "m": lambda dt: f"{dt.month:02d}",
    "M": lambda dt: _MONTHS[dt.month - 1][:3],
    "n": lambda dt: str(dt.month),
    "t": lambda dt: str(_days_in_month(dt)),
    # Year
    "L": lambda dt: "1" if _is_leap(dt.year) else "0",
    "o": lambda dt: str(dt.isocalendar()[0]),
    "Y": lambda dt: str(dt.year),
    "y": lambda dt: f"{dt.year % 100:02d}",
    # Time
    "a": lambda dt: "am" if dt.hour < 12 else "pm",
    "A": lambda dt: "AM" if dt.hour < 12 else "PM",
    "g": lambda dt: str(_twelve_hour(dt)),
    "G": lambda dt: str(dt.hour),
    "h": lambda dt: f"{_twelve_hour(dt):02d}",
    "H": lambda dt: f"{dt.hour:02d}",
    "i": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: f"{dt.second:02d}",
    "u": lambda dt: f"{dt.microsecond:06d}",
    "v": lambda dt: f"{dt.microsecond // 1000:03d}",
    # Timezone
    "e": lambda dt: str(getattr(dt.tzinfo, "zone", None) or dt.tzname() or "UTC"),
    "I": _is_dst,
    "O": lambda dt: _utc_offset(dt, colon=False),
    "P": lambda dt: _utc_offset(dt, colon=True),
    "p": _iso_offset_or_z,
    "T": lambda dt: dt.tzname() or "UTC",
    "Z": _tz_offset_seconds,
    # Full date/time
    "c": lambda dt: format_php_date(dt, "Y-m-d\\TH:i:sP"),
    "r": lambda dt: format_php_date(dt, "D, d M Y H:i:s O"),
    "U": lambda dt: str(int(dt.timestamp())),
}


def format_php_date(dt: datetime, pattern: str) -> str:
    """Format a datetime with a PHP date() pattern.

    A backslash escapes the following character.
    """
    out: list[str] = []
    escaped = False
    for char in pattern:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            formatter = _FORMAT_CHARS.get(char)
            out.append(formatter(dt) if formatter else char)
    return "".join(out)


class DateFormatter:
    """Parses raw stored date values and formats them for display."""

    def __init__(self, timezone: str = "UTC"):
        self.timezone = pytz.timezone(timezone)

    def parse(self, value: str) -> datetime:
        """Parse a raw date value.

        Naive values are interpreted in the site timezone.

        Raises:
            MalformedDateError: the value matches no known date format.
        """
        date_str = value.strip() if value else ""
        if not date_str:
            raise MalformedDateError(value)

        dt: datetime | None = None

        if date_str.isdigit():
            # Unix 时间戳
            try:
                dt = datetime.fromtimestamp(int(date_str), tz=UTC)
            except (OverflowError, OSError, ValueError) as e:
                raise MalformedDateError(value) from e
            return dt.astimezone(self.timezone)

        try:
            dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        except ValueError:
            for fmt in _FORMATS:
                try:
                    dt = datetime.strptime(date_str, fmt)
                    break
                except ValueError:
                    continue

        if dt is None:
            raise MalformedDateError(value)

        if dt.tzinfo is None:
            dt = self.timezone.localize(dt)
        return dt

    def format(self, value: str, pattern: str) -> str:
        """Format a raw date value; malformed input is returned unchanged."""
        try:
            return format_php_date(self.parse(value), pattern)
        except MalformedDateError:
            logger.debug(f"Malformed date value '{value}', using raw value")
            return value
